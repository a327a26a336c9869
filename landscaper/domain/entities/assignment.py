"""Assignment entity — one scheduled unit of work for an (optional) employee."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Assignment:
    id: str
    employee_id: str | None
    start_time: datetime | None
    end_time: datetime | None = None
    title: str = ""

    def is_assigned(self) -> bool:
        return bool(self.employee_id)

    def is_scheduled(self) -> bool:
        return self.start_time is not None
