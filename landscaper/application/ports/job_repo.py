"""Port interface for reading scheduled jobs."""

from abc import ABC, abstractmethod
from datetime import datetime

from landscaper.domain.entities.job import Job


class JobRepository(ABC):
    @abstractmethod
    async def get_by_id(self, job_id: str) -> Job | None:
        ...

    @abstractmethod
    async def get_scheduled_between(
        self,
        start: datetime,
        end: datetime,
        employee_id: str | None = None,
    ) -> list[Job]:
        """Jobs starting in [start, end), optionally for one employee, by start time."""
        ...
