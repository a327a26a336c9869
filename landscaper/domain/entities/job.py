"""Job entity — a scheduled landscaping job with its client and assignee."""

from dataclasses import dataclass
from datetime import datetime

from landscaper.domain.entities.assignment import Assignment
from landscaper.domain.policies.job_address import JobAddress, parse_job_address, strip_job_address


@dataclass
class JobClient:
    id: str
    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    def full_address(self) -> str | None:
        """Build "street, city, state zip"; None when any part is missing."""
        parts = [self.address, self.city, self.state, self.zip_code]
        if not all(p and p.strip() for p in parts):
            return None
        return f"{self.address.strip()}, {self.city.strip()}, {self.state.strip()} {self.zip_code.strip()}"


@dataclass
class JobEmployee:
    id: str
    name: str


@dataclass
class Job:
    id: str
    title: str
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    client: JobClient | None = None
    assigned_to: JobEmployee | None = None
    status: str = "SCHEDULED"

    def custom_address(self) -> JobAddress | None:
        return parse_job_address(self.description)

    def notes(self) -> str:
        """Description text without the custom address block."""
        return strip_job_address(self.description)

    def site_address(self) -> str | None:
        """Address of the job site: custom block first, then the client's."""
        custom = self.custom_address()
        if custom:
            return custom.one_line()
        if self.client:
            return self.client.full_address()
        return None

    def to_assignment(self) -> Assignment:
        return Assignment(
            id=self.id,
            employee_id=self.assigned_to.id if self.assigned_to else None,
            start_time=self.start_date,
            end_time=self.end_date,
            title=self.title,
        )
