"""SQLAlchemy repository implementations."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from landscaper.adapters.persistence.models import ClientModel, EmployeeModel, JobModel
from landscaper.application.ports.job_repo import JobRepository
from landscaper.domain.entities.job import Job, JobClient, JobEmployee

# ─── Mappers ─────────────────────────────────────────────────────────


def _client_to_domain(m: ClientModel) -> JobClient:
    return JobClient(
        id=m.id,
        name=m.name,
        address=m.address,
        city=m.city,
        state=m.state,
        zip_code=m.zip_code,
    )


def _employee_to_domain(m: EmployeeModel) -> JobEmployee:
    return JobEmployee(id=m.id, name=m.name)


def _job_to_domain(m: JobModel) -> Job:
    return Job(
        id=m.id,
        title=m.title,
        description=m.description,
        start_date=m.start_date,
        end_date=m.end_date,
        client=_client_to_domain(m.client) if m.client else None,
        assigned_to=_employee_to_domain(m.assigned_to) if m.assigned_to else None,
        status=m.status,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlJobRepository(JobRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    def _select_jobs(self):
        return select(JobModel).options(
            joinedload(JobModel.client),
            joinedload(JobModel.assigned_to),
        )

    async def get_by_id(self, job_id: str) -> Job | None:
        result = await self._s.execute(self._select_jobs().where(JobModel.id == job_id))
        m = result.unique().scalar_one_or_none()
        return _job_to_domain(m) if m else None

    async def get_scheduled_between(
        self,
        start: datetime,
        end: datetime,
        employee_id: str | None = None,
    ) -> list[Job]:
        stmt = self._select_jobs().where(
            JobModel.start_date >= start,
            JobModel.start_date < end,
        )
        if employee_id:
            stmt = stmt.where(JobModel.assigned_to_id == employee_id)
        result = await self._s.execute(stmt.order_by(JobModel.start_date, JobModel.id))
        return [_job_to_domain(m) for m in result.unique().scalars()]
