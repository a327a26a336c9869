"""ScheduleConflictsUseCase — conflict reports over a day's jobs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from landscaper.application.ports.job_repo import JobRepository
from landscaper.domain.entities.assignment import Assignment
from landscaper.domain.entities.job import Job, JobEmployee
from landscaper.domain.policies.conflict_detection import conflict_map, employee_has_conflicts, find_conflicts
from landscaper.domain.policies.schedule_filters import day_bounds

logger = logging.getLogger(__name__)


@dataclass
class JobConflicts:
    """One job and the jobs it overlaps with."""

    job: Job
    conflicts: list[Job] = field(default_factory=list)


@dataclass
class StaffConflicts:
    """Whether one employee's jobs on a day overlap each other."""

    employee: JobEmployee
    job_count: int
    has_conflicts: bool


class ScheduleConflictsUseCase:
    def __init__(self, job_repo: JobRepository):
        self._jobs = job_repo

    async def for_day(self, day: date, employee_id: str | None = None) -> list[JobConflicts]:
        """Every job on *day* that overlaps another job of the same employee."""
        jobs = await self._load_day(day, employee_id)
        by_id = {j.id: j for j in jobs}
        clashes = conflict_map([j.to_assignment() for j in jobs])

        report = [
            JobConflicts(job=by_id[job_id], conflicts=[by_id[a.id] for a in others])
            for job_id, others in clashes.items()
        ]
        logger.info("Conflict scan for %s: %d/%d jobs conflicting", day, len(report), len(jobs))
        return report

    async def for_job(self, job_id: str) -> JobConflicts | None:
        """Conflicts of one stored job against the rest of its day.

        Returns None when the job does not exist.
        """
        job = await self._jobs.get_by_id(job_id)
        if job is None:
            return None
        if job.start_date is None or job.assigned_to is None:
            return JobConflicts(job=job)

        day_jobs = await self._load_day(job.start_date.date(), job.assigned_to.id)
        by_id = {j.id: j for j in day_jobs}
        others = find_conflicts(job.to_assignment(), [j.to_assignment() for j in day_jobs])
        return JobConflicts(job=job, conflicts=[by_id[a.id] for a in others])

    async def check_proposed(
        self,
        employee_id: str | None,
        start_time: datetime,
        end_time: datetime | None = None,
        exclude_job_id: str | None = None,
    ) -> list[Job]:
        """Conflicts a not-yet-saved (or edited) job would have.

        *exclude_job_id* is the id of the job being edited so it does not
        clash with its own stored version.
        """
        if not employee_id:
            return []

        proposed = Assignment(
            id=exclude_job_id or "__proposed__",
            employee_id=employee_id,
            start_time=start_time,
            end_time=end_time,
        )
        day_jobs = await self._load_day(start_time.date(), employee_id)
        by_id = {j.id: j for j in day_jobs}
        others = find_conflicts(proposed, [j.to_assignment() for j in day_jobs])
        return [by_id[a.id] for a in others]

    async def staff_for_day(self, day: date) -> list[StaffConflicts]:
        """Per-employee conflict flag for everyone working on *day*."""
        jobs = await self._load_day(day, None)
        assignments = [j.to_assignment() for j in jobs]

        employees: dict[str, JobEmployee] = {}
        counts: dict[str, int] = {}
        for job in jobs:
            if job.assigned_to is None:
                continue
            employees.setdefault(job.assigned_to.id, job.assigned_to)
            counts[job.assigned_to.id] = counts.get(job.assigned_to.id, 0) + 1

        return [
            StaffConflicts(
                employee=employee,
                job_count=counts[employee_id],
                has_conflicts=employee_has_conflicts(employee_id, assignments),
            )
            for employee_id, employee in employees.items()
        ]

    async def _load_day(self, day: date, employee_id: str | None) -> list[Job]:
        start, end = day_bounds(day)
        return await self._jobs.get_scheduled_between(start, end, employee_id=employee_id)
