"""ScheduleFilters — scope jobs to a calendar day and/or an employee."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from landscaper.domain.entities.job import Job


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open [00:00, next 00:00) bounds of a calendar day (naive)."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def jobs_for_employee(jobs: Iterable[Job], employee_id: str | None) -> list[Job]:
    """Jobs assigned to *employee_id*; no filter when employee_id is empty."""
    if not employee_id:
        return list(jobs)
    return [j for j in jobs if j.assigned_to is not None and j.assigned_to.id == employee_id]
