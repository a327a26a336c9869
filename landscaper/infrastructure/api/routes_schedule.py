"""Schedule endpoints — conflict detection over scheduled jobs."""

from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from landscaper.application.use_cases.detect_conflicts import (
    JobConflicts,
    ScheduleConflictsUseCase,
    StaffConflicts,
)
from landscaper.domain.entities.job import Job
from landscaper.infrastructure.api.dependencies import get_conflicts_uc

router = APIRouter(prefix="/schedule", tags=["schedule"])

# ── Request schemas ─────────────────────────────────────────────────


class ConflictCheckRequest(BaseModel):
    employee_id: str | None = None
    start_time: datetime
    # An end before the start is checked as the start instant alone
    end_time: datetime | None = None
    job_id: str | None = None  # set when editing an existing job


# ── Endpoints ───────────────────────────────────────────────────────


@router.get("/conflicts")
async def list_conflicts(
    day: date,
    employee_id: str | None = None,
    uc: ScheduleConflictsUseCase = Depends(get_conflicts_uc),
):
    """All jobs on a day that overlap another job of the same employee."""
    report = await uc.for_day(day, employee_id=employee_id)
    return {
        "day": day.isoformat(),
        "total": len(report),
        "conflicts": [_serialize_job_conflicts(item) for item in report],
    }


@router.get("/staff")
async def staff_conflicts(
    day: date,
    uc: ScheduleConflictsUseCase = Depends(get_conflicts_uc),
):
    """Everyone working on a day, flagged when their own jobs overlap."""
    staff = await uc.staff_for_day(day)
    return {
        "day": day.isoformat(),
        "staff": [_serialize_staff(s) for s in staff],
    }


@router.get("/jobs/{job_id}/conflicts")
async def job_conflicts(
    job_id: str,
    uc: ScheduleConflictsUseCase = Depends(get_conflicts_uc),
):
    """Conflicts of a single job against the rest of its day."""
    item = await uc.for_job(job_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return _serialize_job_conflicts(item)


@router.post("/conflicts/check")
async def check_conflicts(
    body: ConflictCheckRequest,
    uc: ScheduleConflictsUseCase = Depends(get_conflicts_uc),
):
    """Conflicts a proposed assignment would create (live form validation)."""
    conflicts = await uc.check_proposed(
        employee_id=body.employee_id,
        start_time=body.start_time,
        end_time=body.end_time,
        exclude_job_id=body.job_id,
    )
    return {
        "has_conflicts": bool(conflicts),
        "conflicts": [_serialize_job(j) for j in conflicts],
    }


def _serialize_job(j: Job) -> dict:
    return {
        "id": j.id,
        "title": j.title,
        "start_date": j.start_date.isoformat() if j.start_date else None,
        "end_date": j.end_date.isoformat() if j.end_date else None,
        "employee_id": j.assigned_to.id if j.assigned_to else None,
        "employee_name": j.assigned_to.name if j.assigned_to else None,
        "status": j.status,
        "site_address": j.site_address(),
        "notes": j.notes(),
    }


def _serialize_job_conflicts(item: JobConflicts) -> dict:
    return {
        "job": _serialize_job(item.job),
        "has_conflicts": bool(item.conflicts),
        "conflicts": [_serialize_job(j) for j in item.conflicts],
    }


def _serialize_staff(s: StaffConflicts) -> dict:
    return {
        "employee_id": s.employee.id,
        "employee_name": s.employee.name,
        "job_count": s.job_count,
        "has_conflicts": s.has_conflicts,
    }
