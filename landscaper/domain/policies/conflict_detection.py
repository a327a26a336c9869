"""ConflictDetectionPolicy — find overlapping assignments for the same employee."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone

from landscaper.domain.entities.assignment import Assignment

# Applied when an assignment has no end time; never persisted.
DEFAULT_DURATION = timedelta(minutes=60)


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are taken as UTC so naive and aware values compare.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def effective_interval(assignment: Assignment) -> tuple[datetime, datetime] | None:
    """Normalize an assignment to its (start, end) span.

    Returns None when the assignment has no start time. A missing end time
    means one hour after start; an end before the start collapses the span
    to the start instant.
    """
    if not assignment.is_scheduled():
        return None

    start = _as_utc(assignment.start_time)
    if assignment.end_time is None:
        end = start + DEFAULT_DURATION
    else:
        end = max(_as_utc(assignment.end_time), start)
    return start, end


def intervals_overlap(a: Assignment, b: Assignment) -> bool:
    """Check whether two assignments overlap in time.

    Boundaries are inclusive: an assignment ending at 11:00 and another
    starting at 11:00 do overlap.
    """
    span_a = effective_interval(a)
    span_b = effective_interval(b)
    if span_a is None or span_b is None:
        return False

    a_start, a_end = span_a
    b_start, b_end = span_b
    return (
        b_start <= a_start <= b_end
        or b_start <= a_end <= b_end
        or a_start <= b_start <= a_end
        or a_start <= b_end <= a_end
    )


def find_conflicts(target: Assignment, candidates: Iterable[Assignment]) -> list[Assignment]:
    """Return the candidates that clash with *target*, in their original order.

    Unassigned work never conflicts. The caller decides the universe of
    candidates (a day, an employee, ...); *target* itself is skipped by id.
    """
    if not target.is_assigned():
        return []

    return [
        other
        for other in candidates
        if other.id != target.id
        and other.employee_id == target.employee_id
        and intervals_overlap(target, other)
    ]


def conflict_map(assignments: Sequence[Assignment]) -> dict[str, list[Assignment]]:
    """Map each conflicting assignment id to the assignments it clashes with.

    Assignments without conflicts are left out.
    """
    result: dict[str, list[Assignment]] = {}
    for assignment in assignments:
        conflicts = find_conflicts(assignment, assignments)
        if conflicts:
            result[assignment.id] = conflicts
    return result


def employee_has_conflicts(employee_id: str, assignments: Sequence[Assignment]) -> bool:
    """True when any two of the employee's assignments overlap."""
    own = [a for a in assignments if a.employee_id == employee_id]
    return any(find_conflicts(a, own) for a in own)
