"""Tests for ConflictDetectionPolicy."""

from datetime import datetime, timedelta, timezone

from landscaper.domain.entities.assignment import Assignment
from landscaper.domain.policies.conflict_detection import (
    conflict_map,
    effective_interval,
    employee_has_conflicts,
    find_conflicts,
    intervals_overlap,
)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 5, 4, hour, minute)


def _assignment(id_, employee="emp-1", start=None, end=None) -> Assignment:
    return Assignment(id=id_, employee_id=employee, start_time=start, end_time=end)


# ─── intervals_overlap ──────────────────────────────────────────────


def test_partial_overlap_is_conflict_both_ways():
    a1 = _assignment("a1", start=_at(10), end=_at(11))
    a2 = _assignment("a2", start=_at(10, 30), end=_at(11, 30))
    assert find_conflicts(a1, [a1, a2]) == [a2]
    assert find_conflicts(a2, [a1, a2]) == [a1]


def test_touching_boundaries_overlap():
    """Inclusive policy: 10:00–11:00 and 11:00–12:00 share 11:00."""
    a1 = _assignment("a1", start=_at(10), end=_at(11))
    a3 = _assignment("a3", start=_at(11), end=_at(12))
    assert intervals_overlap(a1, a3) is True
    assert intervals_overlap(a3, a1) is True
    assert find_conflicts(a1, [a3]) == [a3]
    assert find_conflicts(a3, [a1]) == [a1]


def test_disjoint_intervals_do_not_overlap():
    a = _assignment("a", start=_at(8), end=_at(9))
    b = _assignment("b", start=_at(9, 1), end=_at(10))
    assert intervals_overlap(a, b) is False


def test_containment_overlaps():
    outer = _assignment("outer", start=_at(8), end=_at(17))
    inner = _assignment("inner", start=_at(12), end=_at(13))
    assert intervals_overlap(outer, inner) is True
    assert intervals_overlap(inner, outer) is True


def test_missing_end_defaults_to_one_hour():
    open_ended = _assignment("a", start=_at(10))
    assert intervals_overlap(open_ended, _assignment("b", start=_at(10, 59), end=_at(12)))
    assert intervals_overlap(open_ended, _assignment("c", start=_at(11), end=_at(12)))
    assert not intervals_overlap(open_ended, _assignment("d", start=_at(11, 1), end=_at(12)))


def test_missing_start_never_overlaps():
    unscheduled = _assignment("a", start=None, end=_at(11))
    other = _assignment("b", start=_at(9), end=_at(12))
    assert intervals_overlap(unscheduled, other) is False
    assert intervals_overlap(other, unscheduled) is False


def test_end_before_start_collapses_to_point():
    backwards = _assignment("a", start=_at(10), end=_at(9))
    assert effective_interval(backwards) == (
        _at(10).replace(tzinfo=timezone.utc),
        _at(10).replace(tzinfo=timezone.utc),
    )
    assert intervals_overlap(backwards, _assignment("b", start=_at(9), end=_at(10)))
    assert not intervals_overlap(backwards, _assignment("c", start=_at(8), end=_at(9, 30)))


def test_naive_and_aware_times_compare():
    naive = _assignment("a", start=_at(10), end=_at(11))
    aware = _assignment(
        "b",
        start=datetime(2026, 5, 4, 10, 30, tzinfo=timezone.utc),
        end=datetime(2026, 5, 4, 11, 30, tzinfo=timezone.utc),
    )
    assert intervals_overlap(naive, aware) is True


def test_other_timezone_is_normalized():
    # 12:30 at UTC+2 is 10:30 UTC
    plus_two = timezone(timedelta(hours=2))
    a = _assignment("a", start=_at(10), end=_at(11))
    b = _assignment("b", start=datetime(2026, 5, 4, 12, 30, tzinfo=plus_two))
    assert intervals_overlap(a, b) is True


# ─── find_conflicts ─────────────────────────────────────────────────


def test_different_employees_never_conflict():
    a = _assignment("a", employee="emp-1", start=_at(10), end=_at(11))
    b = _assignment("b", employee="emp-2", start=_at(10), end=_at(11))
    assert find_conflicts(a, [b]) == []
    assert find_conflicts(b, [a]) == []


def test_unassigned_never_conflicts():
    unassigned = _assignment("a", employee=None, start=_at(10), end=_at(11))
    other_unassigned = _assignment("b", employee=None, start=_at(10), end=_at(11))
    assigned = _assignment("c", start=_at(10), end=_at(11))
    assert find_conflicts(unassigned, [other_unassigned, assigned]) == []
    assert find_conflicts(assigned, [unassigned, other_unassigned]) == []


def test_target_is_excluded_by_id():
    a = _assignment("a", start=_at(10), end=_at(11))
    assert find_conflicts(a, [a]) == []


def test_conflicts_keep_candidate_order():
    target = _assignment("t", start=_at(9), end=_at(17))
    c1 = _assignment("c1", start=_at(15))
    c2 = _assignment("c2", start=_at(7))  # no overlap
    c3 = _assignment("c3", start=_at(9, 30))
    c4 = _assignment("c4", start=_at(12))
    assert [c.id for c in find_conflicts(target, [c1, c2, c3, c4])] == ["c1", "c3", "c4"]


def test_find_conflicts_does_not_mutate_candidates():
    target = _assignment("t", start=_at(10))
    candidates = [_assignment("a", start=_at(10)), _assignment("b", start=_at(14))]
    snapshot = list(candidates)
    find_conflicts(target, candidates)
    assert candidates == snapshot


def test_find_conflicts_accepts_generator():
    target = _assignment("t", start=_at(10))
    result = find_conflicts(target, (a for a in [_assignment("a", start=_at(10, 15))]))
    assert [a.id for a in result] == ["a"]


# ─── day-level helpers ──────────────────────────────────────────────


def test_conflict_map_lists_only_conflicting():
    a = _assignment("a", start=_at(8), end=_at(9))
    b = _assignment("b", start=_at(8, 30), end=_at(10))
    c = _assignment("c", start=_at(13), end=_at(14))
    d = _assignment("d", employee="emp-2", start=_at(8), end=_at(9))
    result = conflict_map([a, b, c, d])
    assert set(result) == {"a", "b"}
    assert result["a"] == [b]
    assert result["b"] == [a]


def test_employee_has_conflicts():
    day = [
        _assignment("a", employee="emp-1", start=_at(8), end=_at(9)),
        _assignment("b", employee="emp-1", start=_at(12), end=_at(13)),
        _assignment("c", employee="emp-2", start=_at(8), end=_at(9)),
        _assignment("d", employee="emp-2", start=_at(8, 45), end=_at(9, 30)),
    ]
    assert employee_has_conflicts("emp-1", day) is False
    assert employee_has_conflicts("emp-2", day) is True
    assert employee_has_conflicts("emp-3", day) is False
