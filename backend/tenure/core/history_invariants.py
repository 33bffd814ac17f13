"""History Invariants — detects temporal inconsistencies in an employee's segments.

Invariants checked:
    - At most one open segment per category
    - A current employee (open salary) has an open title and department too
    - No segment ends before it starts
    - Same-category segments do not overlap
    - A department id appears at most once in department history
    - Manager assignments lie inside a "Manager" title segment

Design Decisions:
    - Violations are identified by rule + segment keys, not dates: closing a
      segment keeps its identity, so find_new_violations can tell legacy
      inconsistencies apart from ones a promotion would introduce
"""

from dataclasses import dataclass, field

from tenure.core.domain_types import MANAGER_TITLE, SegmentCategory
from tenure.core.segments import EmployeeRecord, HistorySegment


@dataclass(frozen=True)
class HistoryViolation:
    rule: str
    category: SegmentCategory
    subject: tuple
    message: str = field(compare=False)


def _multiple_open(record: EmployeeRecord) -> list[HistoryViolation]:
    violations = []
    for category in SegmentCategory:
        open_segments = [s for s in record.history(category) if s.is_open]
        if len(open_segments) > 1:
            violations.append(HistoryViolation(
                "multiple_open", category, (),
                f"{category.value}: {len(open_segments)} open segments",
            ))
    return violations


def _missing_open(record: EmployeeRecord) -> list[HistoryViolation]:
    if record.current(SegmentCategory.SALARY) is None:
        return []
    return [
        HistoryViolation(
            "missing_open", category, (),
            f"{category.value}: current employee has no open segment",
        )
        for category in (SegmentCategory.TITLE, SegmentCategory.DEPARTMENT)
        if not any(s.is_open for s in record.history(category))
    ]


def _inverted(record: EmployeeRecord) -> list[HistoryViolation]:
    return [
        HistoryViolation(
            "inverted", segment.category, (segment.key,),
            f"{segment.category.value}: segment from {segment.from_date} "
            f"ends on {segment.to_date}",
        )
        for category in SegmentCategory
        for segment in record.history(category)
        if segment.to_date < segment.from_date
    ]


def _overlapping(record: EmployeeRecord) -> list[HistoryViolation]:
    violations = []
    for category in SegmentCategory:
        by_start = sorted(record.history(category), key=lambda s: s.from_date)
        for earlier, later in zip(by_start, by_start[1:]):
            if later.from_date < earlier.to_date:
                violations.append(HistoryViolation(
                    "overlap", category, (earlier.key, later.key),
                    f"{category.value}: segment from {later.from_date} overlaps "
                    f"segment {earlier.from_date}..{earlier.to_date}",
                ))
    return violations


def _department_reentries(record: EmployeeRecord) -> list[HistoryViolation]:
    seen: set[str] = set()
    violations = []
    for segment in sorted(record.departments, key=lambda s: s.from_date):
        dept = str(segment.value).lower()
        if dept in seen:
            violations.append(HistoryViolation(
                "department_reentry", SegmentCategory.DEPARTMENT, (dept,),
                f"department {dept} appears more than once",
            ))
        seen.add(dept)
    return violations


def _covered_by_manager_title(
    assignment: HistorySegment, titles: tuple[HistorySegment, ...],
) -> bool:
    return any(
        t.value == MANAGER_TITLE
        and t.from_date <= assignment.from_date
        and assignment.to_date <= t.to_date
        for t in titles
    )


def _manager_outside_title(record: EmployeeRecord) -> list[HistoryViolation]:
    return [
        HistoryViolation(
            "manager_outside_title", SegmentCategory.MANAGER, (assignment.key,),
            f"manager assignment for {assignment.value} from "
            f"{assignment.from_date} is not covered by a Manager title",
        )
        for assignment in record.manager_assignments
        if not _covered_by_manager_title(assignment, record.titles)
    ]


def find_violations(record: EmployeeRecord) -> list[HistoryViolation]:
    """Every invariant violation present in the record."""
    return (
        _multiple_open(record)
        + _missing_open(record)
        + _inverted(record)
        + _overlapping(record)
        + _department_reentries(record)
        + _manager_outside_title(record)
    )


def find_new_violations(
    before: EmployeeRecord, after: EmployeeRecord,
) -> list[HistoryViolation]:
    """Violations present after a change that were not present before."""
    existing = set(find_violations(before))
    return [v for v in find_violations(after) if v not in existing]
