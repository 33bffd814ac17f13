"""Segment Transition Engine — turns a validated promotion into staged segment writes.

Invariants:
    - stage_transitions is PURE: describes writes, never performs them
    - Only categories flagged in the PromotionPlan are touched
    - Every closure writes to_date = effective_date and every opening writes
      from_date = effective_date, to_date = OPEN_ENDED (no gap, no overlap)
    - Department ids are lowercased before they are written
    - The manager side effect compares against MANAGER_TITLE case-sensitively,
      unlike the case-insensitive title_changed flag

Design Decisions:
    - Closures and openings as separate value types: the store maps them to
      UPDATE and INSERT without guessing (explicit stage-then-commit)
    - apply_staged_writes replays the writes on the in-memory record so the
      orchestrator can check invariants before anything reaches the database
"""

from dataclasses import dataclass
from datetime import date

from tenure.core.domain_types import MANAGER_TITLE, OPEN_ENDED, SegmentCategory
from tenure.core.enforce_promotion import PromotionPlan
from tenure.core.promotion_request import PromotionRequest
from tenure.core.segments import EmployeeRecord, HistorySegment


@dataclass(frozen=True)
class SegmentClosure:
    """Close an open segment as of to_date."""
    segment: HistorySegment
    to_date: date

    @property
    def category(self) -> SegmentCategory:
        return self.segment.category


@dataclass(frozen=True)
class SegmentOpening:
    """Insert a new open segment."""
    segment: HistorySegment

    @property
    def category(self) -> SegmentCategory:
        return self.segment.category


StagedWrite = SegmentClosure | SegmentOpening


def to_title_case(text: str) -> str:
    """'  senior   ENGINEER ' -> 'Senior Engineer'."""
    return " ".join(word[0].upper() + word[1:].lower() for word in text.split())


def _replace_current(
    record: EmployeeRecord,
    category: SegmentCategory,
    value: int | str,
    effective_date: date,
) -> list[StagedWrite]:
    writes: list[StagedWrite] = []
    current = record.current(category)
    if current is not None:
        writes.append(SegmentClosure(current, effective_date))
    writes.append(SegmentOpening(HistorySegment(
        emp_no=record.emp_no,
        category=category,
        from_date=effective_date,
        to_date=OPEN_ENDED,
        value=value,
    )))
    return writes


def _manager_side_effect(
    record: EmployeeRecord,
    previous_title: str | None,
    new_title: str,
    target_dept: str,
    effective_date: date,
) -> list[StagedWrite]:
    writes: list[StagedWrite] = []

    # Manager -> non-manager
    if previous_title == MANAGER_TITLE and new_title != MANAGER_TITLE:
        open_assignment = record.current(SegmentCategory.MANAGER)
        if open_assignment is not None:
            writes.append(SegmentClosure(open_assignment, effective_date))

    # Non-manager -> Manager
    if new_title == MANAGER_TITLE:
        writes.append(SegmentOpening(HistorySegment(
            emp_no=record.emp_no,
            category=SegmentCategory.MANAGER,
            from_date=effective_date,
            to_date=OPEN_ENDED,
            value=target_dept,
        )))
    return writes


def stage_transitions(
    record: EmployeeRecord, request: PromotionRequest, plan: PromotionPlan,
) -> tuple[StagedWrite, ...]:
    """Stage every closure and opening the promotion requires."""
    effective_date = plan.effective_date
    target_dept = request.target_dept_no
    writes: list[StagedWrite] = []

    if plan.salary_changed:
        writes += _replace_current(
            record, SegmentCategory.SALARY, request.new_salary, effective_date,
        )

    if plan.dept_changed:
        writes += _replace_current(
            record, SegmentCategory.DEPARTMENT, target_dept, effective_date,
        )

    if plan.title_changed:
        new_title = to_title_case(request.new_title)
        previous = record.current(SegmentCategory.TITLE)
        writes += _replace_current(
            record, SegmentCategory.TITLE, new_title, effective_date,
        )
        writes += _manager_side_effect(
            record,
            previous.value if previous else None,
            new_title,
            target_dept,
            effective_date,
        )

    return tuple(writes)


def apply_staged_writes(
    record: EmployeeRecord, writes: tuple[StagedWrite, ...],
) -> EmployeeRecord:
    """Return the record as it will read after the writes commit."""
    for write in writes:
        history = list(record.history(write.category))
        if isinstance(write, SegmentClosure):
            history = [
                s.closed_on(write.to_date) if s.key == write.segment.key else s
                for s in history
            ]
        else:
            history.append(write.segment)
        record = record.with_history(write.category, history)
    return record
