"""Promotion Business Rules — semantic preconditions checked against current history.

Invariants:
    - evaluate_promotion is PURE: returns PromotionPlan or Rejection, never raises
    - Checks run in a fixed order and fail fast on the first violation
    - Title and department comparisons are case-insensitive; salary is exact
    - Department ids are compared in their normalized form (target_dept_no)
    - The target department lookup is done by the shell and passed in as a bool,
      so the check order stays intact without store access here

Design Decisions:
    - Separated from the transition engine: this module decides WHETHER,
      segment_transitions decides WHAT gets written
"""

from dataclasses import dataclass
from datetime import date

from tenure.core.domain_types import PROMOTABLE_CATEGORIES, SegmentCategory
from tenure.core.errors import ErrorKind, Rejection
from tenure.core.promotion_request import PromotionRequest
from tenure.core.segments import EmployeeRecord


@dataclass(frozen=True)
class PromotionPlan:
    """What a valid promotion will change, and as of when."""
    effective_date: date
    salary_changed: bool
    dept_changed: bool
    title_changed: bool

    @property
    def changed_categories(self) -> list[SegmentCategory]:
        flags = {
            SegmentCategory.SALARY: self.salary_changed,
            SegmentCategory.DEPARTMENT: self.dept_changed,
            SegmentCategory.TITLE: self.title_changed,
        }
        return [c for c in PROMOTABLE_CATEGORIES if flags[c]]


def _differs_ignoring_case(requested: str, current: object | None) -> bool:
    if current is None:
        return True
    # whitespace collapsed: stored titles are normalized the same way
    return " ".join(requested.split()).casefold() != " ".join(
        str(current).split(),
    ).casefold()


def detect_changes(
    record: EmployeeRecord, request: PromotionRequest,
) -> tuple[bool, bool, bool]:
    """Return (salary_changed, dept_changed, title_changed)."""
    salary = record.latest(SegmentCategory.SALARY)
    dept = record.latest(SegmentCategory.DEPARTMENT)
    title = record.latest(SegmentCategory.TITLE)

    salary_changed = salary is None or request.new_salary != salary.value
    dept_changed = _differs_ignoring_case(
        request.target_dept_no, dept.value if dept else None,
    )
    title_changed = _differs_ignoring_case(
        request.new_title, title.value if title else None,
    )
    return salary_changed, dept_changed, title_changed


def has_segment_starting_on(record: EmployeeRecord, day: date) -> bool:
    return any(
        segment.from_date == day
        for category in PROMOTABLE_CATEGORIES
        for segment in record.history(category)
    )


def has_been_in_department(record: EmployeeRecord, dept_no: str) -> bool:
    target = dept_no.casefold()
    return any(
        str(segment.value).casefold() == target
        for segment in record.departments
    )


def evaluate_promotion(
    record: EmployeeRecord | None,
    request: PromotionRequest,
    today: date,
    target_department_exists: bool,
) -> PromotionPlan | Rejection:
    """Run every business rule in order. Pure — no state mutation."""
    if record is None:
        return Rejection(ErrorKind.EMPLOYEE_NOT_FOUND, "Employee does not exist")

    effective_date = request.promotion_date or today

    first_salary_date = record.earliest_from_date(SegmentCategory.SALARY)
    if first_salary_date is not None and first_salary_date > effective_date:
        return Rejection(
            ErrorKind.PROMOTION_BEFORE_HIRE,
            "Promotion date cannot be earlier than employee's start date: "
            f"{first_salary_date.isoformat()}",
        )

    current_salary = record.latest(SegmentCategory.SALARY)
    if current_salary is None or not current_salary.is_open:
        return Rejection(
            ErrorKind.EMPLOYEE_NOT_CURRENT,
            "Employee is no longer with the company",
        )

    salary_changed, dept_changed, title_changed = detect_changes(record, request)
    if not (salary_changed or dept_changed or title_changed):
        return Rejection(
            ErrorKind.NO_CHANGE_REQUESTED,
            "Provided data matches existing data, no changes requested",
        )

    if dept_changed and not target_department_exists:
        return Rejection(
            ErrorKind.DEPARTMENT_NOT_FOUND,
            f"Department {request.target_dept_no} does not exist.",
        )

    if has_segment_starting_on(record, effective_date):
        return Rejection(
            ErrorKind.DUPLICATE_PROMOTION_DATE,
            f"Employee has already been promoted on {effective_date.isoformat()} "
            "and cannot be promoted again on the same date",
        )

    if dept_changed and has_been_in_department(record, request.target_dept_no):
        return Rejection(
            ErrorKind.DEPARTMENT_REENTRY,
            "Employee cannot return to their previous department",
        )

    return PromotionPlan(
        effective_date=effective_date,
        salary_changed=salary_changed,
        dept_changed=dept_changed,
        title_changed=title_changed,
    )
