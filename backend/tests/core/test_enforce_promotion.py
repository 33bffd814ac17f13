"""Promotion Business Rules — tests for pure precondition checks.

Tests cover:
    - Missing employee, pre-hire date, departed employee
    - Change detection (case-insensitive title/department, exact salary)
    - No-op, unknown department, duplicate date, department re-entry
    - Rule order: first violation wins
    - Effective date defaults to today
"""

from datetime import date

from tenure.core.domain_types import SegmentCategory
from tenure.core.enforce_promotion import (
    PromotionPlan, detect_changes, evaluate_promotion,
    has_been_in_department, has_segment_starting_on,
)
from tenure.core.errors import ErrorKind, Rejection
from tenure.core.promotion_request import PromotionRequest

from tests.history_builders import dept, make_record, salary, title

TODAY = date(2024, 6, 1)


def _request(**overrides):
    fields = dict(
        emp_no=10001, new_title="Engineer", new_salary=60000,
        new_dept_no="d001", promotion_date=date(2024, 1, 1),
    )
    fields.update(overrides)
    return PromotionRequest(**fields)


def _evaluate(record, request, dept_exists=True):
    return evaluate_promotion(record, request, TODAY, dept_exists)


# ─── Happy path ──────────────────────────────────────────────────

def test_salary_only_promotion_yields_plan():
    plan = _evaluate(make_record(), _request(new_salary=65000))
    assert plan == PromotionPlan(
        effective_date=date(2024, 1, 1),
        salary_changed=True, dept_changed=False, title_changed=False,
    )
    assert plan.changed_categories == [SegmentCategory.SALARY]


def test_all_three_changes_flagged():
    plan = _evaluate(make_record(), _request(
        new_salary=90000, new_title="Manager", new_dept_no="d005",
    ))
    assert plan.changed_categories == [
        SegmentCategory.SALARY, SegmentCategory.DEPARTMENT, SegmentCategory.TITLE,
    ]


def test_effective_date_defaults_to_today():
    plan = _evaluate(make_record(), _request(new_salary=1, promotion_date=None))
    assert plan.effective_date == TODAY


# ─── Rejections ──────────────────────────────────────────────────

def test_missing_employee():
    result = _evaluate(None, _request(new_salary=1))
    assert result.kind == ErrorKind.EMPLOYEE_NOT_FOUND


def test_promotion_before_first_salary_rejected():
    result = _evaluate(make_record(), _request(
        new_salary=65000, promotion_date=date(2019, 1, 1),
    ))
    assert result.kind == ErrorKind.PROMOTION_BEFORE_HIRE
    assert "2020-01-01" in result.message


def test_promotion_on_first_salary_day_is_not_before_hire():
    result = _evaluate(make_record(), _request(
        new_salary=65000, promotion_date=date(2020, 1, 1),
    ))
    # same day as the opening segment: duplicate, not pre-hire
    assert result.kind == ErrorKind.DUPLICATE_PROMOTION_DATE


def test_pre_hire_uses_earliest_salary_not_latest():
    record = make_record(salaries=[
        salary(date(2020, 1, 1), 60000, to_date=date(2023, 1, 1)),
        salary(date(2023, 1, 1), 65000),
    ])
    result = _evaluate(record, _request(
        new_salary=70000, promotion_date=date(2021, 6, 1),
    ))
    assert not (isinstance(result, Rejection)
                and result.kind == ErrorKind.PROMOTION_BEFORE_HIRE)


def test_departed_employee_not_current():
    record = make_record(salaries=[
        salary(date(2020, 1, 1), 60000, to_date=date(2023, 1, 1)),
    ])
    result = _evaluate(record, _request(new_salary=70000))
    assert result.kind == ErrorKind.EMPLOYEE_NOT_CURRENT


def test_no_change_requested():
    result = _evaluate(make_record(), _request())
    assert result.kind == ErrorKind.NO_CHANGE_REQUESTED


def test_no_change_ignores_case_of_title_and_department():
    result = _evaluate(make_record(), _request(
        new_title="  eNGINEER ", new_dept_no="D001",
    ))
    assert result.kind == ErrorKind.NO_CHANGE_REQUESTED


def test_unknown_department_rejected_only_when_changed():
    result = _evaluate(
        make_record(), _request(new_dept_no="d999"), dept_exists=False,
    )
    assert result.kind == ErrorKind.DEPARTMENT_NOT_FOUND

    unchanged_dept = _evaluate(
        make_record(), _request(new_salary=61000), dept_exists=False,
    )
    assert isinstance(unchanged_dept, PromotionPlan)


def test_duplicate_date_rejected_for_any_category():
    record = make_record(titles=[
        title(date(2020, 1, 1), "Engineer", to_date=date(2024, 1, 1)),
        title(date(2024, 1, 1), "Senior Engineer"),
    ])
    # salary change on a day a title segment already starts
    result = _evaluate(record, _request(
        new_salary=70000, new_title="Senior Engineer",
    ))
    assert result.kind == ErrorKind.DUPLICATE_PROMOTION_DATE


def test_department_reentry_rejected():
    record = make_record(departments=[
        dept(date(2020, 1, 1), "d001", to_date=date(2022, 1, 1)),
        dept(date(2022, 1, 1), "d002"),
    ])
    result = _evaluate(record, _request(new_dept_no="D001"))
    assert result.kind == ErrorKind.DEPARTMENT_REENTRY


# ─── Ordering ────────────────────────────────────────────────────

def test_pre_hire_checked_before_departed():
    record = make_record(salaries=[
        salary(date(2020, 1, 1), 60000, to_date=date(2021, 1, 1)),
    ])
    result = _evaluate(record, _request(
        new_salary=1, promotion_date=date(2019, 1, 1),
    ))
    assert result.kind == ErrorKind.PROMOTION_BEFORE_HIRE


def test_no_change_checked_before_duplicate_date():
    result = _evaluate(make_record(), _request(promotion_date=date(2020, 1, 1)))
    assert result.kind == ErrorKind.NO_CHANGE_REQUESTED


def test_unknown_department_checked_before_duplicate_date():
    result = _evaluate(
        make_record(),
        _request(new_dept_no="d999", promotion_date=date(2020, 1, 1)),
        dept_exists=False,
    )
    assert result.kind == ErrorKind.DEPARTMENT_NOT_FOUND


def test_duplicate_date_checked_before_reentry():
    record = make_record(departments=[
        dept(date(2020, 1, 1), "d001", to_date=date(2022, 1, 1)),
        dept(date(2022, 1, 1), "d002"),
    ])
    result = _evaluate(record, _request(promotion_date=date(2022, 1, 1)))
    assert result.kind == ErrorKind.DUPLICATE_PROMOTION_DATE


# ─── Helpers ─────────────────────────────────────────────────────

def test_detect_changes_salary_is_exact():
    assert detect_changes(make_record(), _request(new_salary=60001)) == (
        True, False, False,
    )


def test_has_segment_starting_on_ignores_manager_history():
    assert has_segment_starting_on(make_record(), date(2020, 1, 1))
    assert not has_segment_starting_on(make_record(), date(2020, 1, 2))


def test_has_been_in_department_is_case_insensitive():
    assert has_been_in_department(make_record(), "D001")
    assert not has_been_in_department(make_record(), "d002")


def test_padded_department_id_is_not_a_change():
    result = _evaluate(make_record(), _request(new_dept_no="  D001 "))
    assert result.kind == ErrorKind.NO_CHANGE_REQUESTED


def test_padded_department_id_reentry_detected():
    record = make_record(departments=[
        dept(date(2020, 1, 1), "d001", to_date=date(2022, 1, 1)),
        dept(date(2022, 1, 1), "d002"),
    ])
    result = _evaluate(record, _request(new_dept_no=" d001"))
    assert result.kind == ErrorKind.DEPARTMENT_REENTRY
