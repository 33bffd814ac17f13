"""History Invariants — tests for temporal consistency checks.

Tests cover:
    - Clean history has no violations
    - Each rule: multiple open, missing open, inverted, overlap,
      department re-entry, manager outside Manager title
    - find_new_violations ignores legacy violations and reports introduced ones
"""

from datetime import date

from tenure.core.domain_types import SegmentCategory
from tenure.core.history_invariants import find_new_violations, find_violations
from tenure.core.segments import EmployeeRecord

from tests.history_builders import dept, make_record, manages, salary, title


def _rules(record: EmployeeRecord) -> list[str]:
    return [v.rule for v in find_violations(record)]


def test_default_record_is_consistent():
    assert find_violations(make_record()) == []


def test_closed_then_open_segments_are_consistent():
    record = make_record(salaries=[
        salary(date(2020, 1, 1), 60000, to_date=date(2022, 1, 1)),
        salary(date(2022, 1, 1), 65000),
    ])
    assert find_violations(record) == []


def test_multiple_open_segments():
    record = make_record(salaries=[
        salary(date(2020, 1, 1), 60000),
        salary(date(2022, 1, 1), 65000),
    ])
    assert "multiple_open" in _rules(record)


def test_current_employee_missing_open_title():
    record = make_record(titles=[
        title(date(2020, 1, 1), "Engineer", to_date=date(2022, 1, 1)),
    ])
    violations = find_violations(record)
    assert [(v.rule, v.category) for v in violations] == [
        ("missing_open", SegmentCategory.TITLE),
    ]


def test_departed_employee_needs_no_open_segments():
    departed = date(2022, 1, 1)
    record = make_record(
        salaries=[salary(date(2020, 1, 1), 60000, to_date=departed)],
        titles=[title(date(2020, 1, 1), "Engineer", to_date=departed)],
        departments=[dept(date(2020, 1, 1), "d001", to_date=departed)],
    )
    assert find_violations(record) == []


def test_inverted_segment():
    record = make_record(salaries=[
        salary(date(2020, 1, 1), 60000, to_date=date(2019, 1, 1)),
        salary(date(2021, 1, 1), 65000),
    ])
    assert "inverted" in _rules(record)


def test_overlapping_segments():
    record = make_record(titles=[
        title(date(2020, 1, 1), "Engineer", to_date=date(2022, 6, 1)),
        title(date(2022, 1, 1), "Senior Engineer"),
    ])
    assert _rules(record) == ["overlap"]


def test_department_reentry_is_case_insensitive():
    record = make_record(departments=[
        dept(date(2020, 1, 1), "d001", to_date=date(2021, 1, 1)),
        dept(date(2021, 1, 1), "d002", to_date=date(2022, 1, 1)),
        dept(date(2022, 1, 1), "D001"),
    ])
    assert _rules(record) == ["department_reentry"]


def test_manager_assignment_requires_manager_title():
    record = make_record(manager_assignments=[manages(date(2021, 1, 1), "d001")])
    assert _rules(record) == ["manager_outside_title"]


def test_manager_assignment_inside_manager_title():
    record = make_record(
        titles=[
            title(date(2020, 1, 1), "Engineer", to_date=date(2021, 1, 1)),
            title(date(2021, 1, 1), "Manager"),
        ],
        manager_assignments=[manages(date(2021, 1, 1), "d001")],
    )
    assert find_violations(record) == []


# ─── New vs legacy ───────────────────────────────────────────────

def test_legacy_violation_not_reported_as_new():
    legacy = make_record(manager_assignments=[manages(date(2021, 1, 1), "d001")])
    after = legacy.with_history(SegmentCategory.SALARY, [
        legacy.salaries[0].closed_on(date(2024, 1, 1)),
        salary(date(2024, 1, 1), 70000),
    ])
    assert find_violations(after) != []
    assert find_new_violations(legacy, after) == []


def test_introduced_violation_reported():
    before = make_record()
    after = before.with_history(SegmentCategory.SALARY, [
        *before.salaries, salary(date(2024, 1, 1), 70000),
    ])
    introduced = find_new_violations(before, after)
    assert [v.rule for v in introduced] == ["multiple_open", "overlap"]
