"""Temporal Segment Model — tests for current-segment lookup and value semantics.

Tests cover:
    - is_open iff to_date is the sentinel
    - current() returns the open segment, latest() the last by (to_date, from_date)
    - closed_on returns a new segment and keeps the key
    - with_history re-orders segments
    - SegmentKey works as a dict key
"""

from datetime import date

from tenure.core.domain_types import OPEN_ENDED, SegmentCategory
from tenure.core.segments import SegmentKey, ordered

from tests.history_builders import EMP_NO, dept, make_record, salary, title


def test_segment_open_only_with_sentinel():
    assert salary(date(2020, 1, 1), 100).is_open
    assert not salary(date(2020, 1, 1), 100, to_date=date(2021, 1, 1)).is_open


def test_current_returns_open_segment():
    record = make_record(salaries=[
        salary(date(2020, 1, 1), 100, to_date=date(2021, 1, 1)),
        salary(date(2021, 1, 1), 200),
    ])
    assert record.current(SegmentCategory.SALARY).value == 200


def test_current_is_none_for_departed_employee():
    record = make_record(salaries=[
        salary(date(2020, 1, 1), 100, to_date=date(2021, 1, 1)),
    ])
    assert record.current(SegmentCategory.SALARY) is None
    assert record.latest(SegmentCategory.SALARY).value == 100


def test_current_manager_none_when_never_manager():
    record = make_record()
    assert record.current(SegmentCategory.MANAGER) is None
    assert record.latest(SegmentCategory.MANAGER) is None


def test_ordered_sorts_by_to_date_then_from_date():
    segments = ordered([
        salary(date(2022, 1, 1), 300),
        salary(date(2020, 1, 1), 100, to_date=date(2021, 1, 1)),
        salary(date(2021, 1, 1), 200, to_date=date(2022, 1, 1)),
    ])
    assert [s.value for s in segments] == [100, 200, 300]


def test_closed_on_keeps_key_and_original():
    original = title(date(2020, 1, 1), "Engineer")
    closed = original.closed_on(date(2024, 1, 1))
    assert closed.to_date == date(2024, 1, 1)
    assert closed.key == original.key
    assert original.to_date == OPEN_ENDED


def test_with_history_replaces_and_orders():
    record = make_record()
    updated = record.with_history(SegmentCategory.DEPARTMENT, [
        dept(date(2024, 1, 1), "d002"),
        dept(date(2020, 1, 1), "d001", to_date=date(2024, 1, 1)),
    ])
    assert [s.value for s in updated.departments] == ["d001", "d002"]
    assert [s.value for s in record.departments] == ["d001"]


def test_earliest_from_date():
    record = make_record(salaries=[
        salary(date(2021, 1, 1), 200),
        salary(date(2020, 1, 1), 100, to_date=date(2021, 1, 1)),
    ])
    assert record.earliest_from_date(SegmentCategory.SALARY) == date(2020, 1, 1)
    assert record.earliest_from_date(SegmentCategory.MANAGER) is None


def test_segment_key_usable_as_mapping_key():
    key = SegmentKey(EMP_NO, SegmentCategory.SALARY, date(2020, 1, 1))
    index = {key: "first salary"}
    assert index[salary(date(2020, 1, 1), 999).key] == "first salary"
