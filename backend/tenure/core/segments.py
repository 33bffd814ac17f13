"""Temporal Segment Model — effective-dated history values shared by validators and engine.

Invariants:
    - A segment is open iff to_date == OPEN_ENDED
    - EmployeeRecord histories are tuples ordered by (to_date, from_date):
      the last element is the current segment whenever one is open
    - Records and segments are frozen; a promotion produces new values

Design Decisions:
    - One generic HistorySegment with a category tag over four near-identical
      classes: validators iterate categories uniformly
    - SegmentKey is a NamedTuple: equality/hash only, usable as a dict key
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import NamedTuple

from tenure.core.domain_types import OPEN_ENDED, SegmentCategory


class SegmentKey(NamedTuple):
    """Composite identity of a segment: employee + category + from_date."""
    emp_no: int
    category: SegmentCategory
    from_date: date


@dataclass(frozen=True)
class HistorySegment:
    """One date-bounded value of one attribute.

    ``value`` holds the salary amount (int) for SALARY, the title (str) for
    TITLE, and the department id (str) for DEPARTMENT and MANAGER.
    """
    emp_no: int
    category: SegmentCategory
    from_date: date
    to_date: date
    value: int | str

    @property
    def is_open(self) -> bool:
        return self.to_date == OPEN_ENDED

    @property
    def key(self) -> SegmentKey:
        return SegmentKey(self.emp_no, self.category, self.from_date)

    def closed_on(self, to_date: date) -> "HistorySegment":
        return replace(self, to_date=to_date)


def ordered(segments) -> tuple[HistorySegment, ...]:
    """Sort segments the way the store returns them: (to_date, from_date)."""
    return tuple(sorted(segments, key=lambda s: (s.to_date, s.from_date)))


@dataclass(frozen=True)
class EmployeeRecord:
    """An employee with complete, already-ordered history sequences."""
    emp_no: int
    first_name: str
    last_name: str
    hire_date: date
    birth_date: date | None = None
    gender: str | None = None
    salaries: tuple[HistorySegment, ...] = field(default_factory=tuple)
    titles: tuple[HistorySegment, ...] = field(default_factory=tuple)
    departments: tuple[HistorySegment, ...] = field(default_factory=tuple)
    manager_assignments: tuple[HistorySegment, ...] = field(default_factory=tuple)

    def history(self, category: SegmentCategory) -> tuple[HistorySegment, ...]:
        return {
            SegmentCategory.SALARY: self.salaries,
            SegmentCategory.TITLE: self.titles,
            SegmentCategory.DEPARTMENT: self.departments,
            SegmentCategory.MANAGER: self.manager_assignments,
        }[category]

    def with_history(
        self, category: SegmentCategory, segments,
    ) -> "EmployeeRecord":
        name = {
            SegmentCategory.SALARY: "salaries",
            SegmentCategory.TITLE: "titles",
            SegmentCategory.DEPARTMENT: "departments",
            SegmentCategory.MANAGER: "manager_assignments",
        }[category]
        return replace(self, **{name: ordered(segments)})

    def latest(self, category: SegmentCategory) -> HistorySegment | None:
        """Latest segment by (to_date, from_date), open or not."""
        history = self.history(category)
        return history[-1] if history else None

    def current(self, category: SegmentCategory) -> HistorySegment | None:
        """The open segment of a category, or None."""
        latest = self.latest(category)
        return latest if latest is not None and latest.is_open else None

    def earliest_from_date(self, category: SegmentCategory) -> date | None:
        history = self.history(category)
        return min((s.from_date for s in history), default=None)
