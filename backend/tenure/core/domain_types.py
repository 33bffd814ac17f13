"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EmpNo wraps int, DeptNo wraps str — department ids are stored lowercase
    - OPEN_ENDED (9999-01-01) is the single source of truth for "still in effect"
    - MANAGER_TITLE is compared case-sensitively by the transition engine

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from datetime import date
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EmpNo = NewType("EmpNo", int)
DeptNo = NewType("DeptNo", str)        # e.g. "d005"


# ─── Constants ───────────────────────────────────────────────────

OPEN_ENDED: date = date(9999, 1, 1)
MANAGER_TITLE: str = "Manager"
MAX_TITLE_LENGTH: int = 50
MIN_SALARY: int = 1


# ─── Enums ───────────────────────────────────────────────────────

class SegmentCategory(str, Enum):
    """The four effective-dated history categories of an employee."""
    SALARY = "salary"
    TITLE = "title"
    DEPARTMENT = "department"
    MANAGER = "manager"


# Categories a promotion request changes directly (manager follows title),
# in the order their writes are staged
PROMOTABLE_CATEGORIES: tuple[SegmentCategory, ...] = (
    SegmentCategory.SALARY,
    SegmentCategory.DEPARTMENT,
    SegmentCategory.TITLE,
)
