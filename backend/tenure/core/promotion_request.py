"""Promotion Request — transient input value and its structural validation.

Invariants:
    - validate_promotion_request is PURE: no store access, returns Rejection | None
    - Field checks run in a fixed order: presence, salary, title length
    - promotion_date is the only optional field; None means "today"

Design Decisions:
    - Every field Optional at the type level: the transport layer passes
      missing fields through so the rejection kind stays MALFORMED_REQUEST
    - from_payload owns date parsing (MALFORMED_DATE) so the request value
      always carries a real date or None
    - target_dept_no is the single normalized form of the department id:
      change detection, lookups, re-entry checks and writes all use it
"""

import re
from dataclasses import dataclass
from datetime import date

from tenure.core.domain_types import MAX_TITLE_LENGTH, MIN_SALARY
from tenure.core.errors import ErrorKind, Rejection

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class PromotionRequest:
    emp_no: int | None = None
    new_title: str | None = None
    new_salary: int | None = None
    new_dept_no: str | None = None
    promotion_date: date | None = None

    @property
    def target_dept_no(self) -> str | None:
        """new_dept_no as stored: trimmed and lowercased."""
        if self.new_dept_no is None:
            return None
        return self.new_dept_no.strip().lower()

    @classmethod
    def from_payload(cls, payload: dict) -> "PromotionRequest | Rejection":
        """Build from a decoded body, parsing promotion_date as YYYY-MM-DD."""
        raw_date = payload.get("promotion_date")
        promotion_date = parse_promotion_date(raw_date)
        if isinstance(promotion_date, Rejection):
            return promotion_date
        return cls(
            emp_no=payload.get("emp_no"),
            new_title=payload.get("new_title"),
            new_salary=payload.get("new_salary"),
            new_dept_no=payload.get("new_dept_no"),
            promotion_date=promotion_date,
        )


def parse_promotion_date(value: date | str | None) -> date | Rejection | None:
    """Accept a date, an ISO date string, or nothing."""
    if value is None or isinstance(value, date):
        return value
    malformed = Rejection(
        ErrorKind.MALFORMED_DATE, "Date must be in YYYY-MM-DD format.",
    )
    # fromisoformat alone also takes basic (20240101) and week (2024-W01-1) forms
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value.strip()):
        return malformed
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return malformed


def validate_promotion_request(request: PromotionRequest) -> Rejection | None:
    """Structural checks only. Returns None when the request is well-formed."""
    if (
        request.emp_no is None
        or request.new_title is None
        or request.new_dept_no is None
        or request.new_salary is None
    ):
        return Rejection(
            ErrorKind.MALFORMED_REQUEST,
            "Please provide all 4: empNo, newSalary, newTitle, newDeptNo",
        )

    if request.new_salary < MIN_SALARY:
        return Rejection(ErrorKind.INVALID_SALARY, "Salary must be positive")

    title = request.new_title.strip()
    if not title or len(title) > MAX_TITLE_LENGTH:
        return Rejection(
            ErrorKind.INVALID_TITLE_LENGTH,
            f"New title must be 1-{MAX_TITLE_LENGTH} characters",
        )

    return None
