"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - find_employee returns complete, already-ordered histories (no lazy loads)
    - Writes are staged inside transaction() and become visible only on commit

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the core functions that
      consume the loaded values are never async themselves
"""

from contextlib import AbstractAsyncContextManager
from datetime import date
from typing import Protocol

from tenure.core.domain_types import DeptNo, EmpNo, SegmentCategory
from tenure.core.segments import EmployeeRecord, HistorySegment, SegmentKey


class SegmentStore(Protocol):
    """Contract for effective-dated history persistence — implemented by shell."""
    async def find_employee(
        self, emp_no: EmpNo, *, for_update: bool = False,
    ) -> EmployeeRecord | None: ...
    async def department_exists(self, dept_no: DeptNo) -> bool: ...
    def transaction(self) -> AbstractAsyncContextManager[None]: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def save_new_segment(
        self, category: SegmentCategory, emp_no: int, segment: HistorySegment,
    ) -> None: ...
    async def update_segment_to_date(
        self, category: SegmentCategory, key: SegmentKey, new_to_date: date,
    ) -> None: ...


class DirectoryReader(Protocol):
    """Contract for read-only department and employee listings."""
    async def list_departments(self) -> list[dict]: ...
    async def department_exists(self, dept_no: DeptNo) -> bool: ...
    async def list_department_employees(
        self, dept_no: DeptNo, limit: int, offset: int,
    ) -> list[dict]: ...
