"""SQL Segment Store — SegmentStore protocol over one async SQLAlchemy session.

Invariants:
    - find_employee returns complete histories ordered (to_date, from_date),
      converted to frozen EmployeeRecord values (no ORM object escapes)
    - for_update=True locks the employees row until the transaction ends
    - Closures are compare-and-set: only an OPEN segment can be closed, and
      exactly one row must change, otherwise ConcurrencyError
    - transaction() commits on normal exit, rolls back on any exception;
      SQLAlchemy faults surface as DatabaseError

Design Decisions:
    - Explicit UPDATE statements for closures over mutating loaded ORM objects:
      write order is exactly the staged order, no implicit flush ordering
    - New segments flushed immediately so key conflicts surface inside the
      transaction that caused them
"""

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncGenerator

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tenure.core.domain_types import OPEN_ENDED, SegmentCategory
from tenure.core.errors import ConcurrencyError, DatabaseError, ErrorContext
from tenure.core.segments import EmployeeRecord, HistorySegment, SegmentKey
from tenure.models.department import Department
from tenure.models.dept_employee import DeptEmployee
from tenure.models.dept_manager import DeptManager
from tenure.models.employee import Employee
from tenure.models.salary import Salary
from tenure.models.title import Title

logger = logging.getLogger(__name__)

_MODELS = {
    SegmentCategory.SALARY: Salary,
    SegmentCategory.TITLE: Title,
    SegmentCategory.DEPARTMENT: DeptEmployee,
    SegmentCategory.MANAGER: DeptManager,
}


def _segment(category: SegmentCategory, row) -> HistorySegment:
    value = {
        SegmentCategory.SALARY: lambda r: r.salary,
        SegmentCategory.TITLE: lambda r: r.title,
        SegmentCategory.DEPARTMENT: lambda r: r.dept_no,
        SegmentCategory.MANAGER: lambda r: r.dept_no,
    }[category](row)
    return HistorySegment(
        emp_no=row.emp_no,
        category=category,
        from_date=row.from_date,
        to_date=row.to_date,
        value=value,
    )


def _row(category: SegmentCategory, emp_no: int, segment: HistorySegment):
    model = _MODELS[category]
    fields = {
        "emp_no": emp_no,
        "from_date": segment.from_date,
        "to_date": segment.to_date,
    }
    if category == SegmentCategory.SALARY:
        fields["salary"] = segment.value
    elif category == SegmentCategory.TITLE:
        fields["title"] = segment.value
    else:
        fields["dept_no"] = segment.value
    return model(**fields)


def to_record(employee: Employee) -> EmployeeRecord:
    """Convert a loaded Employee row into a frozen EmployeeRecord."""
    return EmployeeRecord(
        emp_no=employee.emp_no,
        first_name=employee.first_name,
        last_name=employee.last_name,
        hire_date=employee.hire_date,
        birth_date=employee.birth_date,
        gender=employee.gender,
        salaries=tuple(
            _segment(SegmentCategory.SALARY, r) for r in employee.salaries
        ),
        titles=tuple(
            _segment(SegmentCategory.TITLE, r) for r in employee.titles
        ),
        departments=tuple(
            _segment(SegmentCategory.DEPARTMENT, r)
            for r in employee.department_assignments
        ),
        manager_assignments=tuple(
            _segment(SegmentCategory.MANAGER, r)
            for r in employee.manager_assignments
        ),
    )


class SqlSegmentStore:
    """SegmentStore backed by one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_employee(
        self, emp_no: int, *, for_update: bool = False,
    ) -> EmployeeRecord | None:
        stmt = (
            select(Employee)
            .where(Employee.emp_no == emp_no)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        employee = result.scalar_one_or_none()
        return to_record(employee) if employee is not None else None

    async def department_exists(self, dept_no: str) -> bool:
        result = await self.db.execute(
            select(Department.dept_no)
            .where(func.lower(Department.dept_no) == dept_no.lower())
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[None, None]:
        """Commit on success; roll back everything staged on any exception."""
        try:
            yield
            await self.commit()
        except SQLAlchemyError as e:
            await self.rollback()
            logger.error(f"Segment store transaction failed: {e}", exc_info=True)
            raise DatabaseError("Transaction rolled back", "commit") from e
        except BaseException:
            await self.rollback()
            raise

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def save_new_segment(
        self, category: SegmentCategory, emp_no: int, segment: HistorySegment,
    ) -> None:
        self.db.add(_row(category, emp_no, segment))
        await self.db.flush()

    async def update_segment_to_date(
        self, category: SegmentCategory, key: SegmentKey, new_to_date: date,
    ) -> None:
        model = _MODELS[category]
        result = await self.db.execute(
            update(model)
            .where(model.emp_no == key.emp_no)
            .where(model.from_date == key.from_date)
            .where(model.to_date == OPEN_ENDED)
            .values(to_date=new_to_date)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise ConcurrencyError(
                f"{category.value} segment from {key.from_date} is no longer open",
                ErrorContext(emp_no=key.emp_no),
            )
