"""Directory Service — read-only views over departments and employee records.

Invariants:
    - Never writes
    - Unknown department or employee raises ResourceNotFoundError (404)
    - Department pages are 1-indexed; a page past the end is an empty list

Design Decisions:
    - Employee records are served from the same EmployeeRecord values the
      promotion core uses: one conversion path from ORM rows
"""

from tenure.core.errors import ErrorContext, ResourceNotFoundError
from tenure.core.repository_protocols import DirectoryReader, SegmentStore
from tenure.core.segments import EmployeeRecord


class DirectoryService:
    """Department listings and employee record lookups."""

    def __init__(
        self, reader: DirectoryReader, store: SegmentStore, page_size: int = 20,
    ):
        self.reader = reader
        self.store = store
        self.page_size = page_size

    async def list_departments(self) -> list[dict]:
        return await self.reader.list_departments()

    async def get_employee_record(self, emp_no: int) -> EmployeeRecord:
        record = await self.store.find_employee(emp_no)
        if record is None:
            raise ResourceNotFoundError(
                "Employee", str(emp_no), ErrorContext(emp_no=emp_no),
            )
        return record

    async def list_department_employees(
        self, dept_no: str, page: int = 1,
    ) -> list[dict]:
        if not await self.reader.department_exists(dept_no):
            raise ResourceNotFoundError(
                "Department", dept_no, ErrorContext(dept_no=dept_no),
            )
        return await self.reader.list_department_employees(
            dept_no, limit=self.page_size, offset=(page - 1) * self.page_size,
        )
