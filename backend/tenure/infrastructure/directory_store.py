"""SQL Directory Reader — read-only department and employee listings.

Invariants:
    - Never writes; safe to share a session with read endpoints
    - Department employee listing covers every employee ever assigned to the
      department (not only current ones), ordered by emp_no
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenure.models.department import Department
from tenure.models.dept_employee import DeptEmployee
from tenure.models.employee import Employee


class SqlDirectoryReader:
    """DirectoryReader backed by one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_departments(self) -> list[dict]:
        result = await self.db.execute(
            select(Department).order_by(Department.dept_no),
        )
        return [
            {"dept_no": d.dept_no, "dept_name": d.dept_name}
            for d in result.scalars().all()
        ]

    async def department_exists(self, dept_no: str) -> bool:
        result = await self.db.execute(
            select(Department.dept_no)
            .where(func.lower(Department.dept_no) == dept_no.lower())
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_department_employees(
        self, dept_no: str, limit: int, offset: int,
    ) -> list[dict]:
        query = (
            select(
                Employee.emp_no, Employee.hire_date,
                Employee.first_name, Employee.last_name,
            )
            .join(DeptEmployee, DeptEmployee.emp_no == Employee.emp_no)
            .where(DeptEmployee.dept_no == dept_no.lower())
            .order_by(Employee.emp_no)
            .limit(limit)
            .offset(offset)
        )
        result = await self.db.execute(query)
        return [
            {
                "emp_no": row.emp_no,
                "hire_date": row.hire_date,
                "first_name": row.first_name,
                "last_name": row.last_name,
            }
            for row in result.all()
        ]
