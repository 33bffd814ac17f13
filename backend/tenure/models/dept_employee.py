"""DeptEmployee ORM — one department assignment segment of an employee.

Invariants:
    - (emp_no, dept_no) is the primary key: an employee can never be
      assigned to the same department twice (no re-entry)
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenure.db.base import Base


class DeptEmployee(Base):
    __tablename__ = "dept_emp"

    emp_no: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.emp_no", ondelete="CASCADE"),
        primary_key=True,
    )
    dept_no: Mapped[str] = mapped_column(
        String(4), ForeignKey("departments.dept_no", ondelete="CASCADE"),
        primary_key=True,
    )
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)

    employee: Mapped["Employee"] = relationship(
        "Employee", back_populates="department_assignments",
    )
