"""DeptManager ORM — one period during which an employee managed a department.

Invariants:
    - (emp_no, dept_no, from_date) is the primary key: the same employee may
      manage the same department in more than one stint
    - Only written as a side effect of a title change to/from "Manager"
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenure.db.base import Base


class DeptManager(Base):
    __tablename__ = "dept_manager"

    emp_no: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.emp_no", ondelete="CASCADE"),
        primary_key=True,
    )
    dept_no: Mapped[str] = mapped_column(
        String(4), ForeignKey("departments.dept_no", ondelete="CASCADE"),
        primary_key=True,
    )
    from_date: Mapped[date] = mapped_column(Date, primary_key=True)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)

    employee: Mapped["Employee"] = relationship(
        "Employee", back_populates="manager_assignments",
    )
