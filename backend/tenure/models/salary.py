"""Salary ORM — one salary segment of an employee.

Invariants:
    - (emp_no, from_date) is the primary key: one salary start per day
    - to_date == 9999-01-01 marks the current salary
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenure.db.base import Base


class Salary(Base):
    __tablename__ = "salaries"

    emp_no: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.emp_no", ondelete="CASCADE"),
        primary_key=True,
    )
    from_date: Mapped[date] = mapped_column(Date, primary_key=True)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)
    salary: Mapped[int] = mapped_column(Integer, nullable=False)

    employee: Mapped["Employee"] = relationship(
        "Employee", back_populates="salaries",
    )
