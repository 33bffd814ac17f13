"""Employee ORM — persists the aggregate root whose histories the promotion core mutates.

Invariants:
    - emp_no is the natural primary key, immutable once created
    - Owns four history collections, each ordered (to_date, from_date) so the
      last element is the current segment

Design Decisions:
    - selectin loading for histories: one round-trip per collection, never a
      lazy load after the session closes
    - cascade delete: histories are owned by the employee
"""

from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenure.db.base import Base


class Employee(Base):
    """Employee aggregate root — owns all effective-dated history."""
    __tablename__ = "employees"

    emp_no: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    first_name: Mapped[str] = mapped_column(String(14), nullable=False)
    last_name: Mapped[str] = mapped_column(String(16), nullable=False)
    gender: Mapped[str | None] = mapped_column(String(1), nullable=True)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Relationships
    salaries: Mapped[list["Salary"]] = relationship(
        "Salary", back_populates="employee",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[Salary.to_date, Salary.from_date]",
    )
    titles: Mapped[list["Title"]] = relationship(
        "Title", back_populates="employee",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[Title.to_date, Title.from_date]",
    )
    department_assignments: Mapped[list["DeptEmployee"]] = relationship(
        "DeptEmployee", back_populates="employee",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[DeptEmployee.to_date, DeptEmployee.from_date]",
    )
    manager_assignments: Mapped[list["DeptManager"]] = relationship(
        "DeptManager", back_populates="employee",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[DeptManager.to_date, DeptManager.from_date]",
    )
