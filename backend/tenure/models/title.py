"""Title ORM — one job-title segment of an employee.

Invariants:
    - (emp_no, title, from_date) is the primary key
    - Titles are stored title-cased ("Senior Engineer")
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenure.db.base import Base


class Title(Base):
    __tablename__ = "titles"

    emp_no: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.emp_no", ondelete="CASCADE"),
        primary_key=True,
    )
    title: Mapped[str] = mapped_column(String(50), primary_key=True)
    from_date: Mapped[date] = mapped_column(Date, primary_key=True)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)

    employee: Mapped["Employee"] = relationship(
        "Employee", back_populates="titles",
    )
