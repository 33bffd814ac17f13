"""Department ORM — reference table of department ids and names.

Invariants:
    - dept_no is stored lowercase (e.g. "d005")
    - dept_name is unique
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from tenure.db.base import Base


class Department(Base):
    """Department entity."""
    __tablename__ = "departments"

    dept_no: Mapped[str] = mapped_column(String(4), primary_key=True)
    dept_name: Mapped[str] = mapped_column(
        String(40), nullable=False, unique=True,
    )
