"""Initial schema — employees, departments and the four history tables.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("emp_no", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("birth_date", sa.Date, nullable=True),
        sa.Column("first_name", sa.String(14), nullable=False),
        sa.Column("last_name", sa.String(16), nullable=False),
        sa.Column("gender", sa.String(1), nullable=True),
        sa.Column("hire_date", sa.Date, nullable=False),
    )

    op.create_table(
        "departments",
        sa.Column("dept_no", sa.String(4), primary_key=True),
        sa.Column("dept_name", sa.String(40), nullable=False, unique=True),
    )

    op.create_table(
        "salaries",
        sa.Column("emp_no", sa.Integer, sa.ForeignKey("employees.emp_no", ondelete="CASCADE"), primary_key=True),
        sa.Column("from_date", sa.Date, primary_key=True),
        sa.Column("to_date", sa.Date, nullable=False),
        sa.Column("salary", sa.Integer, nullable=False),
    )

    op.create_table(
        "titles",
        sa.Column("emp_no", sa.Integer, sa.ForeignKey("employees.emp_no", ondelete="CASCADE"), primary_key=True),
        sa.Column("title", sa.String(50), primary_key=True),
        sa.Column("from_date", sa.Date, primary_key=True),
        sa.Column("to_date", sa.Date, nullable=False),
    )

    op.create_table(
        "dept_emp",
        sa.Column("emp_no", sa.Integer, sa.ForeignKey("employees.emp_no", ondelete="CASCADE"), primary_key=True),
        sa.Column("dept_no", sa.String(4), sa.ForeignKey("departments.dept_no", ondelete="CASCADE"), primary_key=True),
        sa.Column("from_date", sa.Date, nullable=False),
        sa.Column("to_date", sa.Date, nullable=False),
    )

    op.create_table(
        "dept_manager",
        sa.Column("emp_no", sa.Integer, sa.ForeignKey("employees.emp_no", ondelete="CASCADE"), primary_key=True),
        sa.Column("dept_no", sa.String(4), sa.ForeignKey("departments.dept_no", ondelete="CASCADE"), primary_key=True),
        sa.Column("from_date", sa.Date, primary_key=True),
        sa.Column("to_date", sa.Date, nullable=False),
    )

    # current-segment lookups scan by (emp_no, to_date)
    op.create_index("ix_salaries_emp_to", "salaries", ["emp_no", "to_date"])
    op.create_index("ix_titles_emp_to", "titles", ["emp_no", "to_date"])
    op.create_index("ix_dept_emp_dept", "dept_emp", ["dept_no", "emp_no"])


def downgrade() -> None:
    op.drop_index("ix_dept_emp_dept", table_name="dept_emp")
    op.drop_index("ix_titles_emp_to", table_name="titles")
    op.drop_index("ix_salaries_emp_to", table_name="salaries")
    op.drop_table("dept_manager")
    op.drop_table("dept_emp")
    op.drop_table("titles")
    op.drop_table("salaries")
    op.drop_table("departments")
    op.drop_table("employees")
