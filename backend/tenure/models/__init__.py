"""ORM Models — SQLAlchemy declarative models for employees and their histories.

Invariants:
    - All models inherit from Base (db/base.py)
    - Employee is the aggregate root; all history rows scoped by emp_no

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from tenure.models.employee import Employee  # noqa: F401
from tenure.models.department import Department  # noqa: F401
from tenure.models.salary import Salary  # noqa: F401
from tenure.models.title import Title  # noqa: F401
from tenure.models.dept_employee import DeptEmployee  # noqa: F401
from tenure.models.dept_manager import DeptManager  # noqa: F401
