"""Department Routes — department list and paginated department rosters.

Invariants:
    - page is 1-indexed; page < 1 is rejected by Query validation (400)
    - Unknown department -> 404; page past the end -> 200 with empty list
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tenure.config import get_settings
from tenure.infrastructure.database import get_db
from tenure.infrastructure.directory_store import SqlDirectoryReader
from tenure.infrastructure.segment_store import SqlSegmentStore
from tenure.schemas.employee import DepartmentEmployeesPage, DepartmentResponse
from tenure.services.directory import DirectoryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/departments", tags=["departments"])


def get_directory(db: AsyncSession = Depends(get_db)) -> DirectoryService:
    return DirectoryService(
        SqlDirectoryReader(db), SqlSegmentStore(db),
        get_settings().employees_page_size,
    )


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    directory: DirectoryService = Depends(get_directory),
):
    """All departments, ordered by dept_no."""
    return await directory.list_departments()


@router.get("/{dept_no}/employees", response_model=DepartmentEmployeesPage)
async def list_department_employees(
    dept_no: str,
    page: int = Query(1, ge=1),
    directory: DirectoryService = Depends(get_directory),
):
    """Employees ever assigned to a department, one page at a time."""
    employees = await directory.list_department_employees(dept_no, page)
    if not employees:
        logger.info(f"Department {dept_no} page {page} is empty")
    return DepartmentEmployeesPage(
        dept_no=dept_no.lower(),
        employees=employees,
        page=page,
        page_size=directory.page_size,
    )
