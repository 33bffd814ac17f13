"""Employee Routes — promotion and full-record lookup.

Invariants:
    - POST /promote returns 201 on success, 400/404 per rejection kind
    - Rejections are returned, not raised: PromotionOutcome carries the status
    - One EmployeeLockRegistry per process, shared by every request

Design Decisions:
    - _employee_locks as module-level registry: process-wide by nature, like a
      connection pool; the database row lock covers multi-worker deployments
    - Orchestrator built per request around the request's session (injected
      store handle, no global persistence singleton)
"""

import logging
from datetime import date
from typing import Callable

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from tenure.config import get_settings
from tenure.core.errors import Rejection
from tenure.core.promotion_request import PromotionRequest
from tenure.infrastructure.database import get_db
from tenure.infrastructure.directory_store import SqlDirectoryReader
from tenure.infrastructure.segment_store import SqlSegmentStore
from tenure.schemas.employee import EmployeeRecordResponse
from tenure.schemas.promotion import PromotionBody, PromotionResponse
from tenure.services.directory import DirectoryService
from tenure.services.employee_locks import EmployeeLockRegistry
from tenure.services.promote_employee import PromotionOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/employees", tags=["employees"])

_employee_locks = EmployeeLockRegistry()


def get_clock() -> Callable[[], date]:
    """Source of "today" for promotions without an explicit date."""
    return date.today


def get_orchestrator(
    db: AsyncSession = Depends(get_db),
    today: Callable[[], date] = Depends(get_clock),
) -> PromotionOrchestrator:
    return PromotionOrchestrator(SqlSegmentStore(db), _employee_locks, today)


@router.post(
    "/promote",
    status_code=status.HTTP_201_CREATED,
    response_model=PromotionResponse,
    responses={400: {"description": "Rejected"}, 404: {"description": "Not found"}},
)
async def promote_employee(
    body: PromotionBody,
    orchestrator: PromotionOrchestrator = Depends(get_orchestrator),
):
    """Change an employee's salary, title and/or department as of one date."""
    request = PromotionRequest.from_payload(body.model_dump())
    if isinstance(request, Rejection):
        return JSONResponse(
            status_code=request.http_status, content=request.to_response(),
        )

    outcome = await orchestrator.promote(request)
    return JSONResponse(
        status_code=outcome.http_status, content=outcome.to_response(),
    )


@router.get("/{emp_no}", response_model=EmployeeRecordResponse)
async def get_employee_record(
    emp_no: int, db: AsyncSession = Depends(get_db),
):
    """Full record with salary, title, department and manager histories."""
    directory = DirectoryService(
        SqlDirectoryReader(db), SqlSegmentStore(db),
        get_settings().employees_page_size,
    )
    record = await directory.get_employee_record(emp_no)
    return EmployeeRecordResponse.from_record(record)
