"""Promotion Orchestrator — validates, stages and commits one promotion as a single unit of work.

Invariants:
    - Structural validation runs before any store access
    - Everything from load to commit happens under the employee's lock and
      inside one store transaction (row locked FOR UPDATE)
    - Rejections stage nothing: the transaction ends with no persisted change
    - Staged writes are checked against history invariants before the first
      write; a promotion may not introduce a violation (HISTORY_CONFLICT)
    - Storage faults roll back the whole transaction and propagate as
      DatabaseError / ConcurrencyError (never a partial commit)

Design Decisions:
    - Returns PromotionOutcome (tagged result) instead of raising for business
      rules: the route maps kind -> status without exception plumbing
    - Store, lock registry and clock injected at construction: no global state,
      deterministic tests
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from tenure.core.domain_types import SegmentCategory
from tenure.core.enforce_promotion import evaluate_promotion
from tenure.core.errors import ErrorContext, ErrorKind, Rejection
from tenure.core.history_invariants import find_new_violations, find_violations
from tenure.core.promotion_request import PromotionRequest, validate_promotion_request
from tenure.core.repository_protocols import SegmentStore
from tenure.core.segment_transitions import (
    SegmentClosure, StagedWrite, apply_staged_writes, stage_transitions,
)
from tenure.core.segments import EmployeeRecord
from tenure.services.employee_locks import EmployeeLockRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromotionOutcome:
    """Either a committed promotion or the rejection that stopped it."""
    emp_no: int | None
    effective_date: date | None = None
    changed: list[SegmentCategory] = field(default_factory=list)
    rejection: Rejection | None = None

    @property
    def succeeded(self) -> bool:
        return self.rejection is None

    @property
    def http_status(self) -> int:
        return 201 if self.succeeded else self.rejection.http_status

    @classmethod
    def rejected(
        cls, emp_no: int | None, rejection: Rejection,
        effective_date: date | None = None,
    ) -> "PromotionOutcome":
        return cls(emp_no=emp_no, effective_date=effective_date, rejection=rejection)

    def to_response(self) -> dict:
        if not self.succeeded:
            return self.rejection.to_response(ErrorContext(
                emp_no=self.emp_no,
                effective_date=(
                    self.effective_date.isoformat() if self.effective_date else None
                ),
            ))
        return {
            "message": "Employee promoted successfully",
            "emp_no": self.emp_no,
            "effective_date": self.effective_date.isoformat(),
            "changed": [c.value for c in self.changed],
        }


class PromotionOrchestrator:
    """Runs request validation, business rules and segment transitions atomically."""

    def __init__(
        self,
        store: SegmentStore,
        locks: EmployeeLockRegistry,
        today: Callable[[], date] = date.today,
    ):
        self._store = store
        self._locks = locks
        self._today = today

    async def promote(self, request: PromotionRequest) -> PromotionOutcome:
        rejection = validate_promotion_request(request)
        if rejection is not None:
            self._log_rejection(request.emp_no, rejection)
            return PromotionOutcome.rejected(request.emp_no, rejection)

        async with self._locks.hold(request.emp_no):
            async with self._store.transaction():
                outcome = await self._promote_locked(request)

        if outcome.succeeded:
            logger.info(
                f"Employee {outcome.emp_no} promoted",
                extra={
                    "emp_no": outcome.emp_no,
                    "effective_date": outcome.effective_date.isoformat(),
                    "changed": [c.value for c in outcome.changed],
                },
            )
        else:
            self._log_rejection(request.emp_no, outcome.rejection)
        return outcome

    async def _promote_locked(self, request: PromotionRequest) -> PromotionOutcome:
        record = await self._store.find_employee(request.emp_no, for_update=True)
        target_exists = (
            await self._store.department_exists(request.target_dept_no)
            if record is not None else False
        )

        today = self._today()
        plan = evaluate_promotion(record, request, today, target_exists)
        if isinstance(plan, Rejection):
            return PromotionOutcome.rejected(
                request.emp_no, plan, request.promotion_date or today,
            )

        writes = stage_transitions(record, request, plan)
        conflict = self._check_invariants(record, writes)
        if conflict is not None:
            return PromotionOutcome.rejected(
                request.emp_no, conflict, plan.effective_date,
            )

        await self._write(record, writes)
        return PromotionOutcome(
            emp_no=record.emp_no,
            effective_date=plan.effective_date,
            changed=plan.changed_categories,
        )

    def _check_invariants(
        self, record: EmployeeRecord, writes: tuple[StagedWrite, ...],
    ) -> Rejection | None:
        legacy = find_violations(record)
        if legacy:
            logger.warning(
                f"Employee {record.emp_no} history already inconsistent",
                extra={
                    "emp_no": record.emp_no,
                    "violations": [v.message for v in legacy],
                },
            )
        introduced = find_new_violations(record, apply_staged_writes(record, writes))
        if not introduced:
            return None
        return Rejection(
            ErrorKind.HISTORY_CONFLICT,
            "Promotion conflicts with existing history: "
            + "; ".join(v.message for v in introduced),
        )

    async def _write(
        self, record: EmployeeRecord, writes: tuple[StagedWrite, ...],
    ) -> None:
        for write in writes:
            if isinstance(write, SegmentClosure):
                await self._store.update_segment_to_date(
                    write.category, write.segment.key, write.to_date,
                )
            else:
                await self._store.save_new_segment(
                    write.category, record.emp_no, write.segment,
                )

    @staticmethod
    def _log_rejection(emp_no: int | None, rejection: Rejection) -> None:
        level = logging.INFO if rejection.kind.is_not_found else logging.WARNING
        logger.log(
            level,
            f"Promotion rejected: {rejection.message}",
            extra={"emp_no": emp_no, "error_code": rejection.code},
        )

