"""Execution recorder: append-only audit log of workflow executions."""

from __future__ import annotations

from dataclasses import replace

from bookflow.application.dtos.execution import ExecutionFilter, ExecutionPage
from bookflow.application.interfaces.repositories import IExecutionRecordRepository
from bookflow.application.services.workflow_store import parse_event_type
from bookflow.domain.entities.execution import ExecutionRecord
from bookflow.domain.exceptions import ValidationException
from bookflow.shared.enums import ExecutionStatus
from bookflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 200


class ExecutionRecorder:
    """Appends execution records and serves paginated history."""

    def __init__(self, repo: IExecutionRecordRepository) -> None:
        self._repo = repo

    async def record(self, record: ExecutionRecord) -> ExecutionRecord:
        await self._repo.append(record)
        logger.debug(
            "Execution recorded: id=%s workflow_id=%s status=%s",
            record.id,
            record.workflow_id,
            record.status.value,
        )
        return record

    async def history(
        self,
        filters: ExecutionFilter | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> ExecutionPage:
        """Return one page of records, newest first.

        Raises:
            ValidationException: page < 1, limit outside 1..MAX_PAGE_SIZE,
                unknown status, or start not before end.
        """
        if page < 1:
            raise ValidationException("page must be >= 1", field="page")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationException(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        if filters is not None:
            if filters.status is not None and filters.status not in ExecutionStatus.values():
                raise ValidationException(
                    f"Unknown status: {filters.status!r}", field="status"
                )
            if filters.event_type is not None:
                filters = replace(
                    filters, event_type=parse_event_type(filters.event_type).value
                )
            if (
                filters.start is not None
                and filters.end is not None
                and filters.start >= filters.end
            ):
                raise ValidationException("start must be before end", field="start")
        records, total = await self._repo.query(
            filters, skip=(page - 1) * limit, limit=limit
        )
        return ExecutionPage(data=records, total=total, page=page, limit=limit)

    async def list_all(self, filters: ExecutionFilter | None = None) -> list[ExecutionRecord]:
        return await self._repo.list_all(filters)
