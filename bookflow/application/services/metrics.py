"""Metrics aggregator: statistics recomputed from the execution log."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable
from datetime import datetime

from bookflow.application.dtos.execution import (
    ActionTypeStats,
    ExecutionFilter,
    TopWorkflow,
    WorkflowMetrics,
    WorkflowStats,
)
from bookflow.application.services.execution_recorder import ExecutionRecorder
from bookflow.application.services.workflow_store import WorkflowStore
from bookflow.domain.entities.execution import ExecutionRecord
from bookflow.shared.enums import ExecutionStatus, WorkflowEventType
from bookflow.shared.telemetry.tracing import traced
from bookflow.shared.utils.datetime import ensure_utc

TOP_WORKFLOWS_LIMIT = 5


def success_rate(successful: int, total: int) -> float:
    """Percentage of successful executions; 100 when nothing has run."""
    if total == 0:
        return 100.0
    return round(successful / total * 100, 2)


def _average_duration(records: list[ExecutionRecord]) -> float:
    if not records:
        return 0.0
    return round(sum(r.total_duration_ms for r in records) / len(records), 2)


def _count_status(records: Iterable[ExecutionRecord]) -> Counter[ExecutionStatus]:
    return Counter(r.status for r in records)


class MetricsAggregator:
    """Summary and per-workflow statistics."""

    def __init__(self, store: WorkflowStore, recorder: ExecutionRecorder) -> None:
        self._store = store
        self._recorder = recorder

    @traced("metrics.get_stats")
    async def get_stats(self, since: datetime | None = None) -> WorkflowStats:
        """Aggregate over all records, or only those triggered at or after since."""
        definitions = await self._store.list()
        records = await self._recorder.list_all(
            ExecutionFilter(start=ensure_utc(since)) if since else None
        )
        statuses = _count_status(records)
        successful = statuses[ExecutionStatus.SUCCESS]

        by_event_type = {t.value: 0 for t in WorkflowEventType}
        for record in records:
            by_event_type[record.event_type.value] += 1

        action_totals: dict[str, list[int]] = defaultdict(lambda: [0, 0])
        for record in records:
            for result in record.action_results:
                bucket = action_totals[result.action_type]
                bucket[0] += 1
                if result.success:
                    bucket[1] += 1
        breakdown = {
            action_type: ActionTypeStats(
                total=total, successful=ok, failed=total - ok
            )
            for action_type, (total, ok) in sorted(action_totals.items())
        }

        names = {d.id: d.name for d in definitions}
        per_workflow: dict[str, list[ExecutionRecord]] = defaultdict(list)
        for record in records:
            per_workflow[record.workflow_id].append(record)
        ranked = sorted(per_workflow.items(), key=lambda item: (-len(item[1]), item[0]))
        top = [
            TopWorkflow(
                workflow_id=workflow_id,
                name=names.get(workflow_id),
                execution_count=len(items),
                success_rate=success_rate(
                    _count_status(items)[ExecutionStatus.SUCCESS], len(items)
                ),
            )
            for workflow_id, items in ranked[:TOP_WORKFLOWS_LIMIT]
        ]

        return WorkflowStats(
            total_workflows=len(definitions),
            active_workflows=sum(1 for d in definitions if d.is_active),
            total_executions=len(records),
            successful_executions=successful,
            partial_executions=statuses[ExecutionStatus.PARTIAL],
            failed_executions=statuses[ExecutionStatus.FAILED],
            success_rate=success_rate(successful, len(records)),
            average_execution_time=_average_duration(records),
            executions_by_status={s.value: statuses[s] for s in ExecutionStatus},
            executions_by_event_type=by_event_type,
            action_type_breakdown=breakdown,
            top_workflows=top,
        )

    async def get_workflow_metrics(self, workflow_id: str) -> WorkflowMetrics:
        """Metrics for one workflow. Raises ResourceNotFoundException for unknown ids."""
        await self._store.get(workflow_id)
        records = await self._recorder.list_all(ExecutionFilter(workflow_id=workflow_id))
        statuses = _count_status(records)
        successful = statuses[ExecutionStatus.SUCCESS]
        return WorkflowMetrics(
            workflow_id=workflow_id,
            total_executions=len(records),
            successful_executions=successful,
            partial_executions=statuses[ExecutionStatus.PARTIAL],
            failed_executions=statuses[ExecutionStatus.FAILED],
            success_rate=success_rate(successful, len(records)),
            average_execution_time=_average_duration(records),
            last_executed=max((r.triggered_at for r in records), default=None),
        )
