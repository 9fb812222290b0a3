"""Trigger pipeline: event -> matching active workflows -> actions -> execution records.

Every matched workflow runs its actions strictly in declared order. Matched
workflows run concurrently with each other, bounded by max_concurrent_workflows.
A failed action never stops the remaining actions or other workflows; the
failure lands in the ExecutionRecord and in TriggerResult.errors while
TriggerResult.success stays true. success is false only when the engine itself
could not do its job (unknown event type, workflows could not be loaded, a
record could not be written).
"""

from __future__ import annotations

import asyncio
import copy
import time
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from bookflow.application.dtos.execution import TriggerError, TriggerResult
from bookflow.application.services.action_dispatcher import ActionDispatcher
from bookflow.application.services.condition_evaluator import matches
from bookflow.application.services.execution_recorder import ExecutionRecorder
from bookflow.application.services.workflow_store import WorkflowStore, parse_event_type
from bookflow.domain.entities.execution import ActionResult, ExecutionRecord, derive_status
from bookflow.domain.entities.workflow import Condition, WorkflowDefinition
from bookflow.domain.exceptions import ValidationException
from bookflow.shared.enums import WorkflowEventType
from bookflow.shared.telemetry.logging import get_logger
from bookflow.shared.telemetry.tracing import add_span_attributes, add_span_event, traced
from bookflow.shared.utils.datetime import elapsed_ms, utc_now
from bookflow.shared.utils.generators import generate_cuid

logger = get_logger(__name__)

Matcher = Callable[[Sequence[Condition], Mapping[str, Any]], bool]


class _WorkflowOutcome:
    __slots__ = ("definition", "record", "fault")

    def __init__(
        self,
        definition: WorkflowDefinition,
        record: ExecutionRecord | None,
        fault: str | None,
    ) -> None:
        self.definition = definition
        self.record = record
        self.fault = fault


class TriggerPipeline:
    """Single entry point for domain events: trigger(event_type, context)."""

    def __init__(
        self,
        store: WorkflowStore,
        dispatcher: ActionDispatcher,
        recorder: ExecutionRecorder,
        *,
        max_concurrent_workflows: int = 8,
        matcher: Matcher = matches,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._recorder = recorder
        self._max_concurrent = max(1, max_concurrent_workflows)
        self._matcher = matcher

    @traced("trigger_pipeline.trigger")
    async def trigger(
        self, event_type: WorkflowEventType | str, context: Mapping[str, Any]
    ) -> TriggerResult:
        """Run every active workflow for event_type whose conditions match context."""
        try:
            parsed = parse_event_type(event_type)
        except ValidationException as e:
            logger.warning("Trigger rejected: %s", e.message)
            return TriggerResult(
                success=False,
                triggered_workflow_ids=[],
                executed_actions_count=0,
                errors=[TriggerError(workflow_id=None, action_type=None, error=e.message)],
            )
        add_span_attributes(event_type=parsed.value)

        try:
            frozen = MappingProxyType(copy.deepcopy(dict(context or {})))
            definitions = await self._store.find_active_by_event_type(parsed)
        except Exception as e:
            logger.exception("Failed to load workflows for %s", parsed.value)
            return TriggerResult(
                success=False,
                triggered_workflow_ids=[],
                executed_actions_count=0,
                errors=[
                    TriggerError(
                        workflow_id=None,
                        action_type=None,
                        error=f"failed to load workflows: {e}",
                    )
                ],
            )

        matched = [d for d in definitions if self._matcher(d.conditions, frozen)]
        logger.info(
            "Trigger %s: %d active workflow(s), %d matched",
            parsed.value,
            len(definitions),
            len(matched),
        )

        semaphore = asyncio.Semaphore(self._max_concurrent)
        outcomes = await asyncio.gather(
            *(self._run_workflow(d, parsed, frozen, semaphore) for d in matched)
        )

        errors: list[TriggerError] = []
        execution_ids: list[str] = []
        executed = 0
        engine_ok = True
        for outcome in outcomes:
            if outcome.record is not None:
                executed += len(outcome.record.action_results)
                if outcome.fault is None:
                    execution_ids.append(outcome.record.id)
                errors.extend(
                    TriggerError(
                        workflow_id=outcome.definition.id,
                        action_type=r.action_type,
                        error=r.error or "action failed",
                    )
                    for r in outcome.record.action_results
                    if not r.success
                )
            if outcome.fault is not None:
                engine_ok = False
                errors.append(
                    TriggerError(
                        workflow_id=outcome.definition.id,
                        action_type=None,
                        error=outcome.fault,
                    )
                )

        return TriggerResult(
            success=engine_ok,
            triggered_workflow_ids=[d.id for d in matched],
            executed_actions_count=executed,
            errors=errors,
            execution_ids=execution_ids,
        )

    async def _run_workflow(
        self,
        definition: WorkflowDefinition,
        event_type: WorkflowEventType,
        context: Mapping[str, Any],
        semaphore: asyncio.Semaphore,
    ) -> _WorkflowOutcome:
        async with semaphore:
            triggered_at = utc_now()
            start = time.perf_counter()
            results: list[ActionResult] = []
            for action in definition.actions:
                results.append(await self._dispatcher.execute(action, context))
            record = ExecutionRecord(
                id=generate_cuid(),
                workflow_id=definition.id,
                event_type=event_type,
                triggered_at=triggered_at,
                status=derive_status(results),
                action_results=tuple(results),
                total_duration_ms=elapsed_ms(start, time.perf_counter()),
            )
            try:
                await self._recorder.record(record)
            except Exception as e:
                logger.exception(
                    "Failed to record execution for workflow %s", definition.id
                )
                return _WorkflowOutcome(
                    definition, record, f"failed to record execution: {e}"
                )
            add_span_event(
                "workflow.executed",
                {"workflow_id": definition.id, "status": record.status.value},
            )
            if record.errors:
                logger.warning(
                    "Workflow %s finished %s: %s",
                    definition.id,
                    record.status.value,
                    "; ".join(record.errors),
                )
            return _WorkflowOutcome(definition, record, None)
