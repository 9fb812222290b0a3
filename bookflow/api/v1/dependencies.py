"""Request-scoped services built from app.state (composition root).

Repositories and collaborators are created once in the lifespan; the services
here are thin and stateless, so building them per request is cheap.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from bookflow.application.services import (
    ExecutionRecorder,
    MetricsAggregator,
    TriggerPipeline,
    WorkflowStore,
    WorkflowTemplateService,
)
from bookflow.core.config import get_settings


def get_workflow_store(request: Request) -> WorkflowStore:
    return WorkflowStore(request.app.state.workflow_repo)


def get_execution_recorder(request: Request) -> ExecutionRecorder:
    return ExecutionRecorder(request.app.state.execution_repo)


def get_trigger_pipeline(
    request: Request,
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
    recorder: Annotated[ExecutionRecorder, Depends(get_execution_recorder)],
) -> TriggerPipeline:
    return TriggerPipeline(
        store,
        request.app.state.action_dispatcher,
        recorder,
        max_concurrent_workflows=get_settings().max_concurrent_workflows,
    )


def get_metrics_aggregator(
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
    recorder: Annotated[ExecutionRecorder, Depends(get_execution_recorder)],
) -> MetricsAggregator:
    return MetricsAggregator(store, recorder)


def get_template_service(
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
) -> WorkflowTemplateService:
    return WorkflowTemplateService(store)
