"""Workflow API: thin routes delegating to WorkflowStore, ExecutionRecorder and MetricsAggregator.

Static paths (/templates, /stats, /executions) are registered before
/{workflow_id} so they are not captured as ids.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from bookflow.api.v1.dependencies import (
    get_execution_recorder,
    get_metrics_aggregator,
    get_template_service,
    get_workflow_store,
)
from bookflow.application.dtos import (
    ExecutionFilter,
    ExecutionPage,
    WorkflowCreate,
    WorkflowFilter,
    WorkflowPatch,
)
from bookflow.application.services import (
    ExecutionRecorder,
    MetricsAggregator,
    WorkflowStore,
    WorkflowTemplateService,
)
from bookflow.core.limiter import limit_writes
from bookflow.schemas.execution import (
    ExecutionHistoryResponse,
    ExecutionRecordResponse,
    PaginationResponse,
    WorkflowMetricsResponse,
    WorkflowStatsResponse,
)
from bookflow.schemas.workflow import (
    CreateFromTemplateRequest,
    StarterTemplateResponse,
    WorkflowCreateRequest,
    WorkflowResponse,
    WorkflowUpdate,
)

router = APIRouter()


def _history_response(page: ExecutionPage) -> ExecutionHistoryResponse:
    return ExecutionHistoryResponse(
        data=[ExecutionRecordResponse.model_validate(r) for r in page.data],
        total=page.total,
        pagination=PaginationResponse(
            page=page.page, limit=page.limit, total_pages=page.total_pages
        ),
    )


@router.post("", response_model=WorkflowResponse, status_code=201)
@limit_writes
async def create_workflow(
    request: Request,
    body: WorkflowCreateRequest,
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
):
    """Create a workflow."""
    workflow = await store.create(
        WorkflowCreate(
            name=body.name,
            event_type=body.event_type,
            actions=[a.model_dump() for a in body.actions],
            conditions=[c.model_dump() for c in body.conditions],
            description=body.description,
            is_active=body.is_active,
        )
    )
    return WorkflowResponse.model_validate(workflow)


@router.get("", response_model=list[WorkflowResponse])
async def list_workflows(
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
    is_active: bool | None = Query(None),
    event_type: str | None = Query(None),
):
    """List workflows, optionally filtered by active flag and event type."""
    workflows = await store.list(WorkflowFilter(is_active=is_active, event_type=event_type))
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.get("/templates", response_model=list[StarterTemplateResponse])
async def list_templates(
    templates: Annotated[WorkflowTemplateService, Depends(get_template_service)],
):
    """List starter workflow templates."""
    return [StarterTemplateResponse.model_validate(t) for t in templates.list_templates()]


@router.post("/from-template", response_model=WorkflowResponse, status_code=201)
@limit_writes
async def create_from_template(
    request: Request,
    body: CreateFromTemplateRequest,
    templates: Annotated[WorkflowTemplateService, Depends(get_template_service)],
):
    """Create a workflow from a starter template."""
    workflow = await templates.create_from_template(
        body.template_id, body.name, body.customizations
    )
    return WorkflowResponse.model_validate(workflow)


@router.get("/stats", response_model=WorkflowStatsResponse)
async def get_stats(
    metrics: Annotated[MetricsAggregator, Depends(get_metrics_aggregator)],
    since: datetime | None = Query(None, description="Only executions at or after this time"),
):
    """Aggregate statistics over the execution log."""
    return WorkflowStatsResponse.model_validate(await metrics.get_stats(since))


@router.get("/executions", response_model=ExecutionHistoryResponse)
async def list_executions(
    recorder: Annotated[ExecutionRecorder, Depends(get_execution_recorder)],
    workflow_id: str | None = Query(None),
    event_type: str | None = Query(None),
    status: str | None = Query(None),
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
):
    """Execution history across workflows, newest first."""
    result = await recorder.history(
        ExecutionFilter(
            workflow_id=workflow_id,
            event_type=event_type,
            status=status,
            start=start,
            end=end,
        ),
        page=page,
        limit=limit,
    )
    return _history_response(result)


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: str,
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
):
    """Get workflow by id."""
    return WorkflowResponse.model_validate(await store.get(workflow_id))


@router.put("/{workflow_id}", response_model=WorkflowResponse)
@limit_writes
async def update_workflow(
    request: Request,
    workflow_id: str,
    body: WorkflowUpdate,
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
):
    """Update workflow; only fields present in the body change."""
    changes = body.model_dump(exclude_unset=True)
    workflow = await store.update(workflow_id, WorkflowPatch(**changes))
    return WorkflowResponse.model_validate(workflow)


@router.delete("/{workflow_id}", status_code=204)
@limit_writes
async def delete_workflow(
    request: Request,
    workflow_id: str,
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
) -> Response:
    """Delete workflow. Its execution records are kept."""
    await store.delete(workflow_id)
    return Response(status_code=204)


@router.get("/{workflow_id}/metrics", response_model=WorkflowMetricsResponse)
async def get_workflow_metrics(
    workflow_id: str,
    metrics: Annotated[MetricsAggregator, Depends(get_metrics_aggregator)],
):
    """Per-workflow execution metrics."""
    return WorkflowMetricsResponse.model_validate(
        await metrics.get_workflow_metrics(workflow_id)
    )


@router.get("/{workflow_id}/executions", response_model=ExecutionHistoryResponse)
async def get_workflow_executions(
    workflow_id: str,
    store: Annotated[WorkflowStore, Depends(get_workflow_store)],
    recorder: Annotated[ExecutionRecorder, Depends(get_execution_recorder)],
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
):
    """Execution history for one workflow, newest first."""
    await store.get(workflow_id)
    result = await recorder.history(
        ExecutionFilter(workflow_id=workflow_id), page=page, limit=limit
    )
    return _history_response(result)
