"""Event trigger API: the single entry point for domain event producers."""

from typing import Annotated

from fastapi import APIRouter, Depends

from bookflow.api.v1.dependencies import get_trigger_pipeline
from bookflow.application.services import TriggerPipeline
from bookflow.schemas.execution import TriggerRequest, TriggerResponse

router = APIRouter()


@router.post("/trigger", response_model=TriggerResponse)
async def trigger_event(
    body: TriggerRequest,
    pipeline: Annotated[TriggerPipeline, Depends(get_trigger_pipeline)],
):
    """Run every active workflow bound to the event type whose conditions match.

    Always 200: action failures are reported in errors, and success is false
    only when the engine itself could not process the event.
    """
    result = await pipeline.trigger(body.event_type, body.context)
    return TriggerResponse.model_validate(result)
