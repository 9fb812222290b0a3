"""Application services: store, evaluator, dispatcher, pipeline, recorder, metrics, templates."""

from bookflow.application.services.action_dispatcher import ActionDispatcher
from bookflow.application.services.condition_evaluator import evaluate_condition, matches
from bookflow.application.services.execution_recorder import ExecutionRecorder
from bookflow.application.services.metrics import MetricsAggregator
from bookflow.application.services.template_renderer import render_config, render_string
from bookflow.application.services.trigger_pipeline import TriggerPipeline
from bookflow.application.services.workflow_store import WorkflowStore, parse_event_type
from bookflow.application.services.workflow_templates import (
    STARTER_TEMPLATES,
    StarterTemplate,
    WorkflowTemplateService,
)

__all__ = [
    "STARTER_TEMPLATES",
    "ActionDispatcher",
    "ExecutionRecorder",
    "MetricsAggregator",
    "StarterTemplate",
    "TriggerPipeline",
    "WorkflowStore",
    "WorkflowTemplateService",
    "evaluate_condition",
    "matches",
    "parse_event_type",
    "render_config",
    "render_string",
]
