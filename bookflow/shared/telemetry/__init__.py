"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from bookflow.shared.telemetry.logging import get_logger, setup_logging
from bookflow.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "add_span_attributes",
    "add_span_event",
    "get_logger",
    "setup_logging",
    "traced",
]
