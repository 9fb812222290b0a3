"""Application lifespan: startup and shutdown.

Wiring only: builds the repositories and collaborators for the configured
backend onto app.state, sets up telemetry, and tears everything down on exit.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from bookflow.application.services.action_dispatcher import ActionDispatcher
from bookflow.core.config import Settings, get_settings
from bookflow.infrastructure.external.customers import HttpCustomerRecordStore
from bookflow.infrastructure.external.email import LogOnlyEmailSender
from bookflow.infrastructure.external.http import HttpxClient

logger = logging.getLogger(__name__)


def _build_repositories(app: FastAPI, settings: Settings) -> None:
    """Attach workflow, execution and notification stores for the configured backend."""
    if settings.database_backend == "postgres":
        from bookflow.infrastructure.persistence.database import get_session_factory
        from bookflow.infrastructure.persistence.repositories import (
            NotificationRepository,
            SqlExecutionRecordRepository,
            SqlWorkflowRepository,
        )

        session_factory = get_session_factory()
        app.state.workflow_repo = SqlWorkflowRepository(session_factory)
        app.state.execution_repo = SqlExecutionRecordRepository(session_factory)
        app.state.notification_store = NotificationRepository(session_factory)
    else:
        from bookflow.infrastructure.memory import (
            InMemoryExecutionRecordRepository,
            InMemoryNotificationStore,
            InMemoryWorkflowRepository,
        )

        app.state.workflow_repo = InMemoryWorkflowRepository()
        app.state.execution_repo = InMemoryExecutionRecordRepository()
        app.state.notification_store = InMemoryNotificationStore()
    logger.info("Persistence backend: %s", settings.database_backend)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: repositories, collaborators + dispatcher, telemetry (if
    enabled). Shutdown order: shared HTTP client close, telemetry shutdown,
    SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    _build_repositories(app, settings)

    # Shared HTTP client for webhooks and the customer API (connection reuse).
    app.state.http_client = HttpxClient()
    app.state.email_sender = LogOnlyEmailSender()
    app.state.customer_store = HttpCustomerRecordStore(
        app.state.http_client,
        settings.customer_service_url,
        token=settings.customer_service_token,
        timeout=settings.webhook_timeout_seconds,
    )
    app.state.action_dispatcher = ActionDispatcher(
        app.state.email_sender,
        app.state.notification_store,
        app.state.customer_store,
        app.state.http_client,
        action_timeout_seconds=settings.action_timeout_seconds,
        webhook_timeout_seconds=settings.webhook_timeout_seconds,
    )

    if settings.telemetry_enabled:
        from bookflow.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
            backend=settings.database_backend,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        await http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    from bookflow.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    from bookflow.infrastructure.persistence import database

    await database.dispose_engine()
