"""OpenTelemetry SDK setup for the automation engine.

Spans from the trigger pipeline and action dispatcher (see
bookflow.shared.telemetry.tracing) are no-ops until setup_telemetry() installs
a tracer provider. The health endpoint is never traced.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

logger = logging.getLogger(__name__)

EXPORTERS = ("console", "otlp", "none")
UNTRACED_URLS = "/api/v1/health"


def build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Exporter for the configured type; None for "none".

    "otlp" without an endpoint and unknown types fall back to the console.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint,
                insecure=otlp_endpoint.startswith("http://"),
            )
        logger.warning("TELEMETRY_OTLP_ENDPOINT is not set; exporting spans to console")
    elif exporter_type != "console":
        logger.warning(
            "Unknown telemetry exporter %r (expected one of %s); using console",
            exporter_type,
            EXPORTERS,
        )
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider lifecycle for one process."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
        backend: str | None = None,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.backend = backend
        self.tracer_provider: TracerProvider | None = None

    def _resource(self) -> Resource:
        attributes: dict[str, str] = {
            SERVICE_NAME: self.service_name,
            SERVICE_VERSION: self.service_version,
            "deployment.environment": self.environment,
        }
        if self.backend:
            attributes["bookflow.persistence_backend"] = self.backend
        return Resource(attributes=attributes)

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Install a global tracer provider.

        Sampling follows the parent span when there is one and otherwise keeps
        sample_rate (0.0-1.0) of traces. Returns None when disabled or when the
        SDK could not be initialized; the service keeps running untraced.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        try:
            provider = TracerProvider(
                resource=self._resource(),
                sampler=ParentBased(TraceIdRatioBased(sample_rate)),
            )
            exporter = build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Failed to initialize telemetry")
            return None
        self.tracer_provider = provider
        logger.info(
            "OpenTelemetry initialized: service=%s version=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.service_version,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Trace incoming requests, except the health probe."""
        if self.tracer_provider is None:
            return
        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=self.tracer_provider,
            excluded_urls=UNTRACED_URLS,
        )

    def shutdown(self) -> None:
        """Flush pending spans and release the exporter."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None


def get_telemetry() -> TelemetryConfig | None:
    """Return the telemetry registered by the lifespan, if any."""
    return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    _telemetry = telemetry
