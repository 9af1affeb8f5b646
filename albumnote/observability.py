"""OpenTelemetry and structlog configuration for Albumnote."""

import logging
import os

import structlog
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

# Service identification
SERVICE_NAME_VALUE = os.getenv("OTEL_SERVICE_NAME", "albumnote-api")
SERVICE_VERSION_VALUE = os.getenv("OTEL_SERVICE_VERSION", "0.1.0")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

logger = structlog.get_logger(__name__)

_initialized = False


def get_resource() -> Resource:
    """Create OpenTelemetry resource with service attributes."""
    return Resource.create(
        {
            SERVICE_NAME: SERVICE_NAME_VALUE,
            SERVICE_VERSION: SERVICE_VERSION_VALUE,
            "deployment.environment": ENVIRONMENT,
        }
    )


def _exporter_kind(signal: str) -> str:
    """Resolve the exporter for a signal ("traces" or "metrics") from the environment."""
    if os.getenv(f"OTEL_ENABLE_{signal.upper()}", "true").lower() != "true":
        return "none"

    kind = os.getenv(f"OTEL_{signal.upper()}_EXPORTER", "console").lower()
    if kind == "otlp" and not os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT"):
        logger.warning("otlp_endpoint_missing", signal=signal)
        return "none"
    if kind not in ("otlp", "console"):
        return "none"
    return kind


def configure_tracing() -> TracerProvider:
    """Configure OpenTelemetry tracing."""
    provider = TracerProvider(resource=get_resource())

    kind = _exporter_kind("traces")
    if kind == "otlp":
        endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    elif kind == "console":
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    logger.info("tracing_configured", exporter=kind)

    trace.set_tracer_provider(provider)
    return provider


def configure_metrics() -> MeterProvider:
    """Configure OpenTelemetry metrics."""
    metric_readers = []

    kind = _exporter_kind("metrics")
    if kind != "none":
        if kind == "otlp":
            exporter = OTLPMetricExporter(endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT"))
        else:
            exporter = ConsoleMetricExporter()
        metric_readers.append(
            PeriodicExportingMetricReader(
                exporter,
                export_interval_millis=int(os.getenv("OTEL_METRIC_EXPORT_INTERVAL", "60000")),
            )
        )

    logger.info("metrics_configured", exporter=kind)

    provider = MeterProvider(resource=get_resource(), metric_readers=metric_readers)
    metrics.set_meter_provider(provider)
    return provider


def add_otel_context(logger, method_name, event_dict):
    """Add OpenTelemetry trace context to log events."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def configure_logging():
    """Configure structlog on top of the standard library logger."""
    log_level = os.getenv("OTEL_LOG_LEVEL", "INFO").upper()
    log_format = os.getenv("LOG_FORMAT", "json").lower()  # json or console

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level, logging.INFO),
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_otel_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.ExceptionRenderer(),
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.get_logger().info("logging_configured", log_level=log_level, log_format=log_format)


def initialize_observability():
    """Initialize logging, tracing and metrics once per process."""
    global _initialized
    if _initialized:
        return

    configure_logging()
    configure_tracing()
    configure_metrics()
    _initialized = True

    logger.info(
        "observability_initialized",
        service_name=SERVICE_NAME_VALUE,
        service_version=SERVICE_VERSION_VALUE,
        environment=ENVIRONMENT,
    )


def get_tracer(name: str = __name__) -> trace.Tracer:
    """Get a tracer instance for creating spans."""
    return trace.get_tracer(name, SERVICE_VERSION_VALUE)


def get_meter(name: str = __name__) -> metrics.Meter:
    """Get a meter instance for creating metrics."""
    return metrics.get_meter(name, SERVICE_VERSION_VALUE)


class AppMetrics:
    """Application-specific counters."""

    def __init__(self):
        meter = get_meter("albumnote.metrics")

        self.notes_created = meter.create_counter(
            name="notes.created", description="Notes created", unit="1"
        )
        self.notes_deleted = meter.create_counter(
            name="notes.deleted", description="Notes deleted", unit="1"
        )
        self.note_tags_added = meter.create_counter(
            name="note_tags.added", description="Tags attached to notes", unit="1"
        )
        self.photos_added = meter.create_counter(
            name="photos.added", description="Photos added by directory scans", unit="1"
        )
        self.photos_removed = meter.create_counter(
            name="photos.removed", description="Photos removed by directory scans", unit="1"
        )
        self.scans_completed = meter.create_counter(
            name="scans.completed", description="Directory scans applied", unit="1"
        )
        self.scans_failed = meter.create_counter(
            name="scans.failed", description="Directory scans that failed", unit="1"
        )


# Global metrics instance
app_metrics: AppMetrics | None = None


def get_app_metrics() -> AppMetrics:
    """Get the global application metrics instance."""
    global app_metrics
    if app_metrics is None:
        app_metrics = AppMetrics()
    return app_metrics
