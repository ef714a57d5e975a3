"""OpenTelemetry instrumentation for store round trips.

This module provides optional, configuration-driven tracing of the Redis
commands issued by the store layer.

Usage:
    # In config, enable tracing:
    config.tracing.enabled = True
    config.tracing.endpoint = "http://localhost:4318/v1/traces"

    # Initialize tracer early in application startup:
    tracer = configure_tracing(config.tracing)

    # Wrap store calls:
    with traced_request("json.get", attributes={"db.key": key}):
        document = await client.json().get(key)
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generator

from loguru import logger

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class TracingConfig:
    """OpenTelemetry tracing configuration.

    Attributes:
        enabled: Whether tracing is enabled (default: False).
        endpoint: OTLP HTTP endpoint receiving spans.
        service_name: Service name for traces (default: skygrip).
        service_version: Service version for traces.
        sample_rate: Sampling rate 0.0-1.0 (default: 1.0 = all traces).
        batch_export: Use BatchSpanProcessor vs SimpleSpanProcessor.
    """

    enabled: bool = False
    endpoint: str = "http://localhost:4318/v1/traces"
    service_name: str = "skygrip"
    service_version: str = "1.0.0"
    sample_rate: float = 1.0
    batch_export: bool = True


# =============================================================================
# Global State
# =============================================================================

_tracer: "Tracer | None" = None


def get_tracer() -> "Tracer | None":
    """Get the configured tracer, or None if tracing is disabled."""
    return _tracer


# =============================================================================
# Tracer Configuration
# =============================================================================


def configure_tracing(config: TracingConfig) -> "Tracer | None":
    """Configure OpenTelemetry tracing with an OTLP HTTP exporter.

    If tracing is disabled or setup fails, returns None.

    Args:
        config: TracingConfig with endpoint and settings.

    Returns:
        Configured Tracer instance, or None if disabled/failed.
    """
    global _tracer

    if not config.enabled:
        logger.debug("Tracing is disabled")
        _tracer = None
        return None

    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
    from opentelemetry.sdk.trace.sampling import ALWAYS_ON, TraceIdRatioBased

    try:
        resource = Resource.create(
            {
                "service.name": config.service_name,
                "service.version": config.service_version,
            }
        )

        if config.sample_rate >= 1.0:
            sampler = ALWAYS_ON
        else:
            sampler = TraceIdRatioBased(config.sample_rate)

        provider = TracerProvider(resource=resource, sampler=sampler)
        exporter = OTLPSpanExporter(endpoint=config.endpoint)

        # Simple processor for short-lived CLI runs so every span is flushed
        if config.batch_export:
            processor = BatchSpanProcessor(exporter)
        else:
            processor = SimpleSpanProcessor(exporter)

        provider.add_span_processor(processor)
        trace.set_tracer_provider(provider)

        _tracer = trace.get_tracer(config.service_name, config.service_version)

        logger.info(f"Tracing enabled: endpoint={config.endpoint}, sample_rate={config.sample_rate}")
        return _tracer

    except Exception as e:
        logger.warning(f"Failed to configure tracing: {e}")
        _tracer = None
        return None


def shutdown_tracing() -> None:
    """Shutdown tracing and flush any pending spans."""
    global _tracer

    if _tracer is None:
        return

    from opentelemetry import trace

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()
    logger.debug("Tracing shutdown complete")

    _tracer = None


# =============================================================================
# Request Tracing
# =============================================================================


@contextmanager
def traced_request(
    operation: str,
    *,
    tracer: "Tracer | None" = None,
    attributes: dict[str, Any] | None = None,
) -> Generator["Span | None", None, None]:
    """Create a span around a single store operation.

    Args:
        operation: Operation name (e.g., "json.get", "ft.search").
        tracer: Optional tracer (uses global if not provided).
        attributes: Additional span attributes.

    Yields:
        The span (or None if tracing disabled).

    Example:
        with traced_request("ft.search", attributes={"db.index": name}) as span:
            result = await client.ft(name).search(query)
    """
    active_tracer = tracer or _tracer

    if active_tracer is None:
        yield None
        return

    from opentelemetry.trace import Status, StatusCode

    with active_tracer.start_as_current_span(f"skygrip.{operation}") as span:
        span.set_attribute("db.system", "redis")
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    span.set_attribute(key, value)

        try:
            yield span
            span.set_status(Status(StatusCode.OK))
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
