"""OpenTelemetry tracing helpers for a2alink.

Client code only ever calls :func:`get_tracer`, which works against the bare
OpenTelemetry API: until an SDK provider is installed every span is a no-op.

Usage::

    from a2alink.utils.telemetry import ATTR_METHOD, get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("a2a.call") as span:
        span.set_attribute(ATTR_METHOD, "tasks/get")

Applications that want the spans exported call :func:`configure_telemetry`
once (requires the ``otel`` extra: ``pip install a2alink[otel]``).
"""

from __future__ import annotations

import os
from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_METHOD = "a2a.method"
ATTR_REQUEST_ID = "a2a.request_id"
ATTR_TASK_ID = "a2a.task_id"
ATTR_STREAMING = "a2a.streaming"
ATTR_HTTP_STATUS = "a2a.http.status_code"
ATTR_ERROR_CODE = "a2a.error.code"

_INSTRUMENTATION_NAME = "a2alink"

OTLP_ENDPOINT_ENV = "OTEL_EXPORTER_OTLP_ENDPOINT"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return the tracer for *name* (default: the library's own name)."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "a2alink",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> Any:
    """Install an SDK tracer provider and return it.

    Parameters
    ----------
    service_name:
        Reported as the ``service.name`` resource attribute.
    export_to_console:
        Print every finished span to stdout.
    otlp_endpoint:
        OTLP/gRPC collector address. Falls back to the
        ``OTEL_EXPORTER_OTLP_ENDPOINT`` environment variable; no OTLP export
        happens when neither is set.

    Raises
    ------
    ImportError
        If ``opentelemetry-sdk`` (or, for OTLP export,
        ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install a2alink[otel]"
        )
        raise ImportError(msg) from exc

    from a2alink import __version__

    resource = Resource.create({"service.name": service_name, "service.version": __version__})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    endpoint = otlp_endpoint or os.environ.get(OTLP_ENDPOINT_ENV)
    if endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(endpoint)))

    trace.set_tracer_provider(provider)
    return provider


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install a2alink[otel]"
        )
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
