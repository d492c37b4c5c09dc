"""Tracing for the dispatcher.

Spans go to the global OpenTelemetry provider.  Until :func:`configure_telemetry`
installs the SDK (``olm-mcp[otel]``), that provider is the API's no-op one.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

ATTR_OPERATION = "olm_mcp.operation"
ATTR_NAMESPACE = "olm_mcp.namespace"
ATTR_ERROR_CODE = "olm_mcp.error.code"
ATTR_IS_ERROR = "olm_mcp.result.is_error"

_INSTRUMENTATION_NAME = "olm_mcp"

_SDK_HINT = "Install it with: pip install olm-mcp[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "olm-mcp",
    export_to_console: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider for *service_name*.

    Console spans go to stderr; stdout carries the stdio protocol.

    Raises:
        ImportError: ``opentelemetry-sdk`` (or, with *otlp_endpoint*,
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
        msg = f"opentelemetry-sdk is required to export OLM MCP traces. {_SDK_HINT}"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))
    trace.set_tracer_provider(provider)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_SDK_HINT}"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
