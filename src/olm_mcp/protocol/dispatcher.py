"""OperationDispatcher — transport-independent operation execution.

Both transports reduce a request to ``(operation name, parameter bag,
context)``, call :meth:`OperationDispatcher.invoke`, and serialize the
returned envelope back into their own wire shape.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from olm_mcp.protocol.context import CallContext
from olm_mcp.protocol.errors import InternalError, ProtocolError
from olm_mcp.protocol.models import JsonRpcResponse, ToolResult
from olm_mcp.protocol.normalizer import normalize
from olm_mcp.protocol.registry import render_help
from olm_mcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_IS_ERROR,
    ATTR_NAMESPACE,
    ATTR_OPERATION,
    get_tracer,
)

if TYPE_CHECKING:
    from olm_mcp.kube.client import ResourceClient
    from olm_mcp.protocol.registry import OperationRegistry

_tracer = get_tracer(__name__)


class OperationDispatcher:
    """Resolves, validates and runs operations against a resource client.

    Usage::

        dispatcher = OperationDispatcher(build_registry(), client)
        response = await dispatcher.invoke("get_csv", {"name": "etcd.v0.9.4"})

    ``invoke`` never raises.  Protocol faults (unknown operation, missing
    parameter, handler crash) come back in the error form of the envelope;
    cluster-side failures come back as error-flagged result payloads.
    """

    def __init__(
        self,
        registry: OperationRegistry,
        client: ResourceClient,
        *,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._client = client
        self._timeout = timeout
        self._logger = logger or logging.getLogger(__name__)

    def new_context(self) -> CallContext:
        """Create a context carrying the configured per-call timeout."""
        return CallContext(timeout=self._timeout)

    def tool_defs(self) -> list[dict[str, Any]]:
        """Structured operation list for capability negotiation."""
        return [d.to_tool_def().to_wire() for d in self._registry.describe()]

    def help(self) -> ToolResult:
        """Prose help text listing every operation."""
        return ToolResult.from_text(render_help(self._registry.describe()))

    async def invoke(
        self,
        name: str,
        raw_params: Mapping[str, Any] | None,
        context: CallContext | None = None,
    ) -> JsonRpcResponse:
        """Run operation *name* and wrap its outcome in a response envelope."""
        with _tracer.start_as_current_span("olm_mcp.dispatch") as span:
            span.set_attribute(ATTR_OPERATION, name)
            try:
                descriptor = self._registry.resolve(name)
                args = normalize(descriptor, raw_params)
            except ProtocolError as exc:
                self._logger.info("Rejected %s: %s", name, exc.message)
                span.set_attribute(ATTR_ERROR_CODE, int(exc.code))
                return JsonRpcResponse.build(error=exc.to_rpc_error())

            if "namespace" in args:
                span.set_attribute(ATTR_NAMESPACE, args["namespace"])
            self._logger.info("Invoking %s with %s", name, args)
            try:
                result = await descriptor.handler(
                    self._client, args, context or self.new_context()
                )
            except Exception as exc:
                self._logger.exception("Handler for %s failed", name)
                err = InternalError(str(exc))
                span.set_attribute(ATTR_ERROR_CODE, int(err.code))
                return JsonRpcResponse.build(error=err.to_rpc_error())

            span.set_attribute(ATTR_IS_ERROR, result.is_error)
            return JsonRpcResponse.build(result=result.to_wire())
