"""Stdio transport — newline-delimited JSON-RPC over stdin/stdout.

One request line is fully handled, outbound cluster call included, before
the next is read, so responses come out in request order.  A line that
cannot be decoded yields a single ParseError response and the loop goes on.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import IO, TYPE_CHECKING, Any, TextIO

from pydantic import ValidationError

from olm_mcp.protocol.errors import (
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
)
from olm_mcp.protocol.models import NO_ID, JsonRpcRequest, JsonRpcResponse, ToolCallParams

if TYPE_CHECKING:
    from olm_mcp.protocol.dispatcher import OperationDispatcher

PROTOCOL_VERSION = "2025-06-18"


class StdioServer:
    """Drives an :class:`OperationDispatcher` from a line-oriented stream.

    Usage::

        server = StdioServer(dispatcher, server_name="olm-mcp-server")
        await server.serve(sys.stdin, sys.stdout)
    """

    def __init__(
        self,
        dispatcher: OperationDispatcher,
        *,
        server_name: str = "olm-mcp-server",
        server_version: str = "0.1.0",
        logger: logging.Logger | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._server_name = server_name
        self._server_version = server_version
        self._logger = logger or logging.getLogger(__name__)

    async def serve(self, reader: IO[Any], writer: TextIO) -> None:
        """Process lines from *reader* until EOF, writing one line per response.

        Text streams are read through their binary buffer when they have one,
        so invalid UTF-8 turns into a ParseError for that line only.
        """
        self._logger.info("Starting MCP stdio server")
        source = getattr(reader, "buffer", reader)
        loop = asyncio.get_running_loop()
        while True:
            raw: str | bytes = await loop.run_in_executor(None, source.readline)
            if not raw:
                break
            line = raw.decode(errors="replace") if isinstance(raw, bytes) else raw
            output = await self.handle_line(line)
            if output is not None:
                writer.write(output + "\n")
                writer.flush()
        self._logger.info("Stdin closed, stopping MCP stdio server")

    async def handle_line(self, line: str) -> str | None:
        """Turn one request line into one encoded response line.

        Returns ``None`` for blank lines and for notifications, which get no reply.
        """
        if not line.strip():
            return None

        try:
            request = self._decode(line)
        except ParseError as exc:
            self._logger.warning("Discarding malformed request: %s", exc.data)
            return self._encode(
                JsonRpcResponse.build(error=exc.to_rpc_error(), request_id=_recover_id(line))
            )

        response = await self.handle_request(request)
        if response is None:
            return None
        try:
            return self._encode(response)
        except (TypeError, ValueError) as exc:
            self._logger.exception("Failed to encode response for %s", request.method)
            fallback = JsonRpcResponse.build(error=InternalError(str(exc)).to_rpc_error())
            return self._encode(fallback.correlate(request))

    async def handle_request(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        """Route a decoded request; ``None`` means no reply is due."""
        self._logger.info("Handling MCP request: %s", request.method)
        method = request.method

        if method.startswith("notifications/") and not request.has_id:
            return None

        try:
            if method == "initialize":
                response = JsonRpcResponse.build(result=self._initialize_result())
            elif method == "ping":
                response = JsonRpcResponse.build(result={})
            elif method == "tools/list":
                response = JsonRpcResponse.build(result={"tools": self._dispatcher.tool_defs()})
            elif method == "tools/call":
                call = _tool_call_params(request.params)
                response = await self._dispatcher.invoke(call.name, call.arguments)
            else:
                raise MethodNotFoundError(method)
        except ProtocolError as exc:
            response = JsonRpcResponse.build(error=exc.to_rpc_error())

        return response.correlate(request)

    def _initialize_result(self) -> dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self._server_name, "version": self._server_version},
        }

    @staticmethod
    def _decode(line: str) -> JsonRpcRequest:
        try:
            raw = json.loads(line)
        except ValueError as exc:
            raise ParseError(str(exc)) from exc
        if not isinstance(raw, dict):
            raise ParseError("request must be a JSON object")
        try:
            return JsonRpcRequest.model_validate(raw)
        except ValidationError as exc:
            raise ParseError(str(exc)) from exc

    @staticmethod
    def _encode(response: JsonRpcResponse) -> str:
        return json.dumps(response.to_wire(), ensure_ascii=False)


def _tool_call_params(params: dict[str, Any]) -> ToolCallParams:
    """Unwrap the nested ``{name, arguments}`` envelope of ``tools/call``."""
    try:
        return ToolCallParams.model_validate(params)
    except ValidationError as exc:
        failed = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        if "name" in failed:
            raise InvalidParamsError("Tool name required", param="name") from exc
        raise InvalidParamsError("'arguments' must be an object", param="arguments") from exc


def _recover_id(line: str) -> Any:
    """Best-effort id of a request that failed envelope validation."""
    try:
        raw = json.loads(line)
    except ValueError:
        return NO_ID
    if isinstance(raw, dict) and "id" in raw:
        return raw["id"]
    return NO_ID
