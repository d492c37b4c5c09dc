"""HTTP transport — one flat JSON-RPC request per POST body.

Differs from stdio on the wire: the top-level ``method`` is the operation
name and the top-level ``params`` is the parameter bag, with no
``tools/call`` nesting.  Transport faults (wrong verb, undecodable body,
unencodable response) use HTTP status codes instead of error envelopes.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route

from olm_mcp.protocol.models import JsonRpcRequest, JsonRpcResponse
from olm_mcp.protocol.normalizer import flatten_params
from olm_mcp.protocol.registry import LIST_TOOLS

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from starlette.requests import Request

    from olm_mcp.protocol.dispatcher import OperationDispatcher

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class HttpAdapter:
    """Starlette endpoint that feeds request bodies to the dispatcher."""

    def __init__(
        self,
        dispatcher: OperationDispatcher,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._logger = logger or logging.getLogger(__name__)

    async def handle(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        if request.method != "POST":
            return PlainTextResponse("Method not allowed", status_code=405, headers=CORS_HEADERS)

        body = await request.body()
        try:
            raw = json.loads(body)
            if not isinstance(raw, dict):
                raise ValueError("request must be a JSON object")
            rpc = JsonRpcRequest.model_validate(raw)
        except (ValueError, ValidationError) as exc:
            self._logger.error("Error decoding request: %s", exc)
            return PlainTextResponse("Bad request", status_code=400, headers=CORS_HEADERS)

        response = await self.dispatch(rpc)

        try:
            content = json.dumps(response.to_wire(), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            self._logger.error("Error encoding response: %s", exc)
            return PlainTextResponse(
                "Internal server error", status_code=500, headers=CORS_HEADERS
            )
        return Response(content, media_type="application/json", headers=CORS_HEADERS)

    async def dispatch(self, rpc: JsonRpcRequest) -> JsonRpcResponse:
        """Route a decoded flat request to the dispatcher."""
        params = flatten_params(rpc.params)
        self._logger.info("Handling request: %s with params: %s", rpc.method, params)
        if rpc.method == LIST_TOOLS:
            response = JsonRpcResponse.build(result=self._dispatcher.help().to_wire())
        else:
            response = await self._dispatcher.invoke(rpc.method, params)
        return response.correlate(rpc)


def create_app(
    dispatcher: OperationDispatcher,
    *,
    logger: logging.Logger | None = None,
    lifespan: Callable[[Starlette], Any] | None = None,
) -> Starlette:
    """Build the ASGI application; every path is served by the adapter."""
    adapter = HttpAdapter(dispatcher, logger=logger)
    routes = [
        Route("/", adapter.handle, methods=_ALL_METHODS),
        Route("/{path:path}", adapter.handle, methods=_ALL_METHODS),
    ]
    return Starlette(routes=routes, lifespan=lifespan)


def client_lifespan(client: Any) -> Callable[[Starlette], Any]:
    """Lifespan that keeps an async-context-managed *client* open while serving."""

    @asynccontextmanager
    async def _lifespan(_app: Starlette) -> AsyncIterator[None]:
        async with client:
            yield

    return _lifespan


def serve_http(app: Starlette, *, host: str, port: int, log_level: str = "info") -> None:
    """Run *app* under uvicorn until interrupted."""
    import uvicorn

    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
