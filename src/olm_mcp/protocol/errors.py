"""Protocol-level fault types.

Each error maps onto a fixed JSON-RPC code and converts to the error form
of the response envelope.  Domain failures from the backing cluster never
use these; they are rendered into error-flagged payloads by the handlers.
"""

from __future__ import annotations

from typing import Any

from olm_mcp.protocol.models import ErrorCode, JsonRpcError


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_rpc_error(self) -> JsonRpcError:
        return JsonRpcError(code=int(self.code), message=self.message, data=self.data)


class ParseError(ProtocolError):
    """A request frame could not be decoded into a request envelope."""

    code = ErrorCode.PARSE_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__("Parse error", data=detail or None)


class MethodNotFoundError(ProtocolError):
    """The requested method or operation is not registered."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Method not found: {name}")


class InvalidParamsError(ProtocolError):
    """Parameters were missing or of the wrong shape."""

    code = ErrorCode.INVALID_PARAMS

    def __init__(self, detail: str, param: str | None = None) -> None:
        self.detail = detail
        self.param = param
        super().__init__(
            f"Invalid params: {detail}",
            data={"param": param} if param else None,
        )


class InternalError(ProtocolError):
    """The server failed while routing or encoding a request."""

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Internal error", data=detail or None)
