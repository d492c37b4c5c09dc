"""Envelopes, registry, normalizer and dispatcher shared by both transports."""

from olm_mcp.protocol.context import CallContext, OperationCancelledError
from olm_mcp.protocol.dispatcher import OperationDispatcher
from olm_mcp.protocol.errors import (
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
)
from olm_mcp.protocol.models import (
    ErrorCode,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    ToolCallParams,
    ToolDef,
    ToolResult,
)
from olm_mcp.protocol.registry import OperationDescriptor, OperationRegistry, ParamSpec

__all__ = [
    "CallContext",
    "ErrorCode",
    "InternalError",
    "InvalidParamsError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "OperationCancelledError",
    "OperationDescriptor",
    "OperationDispatcher",
    "OperationRegistry",
    "ParamSpec",
    "ParseError",
    "ProtocolError",
    "TextContent",
    "ToolCallParams",
    "ToolDef",
    "ToolResult",
]
