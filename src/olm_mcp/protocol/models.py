"""Protocol models — JSON-RPC 2.0 envelopes, tool definitions and payloads.

Both transports speak the same envelope; they differ only in how the
operation name and parameter bag are carried (nested ``tools/call`` on
stdio, flat ``method``/``params`` over HTTP).
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Sentinel for "the request carried no id"; ``None`` is a legal id value.
NO_ID: Any = object()


class ErrorCode(IntEnum):
    """Fixed JSON-RPC error codes."""

    PARSE_ERROR = -32700
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``id`` is opaque.  Whether it was present at all is tracked through
    ``model_fields_set`` so that an explicit ``null`` id is still echoed.
    """

    jsonrpc: str = "2.0"
    id: Any = None
    method: str
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("params", mode="before")
    @classmethod
    def _null_params(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def has_id(self) -> bool:
        return "id" in self.model_fields_set


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set.
    """

    jsonrpc: str = "2.0"
    id: Any = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "exactly one of 'result' or 'error' must be set"
            raise ValueError(msg)
        return self

    @classmethod
    def build(
        cls,
        *,
        result: dict[str, Any] | None = None,
        error: JsonRpcError | None = None,
        request_id: Any = NO_ID,
    ) -> JsonRpcResponse:
        """Create a response, attaching *request_id* only when one was given."""
        if request_id is NO_ID:
            return cls(result=result, error=error)
        return cls(id=request_id, result=result, error=error)

    @property
    def has_id(self) -> bool:
        return "id" in self.model_fields_set

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def correlate(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Return a copy carrying the id of *request*, if it had one."""
        if not request.has_id:
            return self
        return type(self).build(result=self.result, error=self.error, request_id=request.id)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON object written on the wire."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.has_id:
            data["id"] = self.id
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result
        return data


# ---------------------------------------------------------------------------
# MCP payloads
# ---------------------------------------------------------------------------


class ToolCallParams(BaseModel):
    """The nested ``{name, arguments}`` envelope of a stdio ``tools/call``."""

    name: str = Field(strict=True, min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def _null_arguments(cls, value: Any) -> Any:
        return {} if value is None else value


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Rendered handler output, forwarded untouched by the dispatcher."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @property
    def text(self) -> str:
        """Concatenated text of all content blocks."""
        return "".join(part.text for part in self.content)

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        """Create a successful result with a single text block."""
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, text: str) -> ToolResult:
        """Create an error-flagged result with a single text block."""
        return cls(content=[TextContent(text=text)], is_error=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
