"""Tests for protocol error types."""

from __future__ import annotations

from olm_mcp.protocol.errors import (
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
)
from olm_mcp.protocol.models import ErrorCode


class TestProtocolErrors:
    def test_codes(self) -> None:
        assert ParseError().code == ErrorCode.PARSE_ERROR == -32700
        assert MethodNotFoundError("x").code == -32601
        assert InvalidParamsError("x").code == -32602
        assert InternalError().code == -32603

    def test_all_are_protocol_errors(self) -> None:
        for exc in (ParseError(), MethodNotFoundError("x"), InvalidParamsError("x"), InternalError()):
            assert isinstance(exc, ProtocolError)

    def test_method_not_found_names_method(self) -> None:
        err = MethodNotFoundError("list_widgets")
        assert err.name == "list_widgets"
        rpc = err.to_rpc_error()
        assert rpc.code == -32601
        assert "list_widgets" in rpc.message

    def test_invalid_params_carries_param(self) -> None:
        err = InvalidParamsError("Missing required parameter: 'name'", param="name")
        rpc = err.to_rpc_error()
        assert rpc.message == "Invalid params: Missing required parameter: 'name'"
        assert rpc.data == {"param": "name"}

    def test_invalid_params_without_param(self) -> None:
        assert InvalidParamsError("bad").to_rpc_error().data is None

    def test_parse_error_detail_in_data(self) -> None:
        rpc = ParseError("Expecting value").to_rpc_error()
        assert rpc.message == "Parse error"
        assert rpc.data == "Expecting value"
        assert ParseError().to_rpc_error().data is None

    def test_str(self) -> None:
        assert str(InternalError("boom")) == "Internal error"
