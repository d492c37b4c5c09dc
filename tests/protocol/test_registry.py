"""Tests for OperationRegistry, descriptors and help rendering."""

from __future__ import annotations

import pytest

from olm_mcp.protocol.errors import InvalidParamsError, MethodNotFoundError
from olm_mcp.protocol.models import ToolResult
from olm_mcp.protocol.normalizer import normalize
from olm_mcp.protocol.registry import (
    HELP_TITLE,
    OperationDescriptor,
    OperationRegistry,
    ParamSpec,
    render_help,
)
from olm_mcp.tools import build_registry

EXPECTED_NAMES = [
    "list_csvs",
    "get_csv",
    "list_subscriptions",
    "get_subscription",
    "list_catalog_sources",
    "get_catalog_source",
    "list_install_plans",
    "get_install_plan",
]


async def _noop(client, args, context) -> ToolResult:
    return ToolResult.from_text("ok")


def _descriptor(name: str, *params: ParamSpec, group: str = "Widget") -> OperationDescriptor:
    return OperationDescriptor(
        name=name, description=f"{name} things", group=group, params=params, handler=_noop
    )


class TestOperationRegistry:
    def test_default_registry_order(self) -> None:
        registry = build_registry()
        assert registry.names() == EXPECTED_NAMES
        assert [d.name for d in registry.describe()] == EXPECTED_NAMES
        assert len(registry) == 8

    def test_describe_is_stable(self) -> None:
        registry = build_registry()
        assert registry.describe() == registry.describe()

    def test_resolve(self) -> None:
        registry = build_registry()
        assert registry.resolve("get_csv").name == "get_csv"
        assert "get_csv" in registry
        assert "nope" not in registry

    def test_resolve_unknown(self) -> None:
        with pytest.raises(MethodNotFoundError, match="list_widgets"):
            build_registry().resolve("list_widgets")

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            OperationRegistry([_descriptor("a"), _descriptor("a")])

    def test_reserved_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="reserved"):
            OperationRegistry([_descriptor("list_tools")])

    def test_iteration(self) -> None:
        registry = OperationRegistry([_descriptor("a"), _descriptor("b")])
        assert [d.name for d in registry] == ["a", "b"]


class TestOperationDescriptor:
    def test_get_tool_def(self) -> None:
        wire = build_registry().resolve("get_csv").to_tool_def().to_wire()
        schema = wire["inputSchema"]
        assert wire["name"] == "get_csv"
        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"name", "namespace"}
        assert schema["properties"]["namespace"]["type"] == "string"
        assert schema["required"] == ["name"]

    def test_list_tool_def_has_no_required(self) -> None:
        schema = build_registry().resolve("list_csvs").to_tool_def().input_schema
        assert "required" not in schema
        assert "default" in schema["properties"]["namespace"]["description"]

    def test_params_keep_declaration_order(self) -> None:
        descriptor = build_registry().resolve("get_catalog_source")
        assert [p.name for p in descriptor.params] == ["name", "namespace"]
        assert descriptor.params[1].default == "olm"

    def test_required_with_default_is_not_required(self) -> None:
        descriptor = _descriptor("a", ParamSpec(name="ns", required=True, default="x"))
        assert descriptor.required_params == []

    def test_empty_bag_rejected_iff_required(self) -> None:
        for descriptor in build_registry().describe():
            if descriptor.required_params:
                with pytest.raises(InvalidParamsError):
                    normalize(descriptor, {})
            else:
                assert normalize(descriptor, {})


class TestRenderHelp:
    def test_sections(self) -> None:
        text = render_help(build_registry().describe())
        assert text.startswith(HELP_TITLE + "\n\n")
        assert "ClusterServiceVersion Tools:\n  - list_csvs:" in text
        assert "Subscription Tools:" in text
        assert "CatalogSource Tools:" in text
        assert "InstallPlan Tools:" in text
        assert text.endswith("General Tools:\n  - list_tools: Show this help message\n")

    def test_parameter_lines(self) -> None:
        text = render_help(build_registry().describe())
        assert "Parameters: namespace (optional, default: 'default')" in text
        assert "Parameters: namespace (optional, default: 'olm')" in text
        assert "Parameters: name (required), namespace (optional, default: 'default')" in text

    def test_operation_without_params(self) -> None:
        text = render_help([_descriptor("a", group=""), _descriptor("b", ParamSpec(name="q"))])
        assert "Other Tools:\n  - a: a things\n    Parameters: none" in text
        assert "Parameters: q (optional)" in text
