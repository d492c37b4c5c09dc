"""Tests for parameter normalization."""

from __future__ import annotations

import pytest

from olm_mcp.protocol.errors import InvalidParamsError
from olm_mcp.protocol.models import ToolResult
from olm_mcp.protocol.normalizer import flatten_params, normalize
from olm_mcp.protocol.registry import OperationDescriptor, ParamSpec
from olm_mcp.tools import build_registry


async def _noop(client, args, context) -> ToolResult:
    return ToolResult.from_text("")


@pytest.fixture
def registry():
    return build_registry()


class TestFlattenParams:
    def test_keeps_strings_only(self) -> None:
        raw = {"name": "etcd", "namespace": 42, "labels": {"a": "b"}, "flag": True, "x": None}
        assert flatten_params(raw) == {"name": "etcd"}

    def test_empty(self) -> None:
        assert flatten_params(None) == {}
        assert flatten_params({}) == {}


class TestNormalize:
    def test_csv_namespace_default(self, registry) -> None:
        args = normalize(registry.resolve("get_csv"), {"name": "foo"})
        assert args == {"name": "foo", "namespace": "default"}

    def test_catalog_namespace_default(self, registry) -> None:
        args = normalize(registry.resolve("get_catalog_source"), {"name": "foo"})
        assert args == {"name": "foo", "namespace": "olm"}

    def test_explicit_namespace(self, registry) -> None:
        args = normalize(registry.resolve("list_subscriptions"), {"namespace": "operators"})
        assert args == {"namespace": "operators"}

    def test_empty_string_counts_as_absent(self, registry) -> None:
        args = normalize(registry.resolve("list_catalog_sources"), {"namespace": ""})
        assert args == {"namespace": "olm"}

    def test_non_string_counts_as_absent(self, registry) -> None:
        args = normalize(registry.resolve("get_install_plan"), {"name": "ip", "namespace": 7})
        assert args["namespace"] == "default"

    def test_undeclared_keys_dropped(self, registry) -> None:
        args = normalize(registry.resolve("list_csvs"), {"namespace": "a", "verbose": "yes"})
        assert args == {"namespace": "a"}

    def test_missing_required(self, registry) -> None:
        with pytest.raises(InvalidParamsError, match="'name'") as exc_info:
            normalize(registry.resolve("get_subscription"), {"namespace": "default"})
        assert exc_info.value.param == "name"

    def test_empty_required_rejected(self, registry) -> None:
        with pytest.raises(InvalidParamsError):
            normalize(registry.resolve("get_csv"), {"name": ""})

    def test_none_bag(self, registry) -> None:
        assert normalize(registry.resolve("list_install_plans"), None) == {"namespace": "default"}

    def test_optional_without_default_omitted(self) -> None:
        descriptor = OperationDescriptor(
            name="search",
            description="Search",
            params=(ParamSpec(name="query"),),
            handler=_noop,
        )
        assert normalize(descriptor, {}) == {}
        assert normalize(descriptor, {"query": "etcd"}) == {"query": "etcd"}
