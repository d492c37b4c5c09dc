"""Tests for ``olm-mcp tools`` CLI command."""

from __future__ import annotations

from click.testing import CliRunner

from olm_mcp.cli import main


class TestToolsCommand:
    def test_lists_all_operations(self) -> None:
        result = CliRunner().invoke(main, ["tools"])
        assert result.exit_code == 0
        assert "OLM MCP Tools" in result.output
        for name in ("list_csvs", "get_subscription", "list_catalog_sources", "get_install_plan"):
            assert name in result.output

    def test_toolset_filter(self) -> None:
        result = CliRunner().invoke(main, ["tools", "--toolsets", "catalog"])
        assert result.exit_code == 0
        assert "get_catalog_source" in result.output
        assert "list_csvs" not in result.output

    def test_unknown_toolset(self) -> None:
        result = CliRunner().invoke(main, ["tools", "--toolsets", "csv,widgets"])
        assert result.exit_code == 1
        assert "widgets" in result.output


class TestVersion:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "olm-mcp" in result.output
        assert "0.1.0" in result.output
