"""``olm-mcp tools`` — list the operations the server would expose."""

from __future__ import annotations

import click

from olm_mcp.cli_commands._output import print_error, print_operations_table


@click.command()
@click.option(
    "--toolsets",
    default=None,
    help="Comma-separated toolsets to include (default: all).",
)
def tools(toolsets: str | None) -> None:
    """Show the enabled operations and their parameters."""
    from olm_mcp.cli_commands._runtime import parse_toolsets
    from olm_mcp.tools import build_registry

    try:
        registry = build_registry(parse_toolsets(toolsets))
    except ValueError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    print_operations_table(registry.describe())
