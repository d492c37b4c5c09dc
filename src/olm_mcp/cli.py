"""olm-mcp CLI entrypoint."""

from __future__ import annotations

import click

from olm_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="olm-mcp")
def main() -> None:
    """OLM MCP — read-only MCP server for Operator Lifecycle Manager resources."""


# Register subcommands
from olm_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
