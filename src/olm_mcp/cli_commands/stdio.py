"""``olm-mcp stdio`` — serve MCP over stdin/stdout."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from olm_mcp.cli_commands._runtime import common_options


@click.command()
@common_options
def stdio(
    config_path: Path | None,
    kubeconfig: str | None,
    toolsets: str | None,
    verbose: bool,
) -> None:
    """Serve newline-delimited JSON-RPC requests from stdin."""
    from olm_mcp import __version__
    from olm_mcp.cli_commands import _runtime
    from olm_mcp.transports.stdio import StdioServer

    settings = _runtime.load_settings(
        config_path,
        verbose=verbose,
        kubeconfig=kubeconfig,
        toolsets=_runtime.parse_toolsets(toolsets),
    )
    client = _runtime.make_client(settings)
    dispatcher = _runtime.build_dispatcher(settings, client)
    server = StdioServer(
        dispatcher,
        server_name=settings.server_name,
        server_version=__version__,
        logger=logging.getLogger("olm_mcp.stdio"),
    )

    async def _serve() -> None:
        async with client:
            await server.serve(sys.stdin, sys.stdout)

    asyncio.run(_serve())
