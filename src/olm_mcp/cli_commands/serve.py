"""``olm-mcp serve`` — serve the flat JSON protocol over HTTP."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from olm_mcp.cli_commands._runtime import common_options


@click.command()
@click.option("--host", default=None, help="Interface to bind (default: 0.0.0.0).")
@click.option("--port", "-p", type=int, default=None, help="HTTP server port (default: 8080).")
@common_options
def serve(
    host: str | None,
    port: int | None,
    config_path: Path | None,
    kubeconfig: str | None,
    toolsets: str | None,
    verbose: bool,
) -> None:
    """Serve POSTed JSON requests over HTTP."""
    from olm_mcp.cli_commands import _runtime
    from olm_mcp.transports.http import client_lifespan, create_app, serve_http

    settings = _runtime.load_settings(
        config_path,
        verbose=verbose,
        host=host,
        port=port,
        kubeconfig=kubeconfig,
        toolsets=_runtime.parse_toolsets(toolsets),
    )
    client = _runtime.make_client(settings)
    dispatcher = _runtime.build_dispatcher(settings, client)
    app = create_app(
        dispatcher,
        logger=logging.getLogger("olm_mcp.http"),
        lifespan=client_lifespan(client),
    )

    logger = logging.getLogger(__name__)
    logger.info("Starting OLM MCP Server on %s:%d", settings.host, settings.port)
    logger.info("Read-only mode: %s", settings.read_only)
    logger.info("Enabled toolsets: %s", ", ".join(settings.toolsets))
    serve_http(app, host=settings.host, port=settings.port, log_level=settings.log_level)
