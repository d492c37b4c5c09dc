"""``olm-mcp call`` — invoke one operation and print its output."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from olm_mcp.cli_commands._output import console, print_error
from olm_mcp.cli_commands._runtime import common_options


def _parse_params(pairs: tuple[str, ...]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"expected key=value, got {pair!r}"
            raise click.BadParameter(msg, param_hint="--param")
        params[key] = value
    return params


@click.command()
@click.argument("operation")
@click.option("--param", "-p", "pairs", multiple=True, help="Operation parameter as key=value.")
@common_options
def call(
    operation: str,
    pairs: tuple[str, ...],
    config_path: Path | None,
    kubeconfig: str | None,
    toolsets: str | None,
    verbose: bool,
) -> None:
    """Invoke OPERATION once against the cluster and print the result."""
    from olm_mcp.cli_commands import _runtime
    from olm_mcp.protocol.models import ToolResult
    from olm_mcp.protocol.registry import LIST_TOOLS, render_help
    from olm_mcp.tools import build_registry

    params = _parse_params(pairs)
    settings = _runtime.load_settings(
        config_path,
        verbose=verbose,
        kubeconfig=kubeconfig,
        toolsets=_runtime.parse_toolsets(toolsets),
    )
    if operation == LIST_TOOLS:
        registry = build_registry(settings.toolsets)
        console.out(render_help(registry.describe()), highlight=False, end="")
        return

    client = _runtime.make_client(settings)
    dispatcher = _runtime.build_dispatcher(settings, client)

    async def _call() -> ToolResult | None:
        async with client:
            response = await dispatcher.invoke(operation, params)
        if response.error is not None:
            print_error(f"Error {response.error.code}: {response.error.message}")
            return None
        return ToolResult.model_validate(response.result)

    result = asyncio.run(_call())
    if result is None:
        sys.exit(1)

    console.out(result.text, highlight=False, end="")
    if result.is_error:
        sys.exit(1)
