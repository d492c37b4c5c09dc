"""Shared CLI output formatters."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from olm_mcp.protocol.registry import OperationDescriptor, ParamSpec  # noqa: TC001

console = Console()
err_console = Console(stderr=True)


def print_operations_table(descriptors: Iterable[OperationDescriptor]) -> None:
    """Pretty-print the registered operations as a table."""
    table = Table(title="OLM MCP Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Parameters")

    for descriptor in descriptors:
        params = ", ".join(_param_label(p) for p in descriptor.params)
        table.add_row(descriptor.name, _truncate(descriptor.description), params or "-")

    console.print(table)


def _param_label(spec: ParamSpec) -> str:
    if spec.default is not None:
        return f"{spec.name}={spec.default}"
    return f"{spec.name}*" if spec.required else spec.name


def print_error(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]", highlight=False)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
