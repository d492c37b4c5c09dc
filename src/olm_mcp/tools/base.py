"""Shared list/get handlers and text rendering for the resource toolsets.

Every toolset is two operations over one resource kind.  The handlers here
do the outbound call, turn cluster failures into error-flagged payloads and
render the result; the kind modules only supply columns and detail fields.
"""

from __future__ import annotations

import io
import json
from collections.abc import Callable, Iterable, Sequence
from functools import partial
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from olm_mcp.kube.errors import KubeError
from olm_mcp.protocol.context import OperationCancelledError
from olm_mcp.protocol.models import ToolResult
from olm_mcp.protocol.registry import OperationDescriptor, ParamSpec

if TYPE_CHECKING:
    from olm_mcp.kube.client import ResourceClient
    from olm_mcp.kube.models import OLMResource, ResourceKind
    from olm_mcp.protocol.context import CallContext

RowFn = Callable[["OLMResource"], Sequence[str]]
DetailFn = Callable[["OLMResource"], str]

_TABLE_WIDTH = 512


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_table(columns: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render an aligned plain-text table."""
    table = Table(box=None, pad_edge=False, show_edge=False, header_style="")
    for column in columns:
        table.add_column(column, no_wrap=True)
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))

    buf = io.StringIO()
    console = Console(
        file=buf,
        width=_TABLE_WIDTH,
        color_system=None,
        highlight=False,
        markup=False,
        emoji=False,
    )
    console.print(table)
    lines = [line.rstrip() for line in buf.getvalue().splitlines()]
    return "\n".join(lines) + "\n"


def basic_info(fields: Iterable[tuple[str, str]]) -> str:
    """Render the ``Basic Info:`` block of a detail view."""
    lines = ["Basic Info:"]
    lines.extend(f"  {label}: {value}" for label, value in fields)
    return "\n".join(lines) + "\n"


def render_list(
    kind: ResourceKind,
    namespace: str,
    items: Sequence[OLMResource],
    columns: Sequence[str],
    row: RowFn,
) -> str:
    header = f"{kind.value}s in namespace '{namespace}':\n\n"
    if not items:
        return header + f"No {kind.value}s found.\n"
    return header + render_table(columns, (row(item) for item in items))


def render_detail(kind: ResourceKind, namespace: str, name: str, obj: OLMResource, details: DetailFn) -> str:
    full = json.dumps(obj.to_json_dict(), indent=2, ensure_ascii=False)
    return (
        f"{kind.value}: {namespace}/{name}\n\n"
        f"{details(obj)}\n"
        "Full JSON representation:\n"
        f"```json\n{full}\n```\n"
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _abandoned(exc: OperationCancelledError, action: str) -> ToolResult:
    return ToolResult.error(f"Request {exc.reason} while {action}")


async def list_handler(
    client: ResourceClient,
    args: dict[str, str],
    context: CallContext,
    *,
    kind: ResourceKind,
    columns: Sequence[str],
    row: RowFn,
) -> ToolResult:
    namespace = args["namespace"]
    try:
        items = await context.run(client.list(kind, namespace))
    except OperationCancelledError as exc:
        return _abandoned(exc, f"listing {kind.value}s")
    except KubeError as exc:
        return ToolResult.error(f"Error listing {kind.value}s: {exc}")
    return ToolResult.from_text(render_list(kind, namespace, items, columns, row))


async def get_handler(
    client: ResourceClient,
    args: dict[str, str],
    context: CallContext,
    *,
    kind: ResourceKind,
    details: DetailFn,
) -> ToolResult:
    namespace = args["namespace"]
    name = args["name"]
    try:
        obj = await context.run(client.get(kind, namespace, name))
    except OperationCancelledError as exc:
        return _abandoned(exc, f"getting {kind.value} '{name}'")
    except KubeError as exc:
        return ToolResult.error(f"Error getting {kind.value} '{name}': {exc}")
    return ToolResult.from_text(render_detail(kind, namespace, name, obj, details))


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


def make_toolset(
    *,
    kind: ResourceKind,
    list_name: str,
    get_name: str,
    default_namespace: str,
    columns: Sequence[str],
    row: RowFn,
    details: DetailFn,
) -> tuple[OperationDescriptor, OperationDescriptor]:
    """Build the list and get descriptors for one resource kind."""
    namespace = ParamSpec(
        name="namespace",
        description=f"Kubernetes namespace (default: {default_namespace})",
        default=default_namespace,
    )
    name = ParamSpec(name="name", description=f"Name of the {kind.value}", required=True)
    return (
        OperationDescriptor(
            name=list_name,
            description=f"List {kind.value}s in a namespace",
            group=kind.value,
            params=(namespace,),
            handler=partial(list_handler, kind=kind, columns=tuple(columns), row=row),
        ),
        OperationDescriptor(
            name=get_name,
            description=f"Get detailed information about a specific {kind.value}",
            group=kind.value,
            params=(name, namespace),
            handler=partial(get_handler, kind=kind, details=details),
        ),
    )
