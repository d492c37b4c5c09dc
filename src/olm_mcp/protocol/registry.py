"""Operation registry — static table of operation descriptors.

Behaviour differences between operations (required parameters, namespace
defaults) live as data on :class:`OperationDescriptor`; the handler is a
plain async function attached to it.  The registry is built once at
start-up and only read afterwards.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Iterator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from olm_mcp.protocol.errors import MethodNotFoundError
from olm_mcp.protocol.models import ToolDef, ToolResult

# handler(client, args, context) -> ToolResult
Handler = Callable[..., Awaitable[ToolResult]]

LIST_TOOLS = "list_tools"
RESERVED_NAMES = frozenset({LIST_TOOLS})

HELP_TITLE = "Available OLM MCP Tools:"


class ParamSpec(BaseModel):
    """One declared parameter of an operation."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: Literal["string"] = "string"
    description: str = ""
    required: bool = False
    default: str | None = None


class OperationDescriptor(BaseModel):
    """Name, schema and handler of a single operation."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    group: str = ""
    params: tuple[ParamSpec, ...] = ()
    handler: Handler = Field(exclude=True)

    @property
    def required_params(self) -> list[str]:
        """Parameters that must be supplied by the caller."""
        return [p.name for p in self.params if p.required and p.default is None]

    def to_tool_def(self) -> ToolDef:
        """Render the JSON-schema tool definition used for ``tools/list``."""
        properties: dict[str, Any] = {
            p.name: {"type": p.type, "description": p.description} for p in self.params
        }
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        required = self.required_params
        if required:
            schema["required"] = required
        return ToolDef(name=self.name, description=self.description, input_schema=schema)


class OperationRegistry:
    """Ordered, immutable mapping of operation name to descriptor."""

    def __init__(self, descriptors: Iterable[OperationDescriptor]) -> None:
        self._descriptors = tuple(descriptors)
        self._by_name: dict[str, OperationDescriptor] = {}
        for descriptor in self._descriptors:
            if descriptor.name in RESERVED_NAMES:
                msg = f"Operation name is reserved: {descriptor.name}"
                raise ValueError(msg)
            if descriptor.name in self._by_name:
                msg = f"Duplicate operation name: {descriptor.name}"
                raise ValueError(msg)
            self._by_name[descriptor.name] = descriptor

    def describe(self) -> tuple[OperationDescriptor, ...]:
        """Return every descriptor in registration order."""
        return self._descriptors

    def resolve(self, name: str) -> OperationDescriptor:
        """Return the descriptor for *name* or raise :class:`MethodNotFoundError`."""
        descriptor = self._by_name.get(name)
        if descriptor is None:
            raise MethodNotFoundError(name)
        return descriptor

    def names(self) -> list[str]:
        return [d.name for d in self._descriptors]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[OperationDescriptor]:
        return iter(self._descriptors)


def _describe_param(spec: ParamSpec) -> str:
    if spec.required and spec.default is None:
        return f"{spec.name} (required)"
    if spec.default is not None:
        return f"{spec.name} (optional, default: '{spec.default}')"
    return f"{spec.name} (optional)"


def render_help(descriptors: Iterable[OperationDescriptor]) -> str:
    """Render prose help text, grouped by resource group in first-seen order."""
    groups: dict[str, list[OperationDescriptor]] = {}
    for descriptor in descriptors:
        groups.setdefault(descriptor.group or "Other", []).append(descriptor)

    lines = [HELP_TITLE, ""]
    for group, members in groups.items():
        lines.append(f"{group} Tools:")
        for descriptor in members:
            lines.append(f"  - {descriptor.name}: {descriptor.description}")
            params = ", ".join(_describe_param(p) for p in descriptor.params) or "none"
            lines.append(f"    Parameters: {params}")
        lines.append("")

    lines.append("General Tools:")
    lines.append(f"  - {LIST_TOOLS}: Show this help message")
    return "\n".join(lines) + "\n"
