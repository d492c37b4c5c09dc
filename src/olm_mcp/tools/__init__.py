"""Resource toolsets and registry assembly."""

from __future__ import annotations

from collections.abc import Iterable

from olm_mcp.protocol.registry import OperationDescriptor, OperationRegistry
from olm_mcp.tools import catalog, csv, installplan, subscription

TOOLSETS: dict[str, tuple[OperationDescriptor, ...]] = {
    "csv": csv.OPERATIONS,
    "subscription": subscription.OPERATIONS,
    "catalog": catalog.OPERATIONS,
    "installplan": installplan.OPERATIONS,
}

DEFAULT_TOOLSETS: tuple[str, ...] = tuple(TOOLSETS)


def build_registry(toolsets: Iterable[str] | None = None) -> OperationRegistry:
    """Assemble the registry from the enabled toolsets, in canonical order.

    Raises:
        ValueError: An unknown toolset name was given.
    """
    enabled = set(DEFAULT_TOOLSETS if toolsets is None else toolsets)
    unknown = sorted(enabled - set(TOOLSETS))
    if unknown:
        msg = f"Unknown toolset(s): {', '.join(unknown)} (available: {', '.join(TOOLSETS)})"
        raise ValueError(msg)
    descriptors = [op for name, ops in TOOLSETS.items() if name in enabled for op in ops]
    return OperationRegistry(descriptors)
