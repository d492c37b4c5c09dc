"""Parameter normalizer: loose input bag to validated string arguments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from olm_mcp.protocol.errors import InvalidParamsError
from olm_mcp.protocol.registry import OperationDescriptor


def flatten_params(raw: Mapping[str, Any] | None) -> dict[str, str]:
    """Keep only string-valued entries of *raw*."""
    if not raw:
        return {}
    return {key: value for key, value in raw.items() if isinstance(value, str)}


def normalize(descriptor: OperationDescriptor, raw: Mapping[str, Any] | None) -> dict[str, str]:
    """Resolve the declared parameters of *descriptor* from *raw*.

    Non-string and empty values count as absent, absent values take their
    declared default, and undeclared keys are dropped.  Optional parameters
    without a default are left out of the result.

    Raises:
        InvalidParamsError: A required parameter without default is absent.
    """
    bag = flatten_params(raw)
    args: dict[str, str] = {}
    for spec in descriptor.params:
        value = bag.get(spec.name)
        if value:
            args[spec.name] = value
        elif spec.default is not None:
            args[spec.name] = spec.default
        elif spec.required:
            raise InvalidParamsError(
                f"Missing required parameter: '{spec.name}'", param=spec.name
            )
    return args
