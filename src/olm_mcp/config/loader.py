"""Settings loading from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from olm_mcp.config.errors import ConfigError
from olm_mcp.config.models import ServerSettings


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`ServerSettings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    def load(self, **overrides: Any) -> ServerSettings:
        """Read YAML, interpolate env vars, apply *overrides*, and validate.

        ``None`` overrides are ignored so unset CLI flags keep file values.
        Without a path only defaults and overrides apply.

        Raises:
            ConfigError: On read, YAML parse, or schema validation failures.
        """
        data = self._read() if self._path is not None else {}
        data.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return ServerSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

    def _read(self) -> dict[str, Any]:
        assert self._path is not None
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")
        return data
