"""Server configuration: settings models and YAML loading."""

from olm_mcp.config.errors import ConfigError
from olm_mcp.config.loader import SettingsLoader
from olm_mcp.config.models import ServerSettings, TelemetrySettings

__all__ = ["ConfigError", "ServerSettings", "SettingsLoader", "TelemetrySettings"]
