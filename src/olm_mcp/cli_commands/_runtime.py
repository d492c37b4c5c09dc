"""Process bootstrap shared by the CLI commands.

Builds settings, logging, tracing, the cluster client and the dispatcher.
Failures are reported on stderr and exit with status 1.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from olm_mcp.cli_commands._output import print_error
from olm_mcp.config import ConfigError, ServerSettings, SettingsLoader
from olm_mcp.kube import KubeconfigError, OLMClient, load_cluster_config
from olm_mcp.protocol.dispatcher import OperationDispatcher
from olm_mcp.tools import build_registry

F = TypeVar("F", bound=Callable[..., Any])

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def common_options(func: F) -> F:
    """Options shared by every command that talks to a cluster."""
    func = click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")(func)
    func = click.option(
        "--toolsets",
        default=None,
        help="Comma-separated toolsets to enable (csv, subscription, catalog, installplan).",
    )(func)
    func = click.option(
        "--kubeconfig",
        default=None,
        help="Path to kubeconfig file (default: in-cluster, $KUBECONFIG or ~/.kube/config).",
    )(func)
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML settings file.",
    )(func)
    return func


def parse_toolsets(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def load_settings(
    config_path: Path | None,
    *,
    verbose: bool = False,
    **overrides: Any,
) -> ServerSettings:
    """Load settings, apply CLI overrides, and set up logging and tracing."""
    if verbose:
        overrides["log_level"] = "DEBUG"
    try:
        settings = SettingsLoader(config_path).load(**overrides)
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
        sys.exit(1)

    configure_logging(settings.log_level)
    if settings.telemetry.enabled:
        from olm_mcp.utils.telemetry import configure_telemetry

        configure_telemetry(
            service_name=settings.server_name,
            export_to_console=settings.telemetry.export_to_console,
            otlp_endpoint=settings.telemetry.otlp_endpoint,
        )
    return settings


def configure_logging(level: str) -> None:
    """Send all logging to stderr; stdout is reserved for protocol output."""
    logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT, force=True)


def make_client(settings: ServerSettings) -> OLMClient:
    try:
        cluster = load_cluster_config(settings.kubeconfig)
        return OLMClient(cluster, timeout=settings.request_timeout or 30.0)
    except KubeconfigError as exc:
        print_error(f"Error getting kubeconfig: {exc}")
        sys.exit(1)


def build_dispatcher(settings: ServerSettings, client: Any) -> OperationDispatcher:
    registry = build_registry(settings.toolsets)
    return OperationDispatcher(
        registry,
        client,
        timeout=settings.request_timeout,
        logger=logging.getLogger("olm_mcp.dispatch"),
    )
