"""Stdio and HTTP front-ends over one dispatcher."""

from olm_mcp.transports.http import HttpAdapter, create_app
from olm_mcp.transports.stdio import StdioServer

__all__ = ["HttpAdapter", "StdioServer", "create_app"]
