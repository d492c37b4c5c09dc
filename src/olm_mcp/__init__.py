"""Read-only Model Context Protocol server for Operator Lifecycle Manager resources."""

from __future__ import annotations

__version__ = "0.1.0"
