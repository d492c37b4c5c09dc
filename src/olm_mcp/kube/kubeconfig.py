"""Cluster connection settings from a kubeconfig file or the pod environment."""

from __future__ import annotations

import base64
import binascii
import logging
import os
import ssl
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from olm_mcp.kube.errors import KubeconfigError

logger = logging.getLogger(__name__)

SERVICE_ACCOUNT_DIR = Path("/var/run/secrets/kubernetes.io/serviceaccount")


class ClusterConfig(BaseModel):
    """Everything needed to talk to one API server."""

    server: str
    token: str | None = None
    ca_file: str | None = None
    ca_data: str | None = None
    client_cert_file: str | None = None
    client_key_file: str | None = None
    client_cert_data: str | None = None
    client_key_data: str | None = None
    insecure: bool = False

    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def ssl_context(self) -> ssl.SSLContext | bool:
        """Build the ``verify`` argument for :class:`httpx.AsyncClient`.

        Raises:
            KubeconfigError: A CA or client certificate is missing or unreadable.
        """
        if self.insecure:
            return False
        try:
            ctx = ssl.create_default_context(cafile=self.ca_file, cadata=self.ca_data)
            has_cert = self.client_cert_file or self.client_cert_data
            has_key = self.client_key_file or self.client_key_data
            if has_cert and has_key:
                with (
                    _as_file(self.client_cert_file, self.client_cert_data) as certfile,
                    _as_file(self.client_key_file, self.client_key_data) as keyfile,
                ):
                    ctx.load_cert_chain(certfile, keyfile)
        except (OSError, ValueError) as exc:
            raise KubeconfigError(f"Invalid TLS settings: {exc}") from exc
        return ctx


@contextmanager
def _as_file(path: str | None, data: str | None) -> Iterator[str]:
    """Yield *path*, or a short-lived file holding *data*."""
    if path:
        yield path
        return
    fd, tmp = tempfile.mkstemp(suffix=".pem")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data or "")
        yield tmp
    finally:
        os.unlink(tmp)


def load_cluster_config(path: str | Path | None = None) -> ClusterConfig:
    """Resolve cluster settings.

    Resolution order: an explicit kubeconfig *path*, the in-cluster service
    account, ``$KUBECONFIG``, then ``~/.kube/config``.

    Raises:
        KubeconfigError: No usable configuration was found.
    """
    if path is None:
        in_cluster = _in_cluster_config()
        if in_cluster is not None:
            logger.info("Using in-cluster configuration")
            return in_cluster
        env_path = os.environ.get("KUBECONFIG", "").split(os.pathsep)[0]
        path = env_path or Path.home() / ".kube" / "config"

    kubeconfig = Path(path).expanduser()
    logger.info("Using kubeconfig: %s", kubeconfig)
    return parse_kubeconfig(kubeconfig)


def _in_cluster_config() -> ClusterConfig | None:
    host = os.environ.get("KUBERNETES_SERVICE_HOST")
    port = os.environ.get("KUBERNETES_SERVICE_PORT", "443")
    token_file = SERVICE_ACCOUNT_DIR / "token"
    if not host or not token_file.is_file():
        return None
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    ca_file = SERVICE_ACCOUNT_DIR / "ca.crt"
    return ClusterConfig(
        server=f"https://{host}:{port}",
        token=token_file.read_text(encoding="utf-8").strip(),
        ca_file=str(ca_file) if ca_file.is_file() else None,
    )


def parse_kubeconfig(path: Path, context: str | None = None) -> ClusterConfig:
    """Read *path* and return the settings of *context* (default: current-context)."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise KubeconfigError(f"Cannot read {path}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise KubeconfigError(f"YAML parse error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise KubeconfigError(f"Kubeconfig {path} must be a mapping")

    context_name = context or data.get("current-context")
    if not context_name:
        raise KubeconfigError(f"Kubeconfig {path} has no current-context")

    ctx = _named(data, "contexts", "context", context_name)
    cluster = _named(data, "clusters", "cluster", ctx.get("cluster"))
    user = _named(data, "users", "user", ctx.get("user")) if ctx.get("user") else {}

    server = cluster.get("server")
    if not server:
        raise KubeconfigError(f"Cluster {ctx.get('cluster')!r} has no server")

    base = path.parent
    token = user.get("token")
    if not token and user.get("tokenFile"):
        token_file = _resolve(base, str(user["tokenFile"]))
        try:
            token = token_file.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise KubeconfigError(f"Cannot read token file {token_file}: {exc}") from exc

    return ClusterConfig(
        server=server,
        token=token,
        ca_file=_path_field(base, cluster.get("certificate-authority")),
        ca_data=_decode(cluster.get("certificate-authority-data")),
        client_cert_file=_path_field(base, user.get("client-certificate")),
        client_key_file=_path_field(base, user.get("client-key")),
        client_cert_data=_decode(user.get("client-certificate-data")),
        client_key_data=_decode(user.get("client-key-data")),
        insecure=bool(cluster.get("insecure-skip-tls-verify", False)),
    )


def _named(data: dict[str, Any], section: str, key: str, name: Any) -> dict[str, Any]:
    for entry in data.get(section) or []:
        if isinstance(entry, dict) and entry.get("name") == name:
            body = entry.get(key) or {}
            if not isinstance(body, dict):
                break
            return body
    raise KubeconfigError(f"{key} {name!r} not found in kubeconfig {section}")


def _resolve(base: Path, value: str) -> Path:
    p = Path(value).expanduser()
    return p if p.is_absolute() else base / p


def _path_field(base: Path, value: Any) -> str | None:
    if not value:
        return None
    return str(_resolve(base, str(value)))


def _decode(value: Any) -> str | None:
    if not value:
        return None
    try:
        return base64.b64decode(value).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise KubeconfigError(f"Invalid base64 data in kubeconfig: {exc}") from exc
