"""OLMClient — read-only access to OLM resources on the Kubernetes API."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from olm_mcp.kube.errors import BackingServiceError, ResourceNotFoundError
from olm_mcp.kube.kubeconfig import ClusterConfig
from olm_mcp.kube.models import RESOURCE_MODELS, OLMResource, ResourceKind

logger = logging.getLogger(__name__)

API_GROUP = "operators.coreos.com"
API_VERSION = "v1alpha1"

_FORBIDDEN_SEGMENT_CHARS = frozenset("/%?#")


@runtime_checkable
class ResourceClient(Protocol):
    """List/get access to the four OLM resource kinds."""

    async def list(self, kind: ResourceKind, namespace: str) -> list[OLMResource]:
        """Return every object of *kind* in *namespace*."""
        ...

    async def get(self, kind: ResourceKind, namespace: str, name: str) -> OLMResource:
        """Return the object *name* of *kind* in *namespace*."""
        ...


class OLMClient:
    """Talks to ``/apis/operators.coreos.com/v1alpha1`` over httpx.

    Satisfies the :class:`ResourceClient` protocol.  Safe for concurrent use:
    each call is an independent request on the shared connection pool.
    TLS settings are loaded at construction, so a bad CA or client
    certificate raises :class:`KubeconfigError` before any request.

    Usage::

        async with OLMClient(load_cluster_config()) as client:
            csvs = await client.list(ResourceKind.CLUSTER_SERVICE_VERSION, "default")
    """

    def __init__(
        self,
        cluster: ClusterConfig,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._cluster = cluster
        self._verify = cluster.ssl_context()
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> OLMClient:
        self._client = httpx.AsyncClient(
            base_url=self._cluster.server.rstrip("/"),
            headers=self._cluster.headers(),
            verify=self._verify,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "OLMClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    @staticmethod
    def resource_path(kind: ResourceKind, namespace: str, name: str | None = None) -> str:
        """Build the API path, rejecting segments that would leave the collection.

        Raises:
            BackingServiceError: *namespace* or *name* is not a valid path segment.
        """
        ns = _path_segment(namespace, "namespace")
        path = f"/apis/{API_GROUP}/{API_VERSION}/namespaces/{ns}/{kind.plural}"
        if name is None:
            return path
        return path + "/" + _path_segment(name, "name")

    async def list(self, kind: ResourceKind, namespace: str) -> list[OLMResource]:
        data = await self._get_json(self.resource_path(kind, namespace))
        items = data.get("items")
        if items is None:
            return []
        if not isinstance(items, list):
            raise BackingServiceError(f"Malformed {kind.value} list: 'items' is not a list")
        return [self._parse(kind, item) for item in items]

    async def get(self, kind: ResourceKind, namespace: str, name: str) -> OLMResource:
        data = await self._get_json(self.resource_path(kind, namespace, name))
        return self._parse(kind, data)

    async def _get_json(self, path: str) -> dict[str, Any]:
        logger.debug("GET %s", path)
        try:
            response = await self._http().get(path)
        except httpx.HTTPError as exc:
            raise BackingServiceError(str(exc) or type(exc).__name__) from exc

        if response.status_code == 404:
            raise ResourceNotFoundError(_status_message(response))
        if response.is_error:
            raise BackingServiceError(_status_message(response), response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise BackingServiceError(f"Invalid JSON from API server: {exc}") from exc
        if not isinstance(data, dict):
            raise BackingServiceError("Invalid response from API server: expected an object")
        return data

    @staticmethod
    def _parse(kind: ResourceKind, raw: Any) -> OLMResource:
        try:
            return RESOURCE_MODELS[kind].model_validate(raw)
        except ValidationError as exc:
            raise BackingServiceError(f"Malformed {kind.value}: {exc}") from exc


def _status_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a Kubernetes ``Status`` body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = response.text.strip()
    return text or f"HTTP {response.status_code}"


def _path_segment(value: str, what: str) -> str:
    """Quote *value* as one URL path segment; ``.``, ``..`` and separators are refused."""
    if value in ("", ".", "..") or any(ch in value for ch in _FORBIDDEN_SEGMENT_CHARS):
        raise BackingServiceError(f"Invalid {what}: {value!r}")
    return quote(value, safe="")
