"""Error types for the cluster-facing resource client."""


class KubeError(Exception):
    """Base error for all cluster access failures."""


class KubeconfigError(KubeError):
    """Cluster connection settings could not be loaded."""


class BackingServiceError(KubeError):
    """The API server rejected a request or could not be reached."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class ResourceNotFoundError(BackingServiceError):
    """The requested object does not exist."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail, status_code=404)
