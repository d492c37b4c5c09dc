"""Cluster access — kubeconfig loading and the OLM resource client."""

from olm_mcp.kube.client import OLMClient, ResourceClient
from olm_mcp.kube.errors import (
    BackingServiceError,
    KubeconfigError,
    KubeError,
    ResourceNotFoundError,
)
from olm_mcp.kube.kubeconfig import ClusterConfig, load_cluster_config
from olm_mcp.kube.models import (
    CatalogSource,
    ClusterServiceVersion,
    InstallPlan,
    OLMResource,
    ResourceKind,
    Subscription,
)

__all__ = [
    "BackingServiceError",
    "CatalogSource",
    "ClusterConfig",
    "ClusterServiceVersion",
    "InstallPlan",
    "KubeError",
    "KubeconfigError",
    "OLMClient",
    "OLMResource",
    "ResourceClient",
    "ResourceKind",
    "ResourceNotFoundError",
    "Subscription",
    "load_cluster_config",
]
