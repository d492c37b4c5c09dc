"""ClusterServiceVersion toolset."""

from __future__ import annotations

from olm_mcp.kube.models import ClusterServiceVersion, OLMResource, ResourceKind
from olm_mcp.tools.base import basic_info, make_toolset

DEFAULT_NAMESPACE = "default"


def _row(obj: OLMResource) -> tuple[str, ...]:
    assert isinstance(obj, ClusterServiceVersion)
    return (
        obj.name,
        obj.namespace,
        obj.status.phase,
        obj.spec.version,
        obj.spec.replaces,
    )


def _details(obj: OLMResource) -> str:
    assert isinstance(obj, ClusterServiceVersion)
    return basic_info([
        ("Name", obj.name),
        ("Namespace", obj.namespace),
        ("Phase", obj.status.phase),
        ("Version", obj.spec.version),
        ("Replaces", obj.spec.replaces),
        ("Display Name", obj.spec.display_name),
        ("Description", obj.spec.description),
    ])


OPERATIONS = make_toolset(
    kind=ResourceKind.CLUSTER_SERVICE_VERSION,
    list_name="list_csvs",
    get_name="get_csv",
    default_namespace=DEFAULT_NAMESPACE,
    columns=("NAME", "NAMESPACE", "PHASE", "VERSION", "REPLACES"),
    row=_row,
    details=_details,
)
