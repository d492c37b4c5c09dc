"""CatalogSource toolset.

Catalog sources are discovery-scoped and conventionally live in the ``olm``
namespace, so that is the default here instead of ``default``.
"""

from __future__ import annotations

from olm_mcp.kube.models import CatalogSource, OLMResource, ResourceKind
from olm_mcp.tools.base import basic_info, make_toolset

DEFAULT_NAMESPACE = "olm"


def _row(obj: OLMResource) -> tuple[str, ...]:
    assert isinstance(obj, CatalogSource)
    return (
        obj.name,
        obj.namespace,
        obj.spec.source_type,
        obj.spec.display_name,
        obj.status.connection_state.last_observed_state,
    )


def _details(obj: OLMResource) -> str:
    assert isinstance(obj, CatalogSource)
    state = obj.status.connection_state
    fields = [
        ("Name", obj.name),
        ("Namespace", obj.namespace),
        ("Display Name", obj.spec.display_name),
        ("Source Type", obj.spec.source_type),
        ("Publisher", obj.spec.publisher),
        ("Connection State", state.last_observed_state),
    ]
    if state.last_connect:
        fields.append(("Last Observed", state.last_connect))
    text = basic_info(fields)
    if obj.spec.source_type == "grpc":
        text += f"\n  Image: {obj.spec.image}\n  Address: {obj.spec.address}\n"
    return text


OPERATIONS = make_toolset(
    kind=ResourceKind.CATALOG_SOURCE,
    list_name="list_catalog_sources",
    get_name="get_catalog_source",
    default_namespace=DEFAULT_NAMESPACE,
    columns=("NAME", "NAMESPACE", "SOURCE TYPE", "DISPLAY NAME", "STATE"),
    row=_row,
    details=_details,
)
