"""Subscription toolset."""

from __future__ import annotations

from olm_mcp.kube.models import OLMResource, ResourceKind, Subscription
from olm_mcp.tools.base import basic_info, make_toolset

DEFAULT_NAMESPACE = "default"


def _row(obj: OLMResource) -> tuple[str, ...]:
    assert isinstance(obj, Subscription)
    return (
        obj.name,
        obj.namespace,
        obj.spec.package,
        obj.spec.channel,
        obj.spec.catalog_source,
        obj.status.installed_csv,
    )


def _details(obj: OLMResource) -> str:
    assert isinstance(obj, Subscription)
    return basic_info([
        ("Name", obj.name),
        ("Namespace", obj.namespace),
        ("Package", obj.spec.package),
        ("Channel", obj.spec.channel),
        ("Source", obj.spec.catalog_source),
        ("Source Namespace", obj.spec.catalog_source_namespace),
        ("Installed CSV", obj.status.installed_csv),
        ("Current CSV", obj.status.current_csv),
    ])


OPERATIONS = make_toolset(
    kind=ResourceKind.SUBSCRIPTION,
    list_name="list_subscriptions",
    get_name="get_subscription",
    default_namespace=DEFAULT_NAMESPACE,
    columns=("NAME", "NAMESPACE", "PACKAGE", "CHANNEL", "SOURCE", "INSTALLED CSV"),
    row=_row,
    details=_details,
)
