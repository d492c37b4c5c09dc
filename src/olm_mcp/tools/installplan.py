"""InstallPlan toolset."""

from __future__ import annotations

from olm_mcp.kube.models import InstallPlan, OLMResource, ResourceKind
from olm_mcp.tools.base import basic_info, make_toolset

DEFAULT_NAMESPACE = "default"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _row(obj: OLMResource) -> tuple[str, ...]:
    assert isinstance(obj, InstallPlan)
    return (
        obj.name,
        obj.namespace,
        obj.spec.approval,
        _flag(obj.spec.approved),
        obj.status.phase,
    )


def _details(obj: OLMResource) -> str:
    assert isinstance(obj, InstallPlan)
    text = basic_info([
        ("Name", obj.name),
        ("Namespace", obj.namespace),
        ("Approval", obj.spec.approval),
        ("Approved", _flag(obj.spec.approved)),
        ("Phase", obj.status.phase),
    ])

    if obj.spec.cluster_service_version_names:
        text += "\nClusterServiceVersions to install:\n"
        text += "".join(f"  - {name}\n" for name in obj.spec.cluster_service_version_names)

    if obj.status.plan:
        text += "\nPlanned Resources:\n"
        for step in obj.status.plan:
            res = step.resource
            text += f"  - {res.kind}: {res.name} (Status: {step.status})\n"
    return text


OPERATIONS = make_toolset(
    kind=ResourceKind.INSTALL_PLAN,
    list_name="list_install_plans",
    get_name="get_install_plan",
    default_namespace=DEFAULT_NAMESPACE,
    columns=("NAME", "NAMESPACE", "APPROVAL", "APPROVED", "PHASE"),
    row=_row,
    details=_details,
)
