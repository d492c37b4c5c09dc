"""Records for the OLM ``operators.coreos.com/v1alpha1`` resources.

Only the fields the renderers read are declared; everything else the API
server sends is kept as extra data so that the full JSON representation
round-trips.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResourceKind(str, Enum):
    """The four OLM resource kinds exposed by the server."""

    CLUSTER_SERVICE_VERSION = "ClusterServiceVersion"
    SUBSCRIPTION = "Subscription"
    CATALOG_SOURCE = "CatalogSource"
    INSTALL_PLAN = "InstallPlan"

    @property
    def plural(self) -> str:
        """Lower-case plural used in API paths."""
        return self.value.lower() + "s"


class _KubeModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)


class ObjectMeta(_KubeModel):
    name: str = ""
    namespace: str = ""
    uid: str = ""
    creation_timestamp: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class OLMResource(_KubeModel):
    """Common envelope of every OLM object."""

    api_version: str = "operators.coreos.com/v1alpha1"
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def to_json_dict(self) -> dict[str, Any]:
        """The object as received, camelCase keys, unset defaults omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# ---------------------------------------------------------------------------
# ClusterServiceVersion
# ---------------------------------------------------------------------------


class CSVSpec(_KubeModel):
    display_name: str = ""
    description: str = ""
    version: str = ""
    replaces: str = ""


class CSVStatus(_KubeModel):
    phase: str = ""
    reason: str = ""
    message: str = ""


class ClusterServiceVersion(OLMResource):
    spec: CSVSpec = Field(default_factory=CSVSpec)
    status: CSVStatus = Field(default_factory=CSVStatus)


# ---------------------------------------------------------------------------
# Subscription
# ---------------------------------------------------------------------------


class SubscriptionSpec(_KubeModel):
    package: str = Field(default="", alias="name")
    channel: str = ""
    catalog_source: str = Field(default="", alias="source")
    catalog_source_namespace: str = Field(default="", alias="sourceNamespace")
    starting_csv: str = Field(default="", alias="startingCSV")
    install_plan_approval: str = ""


class SubscriptionStatus(_KubeModel):
    state: str = ""
    installed_csv: str = Field(default="", alias="installedCSV")
    current_csv: str = Field(default="", alias="currentCSV")


class Subscription(OLMResource):
    spec: SubscriptionSpec = Field(default_factory=SubscriptionSpec)
    status: SubscriptionStatus = Field(default_factory=SubscriptionStatus)


# ---------------------------------------------------------------------------
# CatalogSource
# ---------------------------------------------------------------------------


class CatalogSourceSpec(_KubeModel):
    source_type: str = ""
    display_name: str = ""
    publisher: str = ""
    image: str = ""
    address: str = ""


class GRPCConnectionState(_KubeModel):
    address: str = ""
    last_observed_state: str = ""
    last_connect: str | None = None


class CatalogSourceStatus(_KubeModel):
    connection_state: GRPCConnectionState = Field(default_factory=GRPCConnectionState)


class CatalogSource(OLMResource):
    spec: CatalogSourceSpec = Field(default_factory=CatalogSourceSpec)
    status: CatalogSourceStatus = Field(default_factory=CatalogSourceStatus)


# ---------------------------------------------------------------------------
# InstallPlan
# ---------------------------------------------------------------------------


class StepResource(_KubeModel):
    kind: str = ""
    name: str = ""
    manifest: str = ""
    group: str = ""
    version: str = ""


class Step(_KubeModel):
    resolving: str = ""
    resource: StepResource = Field(default_factory=StepResource)
    status: str = ""


class InstallPlanSpec(_KubeModel):
    approval: str = ""
    approved: bool = False
    cluster_service_version_names: list[str] = Field(default_factory=list)


class InstallPlanStatus(_KubeModel):
    phase: str = ""
    plan: list[Step] = Field(default_factory=list)


class InstallPlan(OLMResource):
    spec: InstallPlanSpec = Field(default_factory=InstallPlanSpec)
    status: InstallPlanStatus = Field(default_factory=InstallPlanStatus)


RESOURCE_MODELS: dict[ResourceKind, type[OLMResource]] = {
    ResourceKind.CLUSTER_SERVICE_VERSION: ClusterServiceVersion,
    ResourceKind.SUBSCRIPTION: Subscription,
    ResourceKind.CATALOG_SOURCE: CatalogSource,
    ResourceKind.INSTALL_PLAN: InstallPlan,
}
