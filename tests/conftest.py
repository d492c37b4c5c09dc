"""Shared fixtures: sample OLM objects, a mocked resource client and a dispatcher."""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from olm_mcp.kube.errors import ResourceNotFoundError
from olm_mcp.protocol.dispatcher import OperationDispatcher
from olm_mcp.tools import build_registry

_CSV = {
    "apiVersion": "operators.coreos.com/v1alpha1",
    "kind": "ClusterServiceVersion",
    "metadata": {"name": "etcdoperator.v0.9.4", "namespace": "default", "uid": "6c1f"},
    "spec": {
        "displayName": "etcd",
        "description": "Create and maintain highly-available etcd clusters",
        "version": "0.9.4",
        "replaces": "etcdoperator.v0.9.2",
        "install": {"strategy": "deployment"},
    },
    "status": {"phase": "Succeeded", "reason": "InstallSucceeded"},
}

_SUBSCRIPTION = {
    "apiVersion": "operators.coreos.com/v1alpha1",
    "kind": "Subscription",
    "metadata": {"name": "etcd", "namespace": "default"},
    "spec": {
        "name": "etcd",
        "channel": "singlenamespace-alpha",
        "source": "operatorhubio-catalog",
        "sourceNamespace": "olm",
    },
    "status": {
        "state": "AtLatestKnown",
        "installedCSV": "etcdoperator.v0.9.4",
        "currentCSV": "etcdoperator.v0.9.4",
    },
}

_CATALOG_SOURCE = {
    "apiVersion": "operators.coreos.com/v1alpha1",
    "kind": "CatalogSource",
    "metadata": {"name": "operatorhubio-catalog", "namespace": "olm"},
    "spec": {
        "sourceType": "grpc",
        "displayName": "Community Operators",
        "publisher": "OperatorHub.io",
        "image": "quay.io/operatorhubio/catalog:latest",
    },
    "status": {
        "connectionState": {
            "address": "operatorhubio-catalog.olm.svc:50051",
            "lastObservedState": "READY",
            "lastConnect": "2024-05-01T12:00:00Z",
        }
    },
}

_INSTALL_PLAN = {
    "apiVersion": "operators.coreos.com/v1alpha1",
    "kind": "InstallPlan",
    "metadata": {"name": "install-x7k2p", "namespace": "default"},
    "spec": {
        "approval": "Automatic",
        "approved": True,
        "clusterServiceVersionNames": ["etcdoperator.v0.9.4"],
    },
    "status": {
        "phase": "Complete",
        "plan": [
            {
                "resolving": "etcdoperator.v0.9.4",
                "resource": {
                    "kind": "ClusterServiceVersion",
                    "name": "etcdoperator.v0.9.4",
                    "group": "operators.coreos.com",
                    "version": "v1alpha1",
                    "manifest": "{}",
                },
                "status": "Created",
            }
        ],
    },
}


@pytest.fixture
def csv_json() -> dict[str, Any]:
    return copy.deepcopy(_CSV)


@pytest.fixture
def subscription_json() -> dict[str, Any]:
    return copy.deepcopy(_SUBSCRIPTION)


@pytest.fixture
def catalog_source_json() -> dict[str, Any]:
    return copy.deepcopy(_CATALOG_SOURCE)


@pytest.fixture
def install_plan_json() -> dict[str, Any]:
    return copy.deepcopy(_INSTALL_PLAN)


@pytest.fixture
def resource_client() -> MagicMock:
    """A ResourceClient double: empty lists, every get is a 404."""
    client = MagicMock()
    client.list = AsyncMock(return_value=[])
    client.get = AsyncMock(side_effect=ResourceNotFoundError("not found"))
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture
def dispatcher(resource_client: MagicMock) -> OperationDispatcher:
    return OperationDispatcher(build_registry(), resource_client)
