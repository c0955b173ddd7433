"""Shared test fixtures for must-gather-plan tests."""

from unittest.mock import MagicMock, patch

import pytest

from must_gather_plan.cluster import Cluster
from must_gather_plan.models import PlanConfig


@pytest.fixture
def mock_kube_contexts():
    """Mock kubernetes config contexts."""
    with patch("kubernetes.config.list_kube_config_contexts") as mock:
        mock.return_value = ([{"name": "test-context"}], {"name": "test-context"})
        yield mock


@pytest.fixture
def mock_kube_config():
    """Mock kubernetes config loading."""
    with patch("kubernetes.config.load_kube_config") as mock:
        yield mock


@pytest.fixture
def mock_core_v1_api():
    """Mock CoreV1Api for namespace listing."""
    with patch("kubernetes.client.CoreV1Api") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        ns_items = []
        for name in ["default", "kube-system", "openshift-must-gather-shared"]:
            ns = MagicMock()
            ns.metadata.name = name
            ns_items.append(ns)
        api_instance.list_namespace.return_value.items = ns_items
        yield api_instance


@pytest.fixture
def cluster_mocks(mock_kube_contexts, mock_kube_config, mock_core_v1_api):
    """Combined fixture for creating a Cluster instance without a cluster."""
    return {
        "contexts": mock_kube_contexts,
        "config": mock_kube_config,
        "core_api": mock_core_v1_api,
    }


@pytest.fixture
def fake_cluster():
    """Cluster stand-in reporting that no namespace exists."""
    cluster = MagicMock(spec=Cluster)
    cluster.namespace_exists.return_value = False
    return cluster


@pytest.fixture
def plan_config():
    """A resolved configuration with a fixed namespace."""
    return PlanConfig(
        namespace="openshift-must-gather-abc123",
        gather_command="/usr/bin/timeout 600s /usr/bin/gather",
        command=("/usr/bin/timeout", "600s", "/usr/bin/gather"),
        timeout="10m",
    )
