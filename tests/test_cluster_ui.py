"""Tests for cluster UI components."""

from unittest.mock import patch

import pytest

from ecsk.core.errors import NoResourceError
from ecsk.features.cluster.cluster import ClusterService
from ecsk.features.cluster.ui import ClusterUI


@pytest.fixture
def cluster_service_with_many_clusters(ecs_client):
    for i in range(150):
        ecs_client.create_cluster(clusterName=f"cluster-{i:03d}")
    return ClusterService(ecs_client)


def test_get_cluster_names_drains_pages(cluster_service_with_many_clusters):
    names = cluster_service_with_many_clusters.get_cluster_names()

    assert len(names) == 150
    assert "cluster-149" in names


@patch("ecsk.core.base.select_one")
def test_ask_cluster(mock_select, cluster_service_with_many_clusters):
    mock_select.return_value = "cluster-050"

    result = ClusterUI(cluster_service_with_many_clusters).ask_cluster()

    assert result == "cluster-050"
    prompt, choices, back_text = mock_select.call_args[0]
    assert prompt == "Choose Cluster:"
    assert len(choices) == 150
    assert back_text is None


@patch("ecsk.core.base.select_one")
def test_ask_cluster_with_back(mock_select, ecs_client):
    ecs_client.create_cluster(clusterName="dev")
    mock_select.return_value = ""

    result = ClusterUI(ClusterService(ecs_client)).ask_cluster(can_go_back=True)

    assert result == ""
    assert mock_select.call_args[0][2] == "Back"


@patch("ecsk.core.base.select_one")
def test_ask_cluster_none_exist(mock_select, ecs_client):
    with pytest.raises(NoResourceError, match="No Cluster exists."):
        ClusterUI(ClusterService(ecs_client)).ask_cluster()

    mock_select.assert_not_called()
