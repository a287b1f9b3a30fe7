"""UI components for cluster selection."""

from __future__ import annotations

from ...core.base import BaseUIComponent
from ...core.errors import NoResourceError
from ...core.utils import show_spinner
from .cluster import ClusterService


class ClusterUI(BaseUIComponent):
    """UI component for cluster selection."""

    def __init__(self, cluster_service: ClusterService) -> None:
        super().__init__()
        self.cluster_service = cluster_service

    def ask_cluster(self, can_go_back: bool = False) -> str:
        with show_spinner():
            cluster_names = self.cluster_service.get_cluster_names()

        if not cluster_names:
            raise NoResourceError("Cluster")

        choices = [{"name": name, "value": name} for name in cluster_names]
        return self.select("Choose Cluster:", choices, can_go_back)
