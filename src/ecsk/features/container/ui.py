"""UI components for container selection."""

from __future__ import annotations

from ...core.base import BaseUIComponent
from ...core.errors import NoResourceError
from ...core.utils import show_spinner
from .container import ContainerService


class ContainerUI(BaseUIComponent):
    """UI component for container selection."""

    def __init__(self, container_service: ContainerService) -> None:
        super().__init__()
        self.container_service = container_service

    def ask_container(self, cluster_name: str, task: str, can_go_back: bool = False) -> str:
        with show_spinner():
            names = self.container_service.get_container_names(cluster_name, task)

        if not names:
            raise NoResourceError("Container")

        choices = [{"name": name, "value": name} for name in names]
        return self.select("Choose Container:", choices, can_go_back)
