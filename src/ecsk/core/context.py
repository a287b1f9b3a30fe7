"""Context objects for passing resolved targets between components."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContainerTarget:
    """A container inside a running task, as the session broker addresses it."""

    cluster_name: str
    task: str
    container_name: str

    @property
    def task_id(self) -> str:
        """Extract task ID from a task ARN (or return the ID unchanged)."""
        return self.task.split("/")[-1]

    def session_target(self, runtime_id: str) -> str:
        return f"ecs:{self.cluster_name}_{self.task_id}_{runtime_id}"
