"""Base classes for AWS services and UI components."""

from __future__ import annotations

from typing import Any

from rich.console import Console

from .navigation import select_many, select_one


class BaseAWSService:
    """Base class for AWS service interactions with common patterns."""

    def __init__(self, client: Any) -> None:  # noqa: ANN401
        self.client = client


class BaseUIComponent:
    """Base class for UI components with common patterns."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def select(self, prompt: str, choices: list[dict[str, str]], can_go_back: bool) -> str:
        """Single selection with an optional back choice."""
        return select_one(prompt, choices, "Back" if can_go_back else None)

    def select_multiple(self, prompt: str, choices: list[dict[str, str]]) -> list[str]:
        return select_many(prompt, choices)
