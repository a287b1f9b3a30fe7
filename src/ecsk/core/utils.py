"""Utility functions for ecsk."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import Any, TypeVar

from rich.console import Console
from rich.spinner import Spinner

console = Console()
error_console = Console(stderr=True)

T = TypeVar("T")

MAX_LABEL_LENGTH = 30
ELLIPSIS = "..."
COLUMN_SEPARATOR = " | "
MISSING = "-"


def extract_name_from_arn(arn: str) -> str:
    """Extract resource name from AWS ARN."""
    return arn.split("/")[-1]


def print_error(message: str) -> None:
    error_console.print(f"❌ {message}", style="red", markup=False)


def print_success(message: str) -> None:
    console.print(f"✔ {message}", style="green")


def print_warning(message: str) -> None:
    console.print(f"⚠️ {message}", style="yellow", markup=False)


def print_info(message: str) -> None:
    console.print(message, style="blue", markup=False)


@contextmanager
def show_spinner(message: str = "") -> Iterator[None]:
    """Context manager that shows a spinner while running operations."""
    spinner = Spinner("dots", text=message, style="yellow")
    with console.status(spinner):
        yield


def paginate_aws_list(client: Any, operation_name: str, result_key: str, **kwargs: Any) -> list[Any]:  # noqa: ANN401
    """Drain a boto3 paginator and concatenate `result_key` from every page."""
    paginator = client.get_paginator(operation_name)
    page_iterator = paginator.paginate(**kwargs)

    results: list[Any] = []
    for page in page_iterator:
        results.extend(page.get(result_key, []))

    return results


def batch_items(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of at most `size` items, preserving order."""
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def truncate(text: str, max_length: int = MAX_LABEL_LENGTH) -> str:
    """Shorten free text so selection lists stay columnar."""
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


def format_columns(rows: Sequence[Sequence[str]]) -> list[str]:
    """Align rows of cells into columns separated by ` | `."""
    if not rows:
        return []

    column_count = max(len(row) for row in rows)
    widths = [0] * column_count
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    lines = []
    for row in rows:
        cells = [cell.ljust(widths[index]) for index, cell in enumerate(row)]
        lines.append(COLUMN_SEPARATOR.join(cells).rstrip())
    return lines


def get_tag_name(tags: Sequence[dict[str, str]] | None) -> str:
    """Return the value of the `Name` tag, or `-` when there is none."""
    for tag in tags or []:
        if tag.get("Key") == "Name":
            return tag.get("Value", MISSING)
    return MISSING


def format_timestamp(value: datetime | None) -> str:
    """Format like `2021/1/2 15:04:05` (no zero padding on month and day)."""
    if value is None:
        return MISSING
    return f"{value.year}/{value.month}/{value.day} {value.strftime('%H:%M:%S')}"
