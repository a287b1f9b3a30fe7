"""UI components for bucket selection."""

from __future__ import annotations

from ...core.base import BaseUIComponent
from ...core.navigation import ask_text
from ...core.utils import print_success, show_spinner
from .storage import StorageService

NEW_BUCKET = "bucket:new"


class BucketUI(BaseUIComponent):
    """UI component for choosing (or creating) the transfer bucket."""

    def __init__(self, storage_service: StorageService) -> None:
        super().__init__()
        self.storage_service = storage_service

    def ask_bucket(self, region: str, can_go_back: bool = False) -> str:
        with show_spinner():
            names = self.storage_service.get_bucket_names()

        choices = [{"name": "→ New Bucket", "value": NEW_BUCKET}]
        choices.extend({"name": name, "value": name} for name in names)

        selected = self.select("Choose Bucket (Use for file transfer):", choices, can_go_back)
        if selected != NEW_BUCKET:
            return selected

        bucket = ask_text("Input Bucket Name:")
        if not bucket:
            return ""
        with show_spinner(f"Creating bucket {bucket}..."):
            self.storage_service.create_bucket(bucket, region)
        print_success(f"Created bucket {bucket}")
        return bucket
