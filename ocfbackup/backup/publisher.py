"""Folder lookup, collaborator grants and shared-link publication."""

from __future__ import annotations

import time
from typing import Callable, Sequence

from loguru import logger

from .client import BoxClient


class FolderNotFoundError(RuntimeError):
    """Raised when the uploaded backup folder is absent from the root listing."""


class FolderPublisher:
    """Publishes a backup folder to a fixed list of collaborators."""

    ROOT_FOLDER_ID = "0"

    def __init__(
        self,
        client: BoxClient,
        *,
        page_limit: int = 1000,
        grant_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.page_limit = page_limit
        self.grant_delay = grant_delay
        self._sleep = sleep

    def publish(self, access_token: str, folder_name: str, collaborators: Sequence[str]) -> str:
        """Grant viewer access on ``folder_name`` and return its shared link."""
        folder_id = self.find_folder_id(access_token, folder_name)
        logger.info("Found folder {} with id {}", folder_name, folder_id)
        self.grant_viewers(access_token, folder_id, collaborators)
        return self.share_with_collaborators(access_token, folder_id)

    def find_folder_id(self, access_token: str, folder_name: str) -> str:
        # Only the first page is scanned; the backup folders sit in the root.
        listing = self.client.request(
            "GET",
            f"folders/{self.ROOT_FOLDER_ID}/items",
            access_token=access_token,
            params={"limit": self.page_limit, "fields": "id,type,name"},
        )
        entries = listing.get("entries", [])
        for entry in entries:
            if entry.get("type") == "folder" and entry.get("name") == folder_name:
                return str(entry["id"])

        raise FolderNotFoundError(
            f"Folder '{folder_name}' not found among {len(entries)} root entries "
            f"(total_count={listing.get('total_count', 'unknown')})"
        )

    def grant_viewers(self, access_token: str, folder_id: str, collaborators: Sequence[str]) -> None:
        for index, email in enumerate(collaborators):
            if index:
                self._sleep(self.grant_delay)
            self.grant_viewer(access_token, folder_id, email)

    def grant_viewer(self, access_token: str, folder_id: str, email: str) -> None:
        logger.info("Granting viewer access on folder {} to {}", folder_id, email)
        self.client.request(
            "POST",
            "collaborations",
            access_token=access_token,
            params={"notify": "false"},
            json={
                "item": {"type": "folder", "id": folder_id},
                "accessible_by": {"type": "user", "login": email},
                "role": "viewer",
            },
        )

    def share_with_collaborators(self, access_token: str, folder_id: str) -> str:
        folder = self.client.request(
            "PUT",
            f"folders/{folder_id}",
            access_token=access_token,
            params={"fields": "shared_link"},
            json={"shared_link": {"access": "collaborators"}},
        )
        return folder["shared_link"]["url"]


__all__ = ["FolderPublisher", "FolderNotFoundError"]
