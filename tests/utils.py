"""Fakes shared by the backup and CLI tests."""

from __future__ import annotations

from typing import Any

SECRETS = {
    "box_email": "backups@example.org",
    "box_password": "s3cret pass",
    "client_id": "client-id",
    "client_secret": "client-secret",
    "db_password": "db-pass",
}


class FakeBoxClient:
    """Records requests and answers from a queue of scripted payloads.

    A queued exception is raised instead of returned.
    """

    def __init__(self, responses: list[Any] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, *, access_token: str | None = None, **kwargs: Any) -> dict[str, Any]:
        self.calls.append({"method": method, "url": url, "access_token": access_token, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeTokenStore:
    def __init__(self, token: str = "refresh-0", events: list[str] | None = None) -> None:
        self.token = token
        self.writes: list[str] = []
        self.events = events if events is not None else []

    def read(self) -> str:
        self.events.append("store.read")
        return self.token

    def write(self, token: str) -> None:
        self.events.append("store.write")
        self.writes.append(token)
        self.token = token


class RecordingUploader:
    def __init__(self, events: list[str] | None = None, error: Exception | None = None) -> None:
        self.events = events if events is not None else []
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def upload(self, credentials, files, folder_name, *, dry_run=False):  # type: ignore[no-untyped-def]
        self.events.append("upload")
        self.calls.append({"files": list(files), "folder_name": folder_name, "dry_run": dry_run})
        if self.error is not None:
            raise self.error


def folder_listing(*entries: tuple[str, str, str], total_count: int | None = None) -> dict[str, Any]:
    items = [{"type": kind, "id": ident, "name": name} for kind, ident, name in entries]
    return {"entries": items, "total_count": len(items) if total_count is None else total_count}
