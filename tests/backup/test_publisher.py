from __future__ import annotations

import pytest

from ocfbackup.backup.client import ApiError
from ocfbackup.backup.publisher import FolderNotFoundError, FolderPublisher
from tests.utils import FakeBoxClient, folder_listing

SHARED = {"type": "folder", "id": "42", "shared_link": {"url": "https://app.box.com/s/xyz", "access": "collaborators"}}


def _publisher(client: FakeBoxClient, sleeps: list[float], **kwargs) -> FolderPublisher:
    return FolderPublisher(client, sleep=sleeps.append, **kwargs)


def test_find_folder_id_matches_name_and_type() -> None:
    client = FakeBoxClient(
        [
            folder_listing(
                ("file", "1", "ocf-backup-2024-05-01"),
                ("folder", "2", "ocf-backup-2024-04-30"),
                ("folder", "3", "ocf-backup-2024-05-01"),
            )
        ]
    )

    folder_id = _publisher(client, [], page_limit=500).find_folder_id("tok", "ocf-backup-2024-05-01")

    assert folder_id == "3"
    call = client.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "folders/0/items"
    assert call["access_token"] == "tok"
    assert call["params"]["limit"] == 500


def test_missing_folder_is_fatal() -> None:
    client = FakeBoxClient([folder_listing(("folder", "2", "other"), total_count=1500)])

    with pytest.raises(FolderNotFoundError, match="total_count=1500"):
        _publisher(client, []).find_folder_id("tok", "ocf-backup-2024-05-01")


def test_publish_grants_each_collaborator_in_order_with_pacing() -> None:
    collaborators = ["a@example.org", "b@example.org", "a@example.org"]
    client = FakeBoxClient(
        [folder_listing(("folder", "42", "ocf-backup-2024-05-01"))] + [{}] * len(collaborators) + [SHARED]
    )
    sleeps: list[float] = []

    link = _publisher(client, sleeps, grant_delay=1.0).publish("tok", "ocf-backup-2024-05-01", collaborators)

    assert link == "https://app.box.com/s/xyz"
    grants = [call for call in client.calls if call["url"] == "collaborations"]
    assert len(grants) == 3
    assert [call["json"]["accessible_by"]["login"] for call in grants] == collaborators
    for call in grants:
        assert call["method"] == "POST"
        assert call["params"] == {"notify": "false"}
        assert call["json"]["item"] == {"type": "folder", "id": "42"}
        assert call["json"]["role"] == "viewer"
        assert call["access_token"] == "tok"
    assert sleeps == [1.0, 1.0]

    share = client.calls[-1]
    assert share["method"] == "PUT"
    assert share["url"] == "folders/42"
    assert share["json"] == {"shared_link": {"access": "collaborators"}}


def test_failed_grant_aborts_remaining_steps() -> None:
    client = FakeBoxClient(
        [
            folder_listing(("folder", "42", "ocf-backup-2024-05-01")),
            {},
            ApiError("POST", "https://api.box.com/2.0/collaborations", 400, "user_already_collaborator"),
        ]
    )

    with pytest.raises(ApiError):
        _publisher(client, []).publish("tok", "ocf-backup-2024-05-01", ["a@example.org", "b@example.org", "c@example.org"])

    assert len(client.calls) == 3
    assert client.responses == []


def test_no_collaborators_still_sets_link() -> None:
    client = FakeBoxClient([folder_listing(("folder", "42", "f")), SHARED])
    sleeps: list[float] = []

    assert _publisher(client, sleeps).publish("tok", "f", []) == "https://app.box.com/s/xyz"
    assert sleeps == []
