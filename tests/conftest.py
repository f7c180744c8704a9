"""Pytest helpers for path configuration and shared fixtures."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from ocfbackup.config import AppConfig, BackupConfig, BoxConfig  # noqa: E402
from tests.utils import SECRETS  # noqa: E402


@pytest.fixture()
def secrets_file(tmp_path: Path) -> Path:
    path = tmp_path / "box-creds.json"
    path.write_text(json.dumps(SECRETS), encoding="utf-8")
    return path


@pytest.fixture()
def archive_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "archive"
    directory.mkdir()
    (directory / "home.tar.gz").write_bytes(b"x" * 1500)
    (directory / "mysql.tar.gz").write_bytes(b"y" * 250)
    return directory


@pytest.fixture()
def app_config(archive_dir: Path, secrets_file: Path) -> AppConfig:
    return AppConfig(
        backup=BackupConfig(
            archive_dir=archive_dir,
            secrets_path=secrets_file,
            collaborators=["alice@example.org", "bob@example.org"],
        ),
        box=BoxConfig(grant_delay=1.0),
    )
