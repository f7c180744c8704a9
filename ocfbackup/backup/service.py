"""Backup service responsible for uploading archives and publishing the result."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable

from loguru import logger

from ocfbackup.config import AppConfig, TokenStoreConfig

from .client import BoxClient
from .credentials import load_credentials
from .publisher import FolderPublisher
from .report import friendly_size, render_report
from .token_store import RefreshTokenStore
from .tokens import TokenManager, TokenStore
from .uploader import Uploader, create_uploader


class NoArchivesError(RuntimeError):
    """Raised when the archive directory contains nothing to upload."""


@dataclass(frozen=True)
class ArchiveFile:
    """A local archive and its size at the start of the run."""

    path: Path
    size: int


@dataclass(frozen=True)
class BackupResult:
    """Outcome of a backup run."""

    folder_name: str
    file_count: int
    total_bytes: int
    elapsed_seconds: float
    shared_link: str | None
    report: str


def list_archives(directory: Path) -> list[ArchiveFile]:
    """Snapshot the regular files in ``directory``, sorted by name.

    :class:`PermissionError` propagates unchanged so callers can tell a
    privilege problem apart from an empty directory.
    """
    with os.scandir(directory) as it:
        entries = sorted((entry for entry in it if entry.is_file()), key=lambda entry: entry.name)
    archives = [ArchiveFile(path=Path(entry.path), size=entry.stat().st_size) for entry in entries]
    if not archives:
        raise NoArchivesError(f"No archive files found in {directory}")
    return archives


class BackupService:
    """Sequences transfer, token rotation and folder publication.

    Any exception aborts the run; nothing that already happened is undone.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        quiet: bool = False,
        dry_run: bool = False,
        uploader_factory: Callable[..., Uploader] | None = None,
        token_store_factory: Callable[[TokenStoreConfig, str], TokenStore] | None = None,
        client: BoxClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        today: date | None = None,
    ) -> None:
        self.config = config
        self.quiet = quiet
        self.dry_run = dry_run
        self._uploader_factory = uploader_factory or create_uploader
        self._token_store_factory = token_store_factory or RefreshTokenStore
        self._client = client
        self._sleep = sleep
        self._clock = clock
        self._today = today

    def run(self) -> BackupResult:
        """Execute the full backup flow (upload + rotate token + publish)."""
        backup_cfg = self.config.backup

        archives = list_archives(backup_cfg.archive_dir)
        credentials = load_credentials(backup_cfg.secrets_path)
        folder_name = backup_cfg.folder_name(self._today or date.today())

        start = self._clock()
        total_bytes = sum(archive.size for archive in archives)
        logger.info(
            "Backing up {} files ({}) to {}",
            len(archives),
            friendly_size(total_bytes),
            folder_name,
        )

        uploader = self._uploader_factory(backup_cfg, quiet=self.quiet)
        uploader.upload(
            credentials,
            [archive.path for archive in archives],
            folder_name,
            dry_run=self.dry_run,
        )

        shared_link: str | None = None
        if self.dry_run:
            logger.info("[Dry Run] Skipping token refresh and folder publication")
        else:
            client = self._client or BoxClient(self.config.box.api_base_url)
            token_manager = self._token_manager(credentials.db_password.get_secret_value(), client)
            access_token = token_manager.refresh_access_token(credentials)
            publisher = FolderPublisher(
                client,
                page_limit=self.config.box.page_limit,
                grant_delay=self.config.box.grant_delay,
                sleep=self._sleep,
            )
            shared_link = publisher.publish(access_token, folder_name, backup_cfg.collaborators)

        end = self._clock()
        report = render_report(start, end, len(archives), total_bytes, shared_link)
        logger.info("Backup run finished: {} -> {}", folder_name, shared_link or "<not published>")
        return BackupResult(
            folder_name=folder_name,
            file_count=len(archives),
            total_bytes=total_bytes,
            elapsed_seconds=end - start,
            shared_link=shared_link,
            report=report,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _token_manager(self, db_password: str, client: BoxClient) -> TokenManager:
        store = self._token_store_factory(self.config.token_store, db_password)
        return TokenManager(store, client, self.config.box.token_url)


__all__ = ["ArchiveFile", "BackupResult", "BackupService", "NoArchivesError", "list_archives"]
