"""Backup configuration models."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from pydantic import Field, field_validator

from ocfbackup.config.base import BaseConfig


class BackupConfig(BaseConfig):
    """Where archives come from and how the dated backup folder is published."""

    archive_dir: Path = Field(
        Path("/opt/backups/archive"),
        description="Directory holding the archive files to upload",
    )
    secrets_path: Path = Field(
        Path("/opt/share/backups/box-creds.json"),
        description="JSON file with Box login, OAuth client and database credentials",
    )
    folder_prefix: str = Field(
        "ocf-backup",
        description="Remote folder name prefix; the run date is appended as -YYYY-MM-DD",
    )
    collaborators: list[str] = Field(
        default_factory=list,
        description="Email addresses granted viewer access to each backup folder",
    )
    ftp_host: str = Field("ftp.box.com", description="FTP-over-TLS endpoint of the storage provider")
    curl_binary: str = Field("curl", description="curl executable used for the FTPS transfer")

    @field_validator("collaborators")
    @classmethod
    def _validate_collaborators(cls, value: list[str]) -> list[str]:
        for email in value:
            if "@" not in email:
                raise ValueError(f"Collaborator '{email}' is not an email address")
        return value

    def folder_name(self, day: date) -> str:
        """Return the remote folder name for a calendar date."""
        return f"{self.folder_prefix}-{day:%Y-%m-%d}"


__all__ = ["BackupConfig"]
