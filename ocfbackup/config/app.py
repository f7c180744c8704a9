"""Application-level configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field

from ocfbackup.config.backup import BackupConfig
from ocfbackup.config.base import BaseConfig
from ocfbackup.config.box import BoxConfig
from ocfbackup.config.token_store import TokenStoreConfig


class AppConfig(BaseConfig):
    """Top-level runtime configuration for the backup uploader."""

    logging_level: str = Field("INFO", description="Log level: DEBUG, INFO, WARNING, ERROR")
    log_file: Path | None = Field(None, description="Optional rotating log file")

    backup: BackupConfig = Field(default_factory=BackupConfig, description="Archive and publication settings")
    box: BoxConfig = Field(default_factory=BoxConfig, description="Box API settings")
    token_store: TokenStoreConfig = Field(
        default_factory=TokenStoreConfig,
        description="Durable refresh-token store settings",
    )


__all__ = ["AppConfig"]
