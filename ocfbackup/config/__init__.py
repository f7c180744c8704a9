"""Configuration namespace for ocfbackup."""

from __future__ import annotations

from .app import AppConfig
from .backup import BackupConfig
from .base import BaseConfig, load_config
from .box import BoxConfig
from .token_store import TokenStoreConfig
from .utils import resolve_env_reference

__all__ = [
    "BaseConfig",
    "AppConfig",
    "load_config",
    "BackupConfig",
    "BoxConfig",
    "TokenStoreConfig",
    "resolve_env_reference",
]
