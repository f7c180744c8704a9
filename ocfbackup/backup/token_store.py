"""Durable storage for the rotating OAuth refresh token."""

from __future__ import annotations

from typing import Any, Callable

import psycopg
from loguru import logger
from psycopg import sql

from ocfbackup.config.token_store import TokenStoreConfig
from ocfbackup.config.utils import resolve_env_reference


class TokenStoreError(RuntimeError):
    """Raised when the refresh token cannot be read or written."""


class RefreshTokenStore:
    """Single-row key-value record in PostgreSQL.

    Every write overwrites the row; there is no history and no locking, so
    only one run may use the store at a time.
    """

    def __init__(
        self,
        config: TokenStoreConfig,
        password: str,
        *,
        connect: Callable[..., Any] | None = None,
    ) -> None:
        self.config = config
        self._password = password
        self._connect = connect or psycopg.connect

    def read(self) -> str:
        query = sql.SQL("SELECT value FROM {} WHERE name = %s").format(sql.Identifier(self.config.table))
        try:
            with self._open() as conn:
                row = conn.execute(query, (self.config.key,)).fetchone()
        except (psycopg.Error, OSError) as exc:
            raise TokenStoreError(f"Failed to read '{self.config.key}' from token store: {exc}") from exc

        if row is None or not row[0]:
            raise TokenStoreError(f"No '{self.config.key}' record found in table {self.config.table}")
        return row[0]

    def write(self, token: str) -> None:
        query = sql.SQL(
            "INSERT INTO {} (name, value) VALUES (%s, %s) "
            "ON CONFLICT (name) DO UPDATE SET value = EXCLUDED.value"
        ).format(sql.Identifier(self.config.table))
        try:
            with self._open() as conn:
                conn.execute(query, (self.config.key, token))
        except (psycopg.Error, OSError) as exc:
            raise TokenStoreError(f"Failed to write '{self.config.key}' to token store: {exc}") from exc
        logger.debug("Stored new '{}' record", self.config.key)

    def _open(self):
        return self._connect(
            host=resolve_env_reference(self.config.host),
            port=self.config.port,
            dbname=self.config.dbname,
            user=resolve_env_reference(self.config.user),
            password=self._password,
        )


__all__ = ["RefreshTokenStore", "TokenStoreError"]
