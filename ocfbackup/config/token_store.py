"""Durable refresh-token store configuration."""

from __future__ import annotations

from pydantic import Field

from ocfbackup.config.base import BaseConfig


class TokenStoreConfig(BaseConfig):
    """Connection settings for the PostgreSQL table holding the refresh token.

    The password is not configured here; it is read from the secret file.
    """

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, ge=1, le=65535, description="Database port")
    dbname: str = Field("ocfbackups", description="Database name")
    user: str = Field("ocfbackups", description="Database user")
    table: str = Field(
        "oauth_tokens",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Key-value table with 'name' and 'value' columns",
    )
    key: str = Field("refresh-token", description="Row name under which the refresh token is stored")


__all__ = ["TokenStoreConfig"]
