"""OAuth refresh-token rotation."""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from .client import BoxClient
from .credentials import Credentials


class TokenResponseError(RuntimeError):
    """Raised when a successful token exchange omits one of the tokens."""


class TokenStore(Protocol):
    def read(self) -> str: ...

    def write(self, token: str) -> None: ...


class TokenManager:
    """Exchanges the stored refresh token for a fresh access token.

    The provider invalidates a refresh token as soon as it is exchanged, so the
    new refresh token is persisted whenever the response carries one, before
    anything else is checked. The access token itself is never persisted.
    """

    def __init__(self, store: TokenStore, client: BoxClient, token_url: str) -> None:
        self.store = store
        self.client = client
        self.token_url = token_url

    def refresh_access_token(self, credentials: Credentials) -> str:
        refresh_token = self.store.read()
        payload = self.client.request(
            "POST",
            self.token_url,
            data={
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": credentials.client_id,
                "client_secret": credentials.client_secret.get_secret_value(),
            },
        )

        new_refresh_token = payload.get("refresh_token")
        if not new_refresh_token:
            raise TokenResponseError(f"Token response from {self.token_url} has no refresh_token")
        self.store.write(new_refresh_token)

        access_token = payload.get("access_token")
        if not access_token:
            raise TokenResponseError(
                f"Token response from {self.token_url} has no access_token; the new refresh token was stored"
            )

        logger.info("Refresh token rotated; access token valid for {}s", payload.get("expires_in", "?"))
        return access_token


__all__ = ["TokenManager", "TokenResponseError", "TokenStore"]
