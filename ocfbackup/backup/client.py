"""Thin Box REST client built on requests."""

from __future__ import annotations

from typing import Any

import requests
from loguru import logger


class ApiError(RuntimeError):
    """Raised when the provider answers with a non-success status."""

    def __init__(self, method: str, url: str, status: int, body: str) -> None:
        self.method = method
        self.url = url
        self.status = status
        self.body = body
        super().__init__(f"{method} {url} returned HTTP {status}: {body[:500]}")


class TransportError(RuntimeError):
    """Raised when a request gets no usable answer (network failure or unreadable body)."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} {url} failed: {reason}")


class BoxClient:
    """Issues blocking HTTP calls and raises :class:`ApiError` on failure.

    No retries are attempted. Refresh tokens are single use, so replaying a
    failed exchange is never safe, and the other calls follow the same rule.
    """

    def __init__(
        self,
        base_url: str = "https://api.box.com/2.0",
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "ocfbackup/0.1"})

    def request(
        self,
        method: str,
        url: str,
        *,
        access_token: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send a request to an absolute URL or a path under ``base_url``."""
        if not url.startswith(("http://", "https://")):
            url = f"{self.base_url}/{url.lstrip('/')}"

        headers = dict(kwargs.pop("headers", None) or {})
        if access_token is not None:
            headers["Authorization"] = f"Bearer {access_token}"

        logger.debug("{} {}", method, url)
        try:
            response = self.session.request(method, url, headers=headers, **kwargs)
        except requests.RequestException as exc:
            logger.error("{} {} failed: {}", method, url, exc)
            raise TransportError(method, url, str(exc)) from exc

        if not response.ok:
            logger.error("{} {} failed with HTTP {}", method, url, response.status_code)
            raise ApiError(method, url, response.status_code, response.text)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(method, url, f"response body is not valid JSON ({exc})") from exc


__all__ = ["ApiError", "BoxClient", "TransportError"]
