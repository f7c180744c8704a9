"""Box API configuration models."""

from __future__ import annotations

from pydantic import Field

from ocfbackup.config.base import BaseConfig


class BoxConfig(BaseConfig):
    """Endpoints and pacing for the Box REST API."""

    api_base_url: str = Field("https://api.box.com/2.0", description="Base URL of the Box content API")
    token_url: str = Field(
        "https://api.box.com/oauth2/token",
        description="OAuth token endpoint used for refresh-token exchange",
    )
    page_limit: int = Field(
        1000,
        ge=1,
        le=1000,
        description="Page size used when listing the root folder",
    )
    grant_delay: float = Field(
        1.0,
        ge=0.0,
        description="Seconds to wait between consecutive collaborator grants",
    )


__all__ = ["BoxConfig"]
