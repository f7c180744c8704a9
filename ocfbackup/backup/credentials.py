"""Static credentials loaded from the local secret file."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError


class CredentialsError(RuntimeError):
    """Raised when the secret file is missing or malformed."""


class Credentials(BaseModel):
    """Credentials for the FTPS login, the OAuth client and the token store."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    box_email: str
    box_password: SecretStr
    client_id: str
    client_secret: SecretStr
    db_password: SecretStr


def load_credentials(path: Path) -> Credentials:
    """Read and validate the JSON secret file at ``path``."""

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CredentialsError(f"Secret file not found: {path}") from exc

    try:
        return Credentials.model_validate(json.loads(raw))
    except json.JSONDecodeError as exc:
        raise CredentialsError(f"Secret file {path} is not valid JSON: {exc.msg}") from exc
    except ValidationError as exc:
        missing = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        raise CredentialsError(f"Secret file {path} is missing or has invalid keys: {missing}") from exc


__all__ = ["Credentials", "CredentialsError", "load_credentials"]
