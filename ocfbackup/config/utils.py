"""Helper utilities for configuration handling."""

from __future__ import annotations

import os
from pathlib import Path

_ENV_PREFIX = "env:"
_FILE_PREFIX = "file:"


def resolve_env_reference(value: str | None, *, required: bool = True) -> str | None:
    """Resolve ``env:VAR_NAME`` and ``file:/path`` references.

    ``env:`` reads from ``os.environ``; ``file:`` reads the first line of the
    file. Plain strings are returned unchanged and ``None`` passes through.
    When ``required`` is true a missing or empty reference raises
    :class:`EnvironmentError`.
    """

    if value is None:
        return None

    if value.startswith(_ENV_PREFIX):
        var_name = value[len(_ENV_PREFIX):]
        resolved = os.getenv(var_name)
        source = f"Environment variable '{var_name}'"
    elif value.startswith(_FILE_PREFIX):
        path = Path(value[len(_FILE_PREFIX):]).expanduser()
        try:
            resolved = path.read_text(encoding="utf-8").splitlines()[0].strip()
        except (OSError, IndexError):
            resolved = None
        source = f"Reference file '{path}'"
    else:
        return value

    if resolved:
        return resolved
    if required:
        raise EnvironmentError(f"{source} is not set or empty")
    return None


__all__ = ["resolve_env_reference"]
