"""Base configuration model and TOML loader."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

ConfigT = TypeVar("ConfigT", bound="BaseConfig")


class BaseConfig(BaseModel):
    """Common settings shared by every configuration model."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


def load_config(model_cls: type[ConfigT], path: Path) -> ConfigT:
    """Load a TOML file and validate it against ``model_cls``.

    Raises :class:`FileNotFoundError` when the file does not exist and
    :class:`ValueError` when it is not valid TOML.
    """

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open("rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid TOML in {path}: {exc}") from exc

    return model_cls.model_validate(data)


__all__ = ["BaseConfig", "load_config"]
