"""Utilities for inspecting and validating configuration files."""

from __future__ import annotations

import shutil
from pathlib import Path
from types import UnionType
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from .app import AppConfig
from .base import load_config


class ConfigInspectionError(RuntimeError):
    """Raised when configuration inspection fails unexpectedly."""


def check_config(path: Path, *, config_cls: type[AppConfig] = AppConfig) -> tuple[dict[str, Any], int, AppConfig | None]:
    """Validate the configuration file and collect warnings.

    Returns a tuple of ``(result_dict, exit_code, config_instance_or_None)``.
    Exit codes: 0 ok, 1 unreadable TOML, 2 missing or forbidden file,
    3 schema validation failure.
    """

    try:
        config = load_config(config_cls, path)
    except FileNotFoundError as exc:
        return _error_result(path, "missing_file", str(exc)), 2, None
    except PermissionError as exc:
        return _error_result(path, "permission_error", str(exc)), 2, None
    except ValidationError as exc:
        details = [
            {"loc": ".".join(str(part) for part in err["loc"]), "message": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        return _error_result(path, "validation_error", "Configuration validation failed", details), 3, None
    except ValueError as exc:
        return _error_result(path, "invalid_format", str(exc)), 1, None
    except Exception as exc:  # pragma: no cover - unexpected failures
        raise ConfigInspectionError("Unexpected configuration inspection error") from exc

    result = {
        "status": "ok",
        "config_path": str(path),
        "warnings": _collect_warnings(config),
    }
    return result, 0, config


def explain_config(*, config_cls: type[BaseModel] = AppConfig) -> list[dict[str, Any]]:
    """Describe configuration fields, nested sections included, for documentation."""

    documentation: list[dict[str, Any]] = []

    def _walk(model_cls: type[BaseModel], prefix: str) -> None:
        for field_name, field in model_cls.model_fields.items():
            name = f"{prefix}{field_name}"
            documentation.append(
                {
                    "name": name,
                    "type": _format_annotation(field.annotation),
                    "required": field.is_required(),
                    "default": _format_default(field),
                    "description": field.description or "",
                }
            )
            nested = _nested_model(field.annotation)
            if nested is not None:
                _walk(nested, f"{name}.")

    _walk(config_cls, "")
    return documentation


def _error_result(
    path: Path,
    error_type: str,
    message: str,
    details: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"type": error_type, "message": message}
    if details is not None:
        error["details"] = details
    return {"status": "error", "config_path": str(path), "error": error}


def _collect_warnings(config: AppConfig) -> list[str]:
    warnings: list[str] = []

    if not config.backup.collaborators:
        warnings.append("No collaborators configured; the shared link will only be visible to the owner")
    if config.box.grant_delay == 0:
        warnings.append("'box.grant_delay' is 0; collaborator grants may hit provider rate limits")
    if not config.backup.archive_dir.is_absolute():
        warnings.append("'backup.archive_dir' is relative and depends on the working directory")
    if shutil.which(config.backup.curl_binary) is None:
        warnings.append(f"'{config.backup.curl_binary}' was not found on PATH; uploads will fail")

    return warnings


def _format_annotation(annotation: Any) -> str:
    origin = get_origin(annotation)
    if origin is None:
        if isinstance(annotation, type):
            return annotation.__name__
        return repr(annotation).replace("typing.", "")

    args = get_args(annotation)
    if origin in {Union, UnionType}:
        non_none = [arg for arg in args if arg is not type(None)]  # noqa: E721
        if len(non_none) == 1 and len(args) == 2:
            return f"Optional[{_format_annotation(non_none[0])}]"
        return f"Union[{', '.join(_format_annotation(arg) for arg in args)}]"

    origin_name = getattr(origin, "__name__", repr(origin).replace("typing.", ""))
    if args:
        return f"{origin_name}[{', '.join(_format_annotation(arg) for arg in args)}]"
    return origin_name


def _format_default(field: FieldInfo) -> Any:
    if field.is_required():
        return None
    value = field.default_factory() if field.default_factory is not None else field.default
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [str(item) if isinstance(item, Path) else item for item in value]
    return value


def _nested_model(annotation: Any) -> type[BaseModel] | None:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    if get_origin(annotation) in {Union, UnionType}:
        for arg in get_args(annotation):
            if isinstance(arg, type) and issubclass(arg, BaseModel):
                return arg
    return None


__all__ = ["check_config", "explain_config", "ConfigInspectionError"]
