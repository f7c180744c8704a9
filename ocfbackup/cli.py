"""Command line interface for the ocfbackup uploader."""

from __future__ import annotations

import json
import signal
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from loguru import logger

from .backup import (
    ApiError,
    BackupService,
    CredentialsError,
    FolderNotFoundError,
    NoArchivesError,
    TokenResponseError,
    TokenStoreError,
    TransportError,
    UploadError,
)
from .config import AppConfig, load_config
from .config.inspector import check_config, explain_config


@dataclass(slots=True)
class CLIState:
    """Holds shared state between Typer commands."""

    config_path: Path
    _config: AppConfig | None = None

    def ensure_config(self) -> AppConfig:
        if self._config is None:
            logger.info("Loading configuration from {}", self.config_path)
            self._config = load_config(AppConfig, self.config_path)
            _configure_logging(self._config)
        return self._config


app = typer.Typer(help="Upload backup archives to Box and publish a shared link")
config_app = typer.Typer(help="Validate and document configuration files")
app.add_typer(config_app, name="config")

_sink_ids: list[int] = []


def _default_config_path() -> Path:
    repo_root = Path(__file__).resolve().parents[1]
    return repo_root / "config" / "example.toml"


def _normalize_format(value: str) -> str:
    return value.lower()


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):  # pragma: no cover - defensive guard
        raise RuntimeError("CLI context is not initialised")
    return state


def _exit(code: int) -> None:
    raise typer.Exit(code)


def _configure_logging(config: AppConfig) -> None:
    for sink_id in _sink_ids:
        logger.remove(sink_id)
    _sink_ids.clear()
    try:
        logger.remove(0)
    except ValueError:
        pass

    _sink_ids.append(logger.add(sys.stderr, level=config.logging_level.upper()))
    if config.log_file is not None:
        try:
            config.log_file.parent.mkdir(parents=True, exist_ok=True)
            _sink_ids.append(
                logger.add(
                    config.log_file,
                    rotation="5 MB",
                    retention=5,
                    level=config.logging_level.upper(),
                )
            )
        except OSError as exc:  # pragma: no cover - filesystem issues are environment-specific
            logger.warning("Failed to initialise file log sink {}: {}", config.log_file, exc)


def _raise_on_sigterm(signum: int, frame: Any) -> None:
    raise SystemExit(128 + signum)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(
        _default_config_path(),
        help="Path to the TOML configuration file",
    ),
) -> None:
    """Initialise CLI state."""

    ctx.obj = CLIState(config_path=config.resolve())

    if ctx.invoked_subcommand is None:
        logger.warning("No command provided. Try 'upload' or 'config check'.")
        _exit(0)


@app.command(help="Upload the archive directory and publish the dated backup folder")
def upload(
    ctx: typer.Context,
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress transfer progress output",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="List archives and show the transfer command without contacting any service",
    ),
) -> None:
    state = _get_state(ctx)
    try:
        config = state.ensure_config()
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Cannot load configuration: {}", exc)
        _exit(1)
        return

    service = BackupService(config, quiet=quiet, dry_run=dry_run)
    archive_dir = config.backup.archive_dir
    # SIGTERM unwinds the stack so the temporary netrc file is removed.
    previous_handler = signal.signal(signal.SIGTERM, _raise_on_sigterm)
    try:
        result = service.run()
    except PermissionError as exc:
        logger.error(
            "Permission denied reading {}: {}. Run as a user that can read the archives.",
            archive_dir,
            exc.strerror or exc,
        )
        _exit(1)
        return
    except FileNotFoundError as exc:
        logger.error("Archive directory {} does not exist: {}", archive_dir, exc)
        _exit(1)
        return
    except NoArchivesError as exc:
        logger.error("Nothing to back up: {}", exc)
        _exit(1)
        return
    except ApiError as exc:
        logger.error("API request {} {} failed with HTTP {}: {}", exc.method, exc.url, exc.status, exc.body)
        _exit(1)
        return
    except TransportError as exc:
        logger.error("API request {} {} failed: {}", exc.method, exc.url, exc.reason)
        _exit(1)
        return
    except UploadError as exc:
        logger.error("Transfer failed: {}", exc)
        _exit(1)
        return
    except (CredentialsError, TokenStoreError, TokenResponseError, FolderNotFoundError) as exc:
        logger.error("Backup aborted: {}", exc)
        _exit(1)
        return
    finally:
        signal.signal(signal.SIGTERM, previous_handler)

    typer.echo(result.report)


@config_app.command(help="Validate the configuration file")
def check(
    ctx: typer.Context,
    format: str = typer.Option(  # noqa: A002 - match CLI option name
        "text",
        "--format",
        case_sensitive=False,
        help="Output format for validation results",
        callback=_normalize_format,
    ),
) -> None:
    state = _get_state(ctx)
    result, exit_code, _ = check_config(state.config_path)

    if format == "json":
        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
        _exit(exit_code)

    if result["status"] == "ok":
        logger.info("Configuration OK: {}", result["config_path"])
        for warning in result["warnings"]:
            logger.warning(warning)
    else:
        error: dict[str, Any] = result["error"]
        logger.error(
            "Configuration error ({}) for {}: {}",
            error["type"],
            result["config_path"],
            error["message"],
        )
        for detail in error.get("details", []):
            location = detail["loc"] or "<root>"
            logger.error("  - {}: {} ({})", location, detail["message"], detail["type"])

    _exit(exit_code)


@config_app.command(help="Describe available configuration fields")
def explain(
    format: str = typer.Option(  # noqa: A002 - match CLI option name
        "text",
        "--format",
        case_sensitive=False,
        help="Output format for configuration schema",
        callback=_normalize_format,
    ),
) -> None:
    fields = explain_config()

    if format == "json":
        print(json.dumps({"fields": fields}, indent=2, ensure_ascii=False, default=str))
        return

    logger.info("Configuration schema ({} fields):", len(fields))
    for field in fields:
        default_value = field["default"]
        if isinstance(default_value, (dict, list)):
            default_repr = json.dumps(default_value, ensure_ascii=False, default=str)
        elif default_value is None:
            default_repr = "None"
        else:
            default_repr = str(default_value)
        description = field["description"] or "(no description)"
        logger.info(
            "  - {name}: type={type}, required={required}, default={default}, description={description}",
            name=field["name"],
            type=field["type"],
            required="yes" if field["required"] else "no",
            default=default_repr,
            description=description,
        )


def main(argv: list[str] | None = None) -> int:
    """Entry point compatible with setuptools console scripts."""

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as exc:  # pragma: no cover - Typer translates exit codes
        return exc.exit_code
    if isinstance(result, int):
        return result
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
