"""Shared helpers for CLI tests."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path

from loguru import logger


@contextmanager
def logger_to_stderr(level: str = "INFO"):
    """Temporarily route Loguru output to stderr for assertion."""

    handler_id = logger.add(sys.stderr, level=level)
    try:
        yield
    finally:
        logger.remove(handler_id)


def write_config(tmp_path: Path, archive_dir: Path, secrets_path: Path) -> Path:
    config_text = f"""
logging_level = "INFO"

[backup]
archive_dir = "{archive_dir.as_posix()}"
secrets_path = "{secrets_path.as_posix()}"
collaborators = ["alice@example.org"]

[box]
grant_delay = 0.0
"""
    config_file = tmp_path / "config.toml"
    config_file.write_text(config_text, encoding="utf-8")
    return config_file
