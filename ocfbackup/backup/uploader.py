"""Upload abstractions for backup archives."""

from __future__ import annotations

import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from loguru import logger

from ocfbackup.config.backup import BackupConfig

from .credentials import Credentials


class UploadError(RuntimeError):
    """Raised when transferring the archives fails."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class Uploader(ABC):
    """Abstract uploader definition."""

    @abstractmethod
    def upload(
        self,
        credentials: Credentials,
        files: Sequence[Path],
        folder_name: str,
        *,
        dry_run: bool = False,
    ) -> None:
        """Place every file at ``<folder_name>/<file name>`` on the remote side."""


class CurlFtpsUploader(Uploader):
    """Uploader that pushes all archives with a single curl FTP-over-TLS call.

    Login details go through a private netrc file that only exists for the
    duration of the transfer.
    """

    def __init__(self, host: str, *, curl_binary: str = "curl", quiet: bool = False) -> None:
        self.host = host
        self.curl_binary = curl_binary
        self.quiet = quiet

    def destination_url(self, folder_name: str) -> str:
        return f"ftp://{self.host}/{folder_name}/"

    def build_command(self, netrc_path: Path, files: Sequence[Path], folder_name: str) -> list[str]:
        command = [
            self.curl_binary,
            "--ssl-reqd",
            "--ftp-create-dirs",
            # Passive mode, but connect back to the control host instead of
            # the address in the PASV reply (breaks behind NAT otherwise).
            "--ftp-pasv",
            "--ftp-skip-pasv-ip",
            "--netrc-file",
            str(netrc_path),
        ]
        if self.quiet:
            command += ["--silent", "--show-error"]

        destination = self.destination_url(folder_name)
        for path in files:
            command += ["-T", str(path), destination]
        return command

    def upload(
        self,
        credentials: Credentials,
        files: Sequence[Path],
        folder_name: str,
        *,
        dry_run: bool = False,
    ) -> None:
        if not files:
            raise UploadError("No files given to upload")

        if dry_run:
            command = self.build_command(Path("<netrc>"), files, folder_name)
            logger.info("[Dry Run] Would run: {}", " ".join(command))
            return

        logger.info("Uploading {} files to {}", len(files), self.destination_url(folder_name))
        with tempfile.TemporaryDirectory(prefix="ocfbackup-") as tmp_dir:
            netrc_path = Path(tmp_dir) / "netrc"
            _write_netrc(netrc_path, self.host, credentials)
            command = self.build_command(netrc_path, files, folder_name)
            try:
                result = subprocess.run(
                    command,
                    check=False,
                    stdout=subprocess.DEVNULL if self.quiet else None,
                )
            except OSError as exc:
                raise UploadError(f"Could not start {self.curl_binary}: {exc}") from exc

        if result.returncode != 0:
            raise UploadError(
                f"{self.curl_binary} exited with status {result.returncode}",
                returncode=result.returncode,
            )
        logger.info("Transfer to {} finished", folder_name)


def _netrc_quote(value: str) -> str:
    if value and not any(ch.isspace() or ch in '"\\' for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _write_netrc(path: Path, host: str, credentials: Credentials) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(
            f"machine {host} "
            f"login {_netrc_quote(credentials.box_email)} "
            f"password {_netrc_quote(credentials.box_password.get_secret_value())}\n"
        )


def create_uploader(backup: BackupConfig, *, quiet: bool = False) -> Uploader:
    """Instantiate the uploader described by the backup configuration."""

    return CurlFtpsUploader(backup.ftp_host, curl_binary=backup.curl_binary, quiet=quiet)


__all__ = [
    "Uploader",
    "CurlFtpsUploader",
    "UploadError",
    "create_uploader",
]
