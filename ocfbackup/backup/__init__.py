"""Backup upload and publication for ocfbackup."""

from .client import ApiError, BoxClient, TransportError
from .credentials import Credentials, CredentialsError, load_credentials
from .publisher import FolderNotFoundError, FolderPublisher
from .report import friendly_duration, friendly_size, render_report, throughput
from .service import ArchiveFile, BackupResult, BackupService, NoArchivesError, list_archives
from .token_store import RefreshTokenStore, TokenStoreError
from .tokens import TokenManager, TokenResponseError
from .uploader import CurlFtpsUploader, Uploader, UploadError, create_uploader

__all__ = [
    "ApiError",
    "ArchiveFile",
    "BackupResult",
    "BackupService",
    "BoxClient",
    "Credentials",
    "CredentialsError",
    "CurlFtpsUploader",
    "FolderNotFoundError",
    "FolderPublisher",
    "NoArchivesError",
    "RefreshTokenStore",
    "TokenManager",
    "TokenResponseError",
    "TokenStoreError",
    "TransportError",
    "UploadError",
    "Uploader",
    "create_uploader",
    "friendly_duration",
    "friendly_size",
    "list_archives",
    "load_credentials",
    "render_report",
    "throughput",
]
