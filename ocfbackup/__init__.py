"""Upload archive backups to Box and publish them to a fixed set of collaborators.

The command line entry point lives in :mod:`ocfbackup.cli`; the upload,
token rotation and publication steps live in :mod:`ocfbackup.backup`.
"""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
