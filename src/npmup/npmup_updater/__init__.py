"""
npmup_updater - reinstall package.json dependencies at their latest versions

Features:
    - Update dependencies and/or devDependencies through the package manager
    - Restrict the update to a list of packages, or exclude some
    - Timestamped package.json backup before every update
    - Restore a backup and reinstall from it

Usage:
    >>> from npmup.npmup_updater import NpmUpdater
    >>> NpmUpdater("/path/to/project").run(["--deps", "--exclude", "react"])
"""

from npmup.npmup_updater.arguments import ParsedArguments, parse_arguments
from npmup.npmup_updater.backup import BackupFile, BackupManager
from npmup.npmup_updater.errors import (
    BackupError,
    BackupNotFoundError,
    CommandError,
    ManifestError,
    NpmUpdateError,
)
from npmup.npmup_updater.executor import CommandRunner, RestoreExecutor, UpdateExecutor
from npmup.npmup_updater.filters import FilterMode, filter_dependencies, pick, unpick
from npmup.npmup_updater.manifest import Manifest, load_manifest
from npmup.npmup_updater.updater import NpmUpdater

__all__ = [
    "NpmUpdater",
    "parse_arguments",
    "ParsedArguments",
    "Manifest",
    "load_manifest",
    "BackupManager",
    "BackupFile",
    "filter_dependencies",
    "FilterMode",
    "pick",
    "unpick",
    "CommandRunner",
    "UpdateExecutor",
    "RestoreExecutor",
    "NpmUpdateError",
    "ManifestError",
    "BackupError",
    "BackupNotFoundError",
    "CommandError",
]
