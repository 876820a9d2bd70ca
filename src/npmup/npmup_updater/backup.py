"""
Backup Manager - timestamped copies of the manifest.

Backups are named ``package-backup-<epoch-millis>.json`` and live next to the
manifest. They are written once, never modified, and never deleted here.
"""

import logging
import math
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from npmup.npmup_updater.errors import BackupError, BackupNotFoundError
from npmup.npmup_updater.manifest import manifest_path

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "package-backup-"
BACKUP_SUFFIX = ".json"
BACKUP_PATTERN = re.compile(
    re.escape(BACKUP_PREFIX) + r"(.+)" + re.escape(BACKUP_SUFFIX)
)


def current_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class BackupFile:
    """A backup found on disk.

    Attributes:
        path: Absolute path of the backup.
        timestamp: Creation time embedded in the name, in epoch milliseconds.
    """

    path: Path
    timestamp: float


def backup_name(timestamp: int) -> str:
    return f"{BACKUP_PREFIX}{timestamp}{BACKUP_SUFFIX}"


def parse_timestamp(name: str) -> Optional[float]:
    """Extract the timestamp from a backup file name.

    Args:
        name: A file name.

    Returns:
        The timestamp, or None if the name is not a backup name.

    Raises:
        BackupError: The name looks like a backup but the timestamp is not a number.
    """
    match = BACKUP_PATTERN.fullmatch(name)
    if not match:
        return None
    try:
        value = float(match.group(1))
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        raise BackupError(f"Error reading the timestamp of the backup file {name}")
    return value


class BackupManager:
    """Creates and locates manifest backups in one project directory.

    Attributes:
        cwd: The project directory.

    Example:
        >>> manager = BackupManager("/path/to/project")
        >>> path = manager.backup(b'{"dependencies": {}}')
        >>> manager.locate_latest() == path
        True
    """

    def __init__(
        self,
        cwd: Union[str, Path],
        clock: Callable[[], int] = current_millis,
    ) -> None:
        self.cwd = Path(cwd).resolve()
        self._clock = clock

    def backup(self, raw: bytes) -> Path:
        """Write ``raw`` unmodified to a new timestamped backup file.

        Raises:
            BackupError: The file could not be written.
        """
        path = self.cwd / backup_name(self._clock())
        try:
            path.write_bytes(raw)
        except OSError as e:
            raise BackupError(f"Cannot write backup {path}: {e}") from e
        logger.debug("Wrote backup %s (%d bytes)", path, len(raw))
        return path

    def list_backups(self) -> List[BackupFile]:
        """Return all backups in the project directory, oldest first.

        Raises:
            BackupError: A backup name carries an invalid timestamp.
        """
        backups: List[BackupFile] = []
        for entry in sorted(self.cwd.iterdir()):
            timestamp = parse_timestamp(entry.name)
            if timestamp is None:
                continue
            backups.append(BackupFile(path=entry, timestamp=timestamp))
        # sorted() is stable, so equal timestamps keep name order
        return sorted(backups, key=lambda b: b.timestamp)

    def locate_latest(self) -> Path:
        """Return the path of the backup with the greatest timestamp.

        Raises:
            BackupNotFoundError: There is no backup in the project directory.
            BackupError: A backup name carries an invalid timestamp.
        """
        backups = self.list_backups()
        if not backups:
            raise BackupNotFoundError(f"No package.json backup found in {self.cwd}")
        return max(backups, key=lambda b: b.timestamp).path

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a user-supplied backup path against the project directory."""
        return (self.cwd / Path(path)).resolve()

    def restore_from(self, path: Union[str, Path]) -> Path:
        """Overwrite the manifest with the exact bytes of a backup.

        Args:
            path: The backup to restore; relative paths are taken from the
                project directory.

        Returns:
            The path of the manifest that was written.

        Raises:
            BackupError: The backup could not be read or the manifest written.
        """
        source = self.resolve(path)
        try:
            raw = source.read_bytes()
        except OSError as e:
            raise BackupError(f"Cannot read backup {source}: {e}") from e

        target = manifest_path(self.cwd)
        try:
            target.write_bytes(raw)
        except OSError as e:
            raise BackupError(f"Cannot write {target}: {e}") from e
        logger.debug("Restored %s from %s", target, source)
        return target
