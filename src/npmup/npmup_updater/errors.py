"""
Errors raised by the updater.

Only ManifestError is fatal for a run. The others are operational errors that
are reported on the diagnostic stream and do not change the exit code.
"""

from typing import Optional, Sequence


class NpmUpdateError(Exception):
    """Base class for all updater errors."""


class ManifestError(NpmUpdateError):
    """The manifest is missing, unreadable or not valid JSON."""


class BackupError(NpmUpdateError):
    """A backup could not be written, read or identified."""


class BackupNotFoundError(BackupError):
    """No backup file exists in the project directory."""


class CommandError(NpmUpdateError):
    """An external package-manager command failed to start or exited non-zero.

    Attributes:
        command: The argument vector that was executed.
        returncode: Exit status, or None when the process could not be spawned.
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int] = None,
        reason: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        if returncode is not None:
            message = f"Command failed with exit code {returncode}: {' '.join(self.command)}"
        else:
            message = f"Command could not be started: {' '.join(self.command)}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
