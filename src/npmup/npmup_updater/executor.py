"""
Update and Restore executors.

Every external command is an argument vector run without a shell, one at a
time. A step only starts after the previous one succeeded; the first failure
is reported on the diagnostic stream and ends that chain.
"""

import logging
import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

from npmup.npmup_updater.backup import BackupManager
from npmup.npmup_updater.errors import CommandError, NpmUpdateError
from npmup.npmup_utils.config import get_dependency_dir, get_package_manager
from npmup.npmup_utils.output import OutputType, PrettyOutput

logger = logging.getLogger(__name__)

SAVE_FLAG = "--save"
SAVE_DEV_FLAG = "--save-dev"


def report_error(error: Exception) -> None:
    """Print an operational error without stopping the program."""
    PrettyOutput.print(str(error), OutputType.ERROR)


class CommandRunner:
    """Runs package-manager commands in the project directory.

    The command line is echoed before it runs. The child process inherits the
    terminal, so its output reaches the user unmodified.

    Attributes:
        cwd: Working directory of the spawned commands.
    """

    def __init__(self, cwd: Union[str, Path]) -> None:
        self.cwd = Path(cwd)

    def run(self, command: Sequence[str]) -> None:
        """Run one command to completion.

        Raises:
            CommandError: The command could not be started or exited non-zero.
        """
        PrettyOutput.print(f"Command: {shlex.join(command)}", OutputType.COMMAND)
        executable = shutil.which(command[0]) or command[0]
        argv = [executable, *command[1:]]
        logger.debug("Running %s in %s", argv, self.cwd)
        try:
            completed = subprocess.run(argv, cwd=str(self.cwd), check=False)
        except OSError as e:
            raise CommandError(command, reason=str(e)) from e
        if completed.returncode != 0:
            raise CommandError(command, returncode=completed.returncode)


class UpdateExecutor:
    """Reinstalls a set of dependencies at their latest versions.

    Attributes:
        runner: Executes the package-manager commands.
        package_manager: Name of the package-manager executable.

    Example:
        >>> executor = UpdateExecutor(CommandRunner("/path/to/project"))
        >>> executor.update({"lodash": "^4.0.0"}, SAVE_FLAG)
        True
    """

    def __init__(
        self, runner: CommandRunner, package_manager: Optional[str] = None
    ) -> None:
        self.runner = runner
        self.package_manager = package_manager or get_package_manager()

    def build_commands(
        self, dependencies: Mapping[str, str], flag: str = ""
    ) -> List[List[str]]:
        """Return the uninstall and install commands for ``dependencies``.

        No commands are returned for an empty mapping.
        """
        names = list(dependencies.keys())
        if not names:
            return []
        flags = [flag] if flag else []
        return [
            [self.package_manager, "uninstall", *flags, *names],
            [self.package_manager, "install", *flags, *names],
        ]

    def update(self, dependencies: Optional[Mapping[str, str]], flag: str = "") -> bool:
        """Uninstall then reinstall every package in ``dependencies``.

        Args:
            dependencies: Package name to version specifier; None counts as empty.
            flag: Package-manager flag, ``--save`` or ``--save-dev``.

        Returns:
            False if a command failed (the error has been reported), True otherwise.
        """
        for command in self.build_commands(dependencies or {}, flag):
            try:
                self.runner.run(command)
            except CommandError as e:
                report_error(e)
                return False
        return True


class RestoreExecutor:
    """Puts a backup back in place and reinstalls everything from it.

    Attributes:
        backups: Locates and copies backup files.
        runner: Executes the package-manager commands.
        package_manager: Name of the package-manager executable.
        dependency_dir: Local dependency directory removed before reinstalling.
    """

    def __init__(
        self,
        backups: BackupManager,
        runner: CommandRunner,
        package_manager: Optional[str] = None,
        dependency_dir: Optional[str] = None,
    ) -> None:
        self.backups = backups
        self.runner = runner
        self.package_manager = package_manager or get_package_manager()
        self.dependency_dir = dependency_dir or get_dependency_dir()

    def dependency_path(self) -> Path:
        """Return the dependency directory, which must be a direct child of the project.

        Raises:
            NpmUpdateError: dependency_dir points at the project itself or outside it.
        """
        # normalised without following symlinks, so a linked node_modules is unlinked
        target = Path(os.path.abspath(self.backups.cwd / self.dependency_dir))
        if target.parent != self.backups.cwd:
            raise NpmUpdateError(
                f"Refusing to remove {target}: dependency_dir must name a "
                f"directory inside {self.backups.cwd}"
            )
        return target

    def remove_dependency_dir(self) -> None:
        """Delete the dependency directory recursively; a missing one is fine.

        Raises:
            NpmUpdateError: The directory is outside the project or could not
                be removed.
        """
        target = self.dependency_path()
        PrettyOutput.print(f"Removing {target}", OutputType.INFO)
        if not target.exists() and not target.is_symlink():
            return
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as e:
            raise NpmUpdateError(f"Cannot remove {target}: {e}") from e

    def restore(self, target: Union[bool, Sequence[str], None] = None) -> bool:
        """Restore the manifest from a backup and reinstall all packages.

        Args:
            target: The parsed ``--restore`` value. A list names the backup in
                its first element; anything else selects the latest backup.

        Returns:
            False if any step failed (the error has been reported), True otherwise.
        """
        try:
            if isinstance(target, (list, tuple)) and target:
                source = self.backups.resolve(target[0])
            else:
                source = self.backups.locate_latest()
            self.dependency_path()
            manifest = self.backups.restore_from(source)
            PrettyOutput.print(f"Restored {manifest} from {source}", OutputType.SUCCESS)
            self.remove_dependency_dir()
            self.runner.run([self.package_manager, "install"])
        except NpmUpdateError as e:
            report_error(e)
            return False
        return True
