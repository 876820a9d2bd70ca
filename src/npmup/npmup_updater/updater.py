"""
NpmUpdater - the update / restore pipeline for one project directory.

Control flow: ``--help`` prints usage; ``--restore`` restores a backup and
reinstalls; anything else backs up the manifest (unless ``--nobackup``),
narrows the dependency classes and reinstalls the requested ones.

When both ``--packages`` and ``--exclude`` are given, the inclusion list is
applied first and the exclusion list then narrows that result.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

from npmup.npmup_updater.arguments import ParsedArguments, get_list, parse_arguments
from npmup.npmup_updater.backup import BackupManager
from npmup.npmup_updater.errors import BackupError
from npmup.npmup_updater.executor import (
    SAVE_DEV_FLAG,
    SAVE_FLAG,
    CommandRunner,
    RestoreExecutor,
    UpdateExecutor,
    report_error,
)
from npmup.npmup_updater.filters import FilterMode, filter_dependencies
from npmup.npmup_updater.manifest import Manifest, load_manifest
from npmup.npmup_utils.output import OutputType, PrettyOutput

logger = logging.getLogger(__name__)

USAGE_ERROR = "You must specify --deps or --devdeps or both"

HELP_LINES = (
    ("--deps", "update dependencies"),
    ("--devdeps", "update devDependencies"),
    ("--nobackup", "do not make a package.json backup"),
    ("--restore <file path>", "restore the package.json and reinstall the packages"),
    ("--packages <packages list>", "just update the packages in the list"),
    ("--exclude <packages list>", "update all packages except the ones in the list"),
    ("--help", "print this help"),
)


def help_text() -> str:
    return "\n".join(f"{flag:<30}{description}" for flag, description in HELP_LINES)


def select_dependencies(
    manifest: Manifest, args: ParsedArguments
) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Narrow both dependency classes by ``--packages`` then ``--exclude``.

    Options given as bare flags (without a list) do not filter anything.
    """
    deps = manifest.dependencies
    dev_deps = manifest.dev_dependencies

    packages = get_list(args, "packages")
    if packages is not None:
        deps = filter_dependencies(deps, packages, FilterMode.INCLUDE)
        dev_deps = filter_dependencies(dev_deps, packages, FilterMode.INCLUDE)

    excluded = get_list(args, "exclude")
    if excluded is not None:
        deps = filter_dependencies(deps, excluded, FilterMode.EXCLUDE)
        dev_deps = filter_dependencies(dev_deps, excluded, FilterMode.EXCLUDE)

    return deps, dev_deps


class NpmUpdater:
    """Runs one npmup invocation against a project directory.

    Attributes:
        cwd: The project directory holding ``package.json``.
        runner: Executes package-manager commands.
        backups: Creates and locates manifest backups.

    Example:
        >>> updater = NpmUpdater("/path/to/project")
        >>> updater.run(["--deps", "--packages", "lodash"])
        True
    """

    def __init__(
        self,
        cwd: Union[str, Path],
        runner: Optional[CommandRunner] = None,
        backups: Optional[BackupManager] = None,
    ) -> None:
        self.cwd = Path(cwd).resolve()
        self.runner = runner or CommandRunner(self.cwd)
        self.backups = backups or BackupManager(self.cwd)

    def run(self, tokens: Sequence[str]) -> bool:
        """Parse ``tokens`` and perform the requested action.

        Args:
            tokens: Command-line tokens following the program name.

        Returns:
            True when every requested step succeeded. Failures have already
            been reported on the diagnostic stream.

        Raises:
            ManifestError: The manifest could not be read or parsed.
        """
        args = parse_arguments(tokens)
        logger.debug("Parsed arguments: %s", args)

        if args.get("help"):
            PrettyOutput.print(help_text(), OutputType.RESULT, timestamp=False)
            return True

        if args.get("restore"):
            return self.restore(args["restore"])

        manifest = load_manifest(self.cwd)

        if not args.get("nobackup"):
            try:
                path = self.backups.backup(manifest.raw)
            except BackupError as e:
                report_error(e)
                return False
            PrettyOutput.print(f"Backup written to {path.name}", OutputType.INFO)

        return self.update(manifest, args)

    def restore(self, target: Union[bool, Sequence[str]]) -> bool:
        executor = RestoreExecutor(self.backups, self.runner)
        return executor.restore(target)

    def update(self, manifest: Manifest, args: ParsedArguments) -> bool:
        """Reinstall the dependency classes requested by ``--deps`` / ``--devdeps``."""
        if not args.get("deps") and not args.get("devdeps"):
            PrettyOutput.print(USAGE_ERROR, OutputType.ERROR)
            return False

        deps, dev_deps = select_dependencies(manifest, args)
        executor = UpdateExecutor(self.runner)

        ok = True
        # each chain stops at its own first failure; the other still runs
        if args.get("deps"):
            ok = executor.update(deps, SAVE_FLAG) and ok
        if args.get("devdeps"):
            ok = executor.update(dev_deps, SAVE_DEV_FLAG) and ok
        return ok
