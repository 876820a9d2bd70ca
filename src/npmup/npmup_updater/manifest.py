"""
Manifest loading.

The manifest is the project's ``package.json``. The raw bytes are kept next to
the parsed document so that backups are byte-identical to what was on disk.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

from npmup.npmup_updater.errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"
DEPENDENCIES = "dependencies"
DEV_DEPENDENCIES = "devDependencies"


@dataclass
class Manifest:
    """A parsed manifest.

    Attributes:
        path: Location of the manifest file.
        raw: The file content exactly as read.
        data: The parsed JSON document.
    """

    path: Path
    raw: bytes
    data: Dict[str, Any] = field(default_factory=dict)

    def dependency_class(self, name: str) -> Dict[str, str]:
        """Return one dependency mapping; an absent class is an empty mapping."""
        value = self.data.get(name)
        if isinstance(value, dict):
            return value
        return {}

    @property
    def dependencies(self) -> Dict[str, str]:
        return self.dependency_class(DEPENDENCIES)

    @property
    def dev_dependencies(self) -> Dict[str, str]:
        return self.dependency_class(DEV_DEPENDENCIES)


def manifest_path(cwd: Union[str, Path]) -> Path:
    return Path(cwd).resolve() / MANIFEST_NAME


def load_manifest(cwd: Union[str, Path]) -> Manifest:
    """Read and parse ``package.json`` from a project directory.

    Args:
        cwd: The project directory.

    Returns:
        The loaded manifest.

    Raises:
        ManifestError: The file is missing, unreadable or not valid JSON.
    """
    path = manifest_path(cwd)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Cannot parse {path}: top level is not an object")

    logger.debug("Loaded manifest %s (%d bytes)", path, len(raw))
    return Manifest(path=path, raw=raw, data=data)
