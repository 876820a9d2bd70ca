"""
Dependency filtering.

Both helpers return new mappings and leave their inputs untouched.
"""

from enum import Enum
from typing import Dict, Iterable, Mapping


class FilterMode(Enum):
    """How a package-name list narrows a dependency mapping."""

    INCLUDE = "include"
    EXCLUDE = "exclude"


def pick(mapping: Mapping[str, str], names: Iterable[str]) -> Dict[str, str]:
    """Keep only the entries named in ``names``; unknown names are ignored.

    Entries keep the order in which ``names`` lists them.
    """
    result: Dict[str, str] = {}
    for name in names:
        if name in mapping:
            result[name] = mapping[name]
    return result


def unpick(mapping: Mapping[str, str], names: Iterable[str]) -> Dict[str, str]:
    """Keep every entry except those named in ``names``."""
    excluded = set(names)
    return {key: value for key, value in mapping.items() if key not in excluded}


def filter_dependencies(
    mapping: Mapping[str, str],
    names: Iterable[str],
    mode: FilterMode = FilterMode.INCLUDE,
) -> Dict[str, str]:
    """Narrow a dependency mapping by an inclusion or exclusion list.

    Args:
        mapping: Package name to version specifier.
        names: Package names to include or exclude.
        mode: FilterMode.INCLUDE or FilterMode.EXCLUDE.

    Returns:
        A new mapping.
    """
    if mode is FilterMode.EXCLUDE:
        return unpick(mapping, names)
    return pick(mapping, names)
