"""
Command-line token parsing.

Tokens are scanned left to right. A token containing ``--`` starts a new
option (the first ``--`` is stripped from its name) and the following plain
tokens become that option's values. An option without values resolves to
``True``. Tokens before the first option are discarded and option names are
not validated here. A bare ``--`` names no option and is dropped
together with its values.

Example:
    >>> parse_arguments(["--deps", "--packages", "lodash", "react"])
    {'deps': True, 'packages': ['lodash', 'react']}
"""

from typing import Dict, List, Optional, Sequence, Union

OPTION_MARKER = "--"

OptionValue = Union[bool, List[str]]
ParsedArguments = Dict[str, OptionValue]


def is_option(token: str) -> bool:
    return OPTION_MARKER in token


def parse_arguments(tokens: Sequence[str]) -> ParsedArguments:
    """Parse raw command-line tokens into an option mapping.

    Args:
        tokens: The tokens following the program name.

    Returns:
        Mapping of option name to ``True`` or a non-empty list of values.
    """
    result: ParsedArguments = {}
    key: Optional[str] = None
    values: List[str] = []

    for token in tokens:
        if is_option(token):
            if key:
                result[key] = values or True
            key = token.replace(OPTION_MARKER, "", 1)
            values = []
        else:
            values.append(token)

    if key:
        result[key] = values or True

    return result


def get_list(args: ParsedArguments, name: str) -> Optional[List[str]]:
    """Return the value list of an option, or None if it was absent or a bare flag."""
    value = args.get(name)
    if isinstance(value, list):
        return value
    return None
