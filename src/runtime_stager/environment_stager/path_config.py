"""
Naming and content rules for the embedded runtime's ._pth file.
"""

import re
from typing import Iterable, List, Optional, Tuple

from runtime_stager.stager_exceptions import StagingError


PATH_CONFIG_PATTERN = re.compile(r"^python(\d+)\._pth$")


def match_path_config_name(name: str) -> Optional[str]:
    """
    Return the version token if ``name`` is a path configuration file name.

    >>> match_path_config_name("python312._pth")
    '312'
    >>> match_path_config_name("python.exe") is None
    True
    """
    match = PATH_CONFIG_PATTERN.match(name)
    if match is None:
        return None
    return match.group(1)


def find_path_config(names: Iterable[str]) -> Tuple[str, str]:
    """
    Pick the single path configuration file out of a directory listing.

    Args:
        names: Top-level entry names of the staging directory

    Returns:
        Tuple of (file name, version token)

    Raises:
        StagingError: If no name matches, or more than one does
    """
    matches: List[Tuple[str, str]] = []
    for name in names:
        version = match_path_config_name(name)
        if version is not None:
            matches.append((name, version))

    if not matches:
        raise StagingError(
            "No python<version>._pth file found in the extracted runtime; "
            "the archive is not an embeddable Python distribution"
        )
    if len(matches) > 1:
        found = ", ".join(sorted(name for name, _ in matches))
        raise StagingError(f"Found more than one ._pth file in the extracted runtime: {found}")

    return matches[0]


def render_path_config(version: str) -> str:
    """
    Content of the rewritten ._pth file for a runtime version token.

    The stdlib zip comes first, then the staging root itself so packages
    installed next to the interpreter are importable, then ``import site``.
    """
    lines = [
        f"python{version}.zip",
        ".",
        "",
        "# Uncomment to run site.main() automatically",
        "import site",
    ]
    return "\n".join(lines) + "\n"
