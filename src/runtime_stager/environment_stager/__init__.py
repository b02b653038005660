"""
Environment stager.

This package handles:
1. Resetting the staging directory
2. Extracting the embeddable runtime zip into it
3. Locating the runtime's ._pth path configuration file
4. Rewriting that file so the staged runtime resolves its own packages
"""

from .environment_stager import EnvironmentStager
from .path_config import (
    PATH_CONFIG_PATTERN,
    find_path_config,
    match_path_config_name,
    render_path_config,
)

__all__ = [
    "EnvironmentStager",
    "PATH_CONFIG_PATTERN",
    "find_path_config",
    "match_path_config_name",
    "render_path_config",
]
