"""
Environment packager.

This package handles:
1. Removing a stale environment archive
2. Running the external 7-Zip compressor over the staging directory
"""

from .environment_packager import EnvironmentPackager
from .process_runner import ProcessRunner

__all__ = ["EnvironmentPackager", "ProcessRunner"]
