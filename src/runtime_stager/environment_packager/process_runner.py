"""
Subprocess capability used by the environment packager.
"""

import pathlib
import subprocess
from typing import List


class ProcessRunner:
    """Runs a command to completion with inherited standard streams."""

    def run(self, command: List[str], cwd: pathlib.Path) -> int:
        proc = subprocess.run(command, cwd=cwd, check=False)
        return proc.returncode
