"""
Environment packager implementation.
"""

import logging
import os
import pathlib
from typing import List, Optional

from runtime_stager.environment_packager.process_runner import ProcessRunner
from runtime_stager.stager_config import DirectoryLayout
from runtime_stager.stager_exceptions import PackagingError
from runtime_stager.stager_logger import StagerLogger


class EnvironmentPackager:
    """
    Compresses the staging directory into ``layout.env_archive_path``.

    Compression is delegated to the external 7-Zip executable named in the
    layout.
    """

    def __init__(
        self,
        layout: DirectoryLayout,
        logger: StagerLogger,
        runner: Optional[ProcessRunner] = None,
    ):
        self.layout = layout
        self.logger = logger
        self.runner = runner or ProcessRunner()

    def package(self) -> pathlib.Path:
        """
        Replace the environment archive with one built from the staging directory.

        Returns:
            Path of the new archive

        Raises:
            PackagingError: If the stale archive cannot be removed or the
                compressor fails
        """
        target = self.layout.env_archive_path
        self.remove_stale_archive(target)
        self.compress(self.layout.env_dir, target)
        return target

    def remove_stale_archive(self, path: pathlib.Path) -> None:
        if not os.path.lexists(path):
            return

        self.logger.log(f"Removing stale archive {path}", logging.INFO)
        try:
            os.remove(path)
        except OSError as e:
            raise PackagingError(f"Could not remove stale archive {path}: {e}") from e

    def build_command(self, source_dir: pathlib.Path, target_path: pathlib.Path) -> List[str]:
        # 7-Zip expands the wildcard itself, so no shell is involved
        return [
            self.layout.compressor_path,
            "a",
            str(target_path),
            os.path.join(str(source_dir), "*"),
        ]

    def compress(self, source_dir: pathlib.Path, target_path: pathlib.Path) -> None:
        """
        Add every entry under ``source_dir`` to ``target_path``.

        Runs from the build root with inherited standard streams.

        Raises:
            PackagingError: If the compressor cannot be launched or exits non-zero
        """
        command = self.build_command(source_dir, target_path)
        self.logger.log(f"Compressing {source_dir} into {target_path}", logging.INFO)
        self.logger.log(f"Running: {' '.join(command)}", logging.DEBUG)

        try:
            returncode = self.runner.run(command, cwd=self.layout.build_root)
        except OSError as e:
            raise PackagingError(
                f"Could not launch compressor {self.layout.compressor_path}: {e}"
            ) from e

        if returncode != 0:
            raise PackagingError(
                f"Compressor failed (exit={returncode}): {' '.join(command)}"
            )
