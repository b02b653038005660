"""
Environment stager implementation.

Explodes the embeddable runtime zip into a clean staging directory and
rewires its ._pth file.
"""

import logging
import os
import pathlib
import shutil
import zipfile
from typing import Tuple

from runtime_stager.environment_stager.path_config import (
    find_path_config,
    render_path_config,
)
from runtime_stager.stager_config import DirectoryLayout
from runtime_stager.stager_exceptions import StagingError
from runtime_stager.stager_logger import StagerLogger


class EnvironmentStager:
    """
    Builds the staged environment under ``layout.env_dir``.

    Reset, extraction and the ._pth rewrite always run in that order. Any
    failure raises StagingError; there is no partially staged result.
    """

    def __init__(self, layout: DirectoryLayout, logger: StagerLogger):
        self.layout = layout
        self.logger = logger

    def stage(self) -> Tuple[pathlib.Path, str]:
        """
        Stage the embeddable runtime.

        Returns:
            Tuple of (rewritten ._pth path, version token)

        Raises:
            StagingError: If any step fails
        """
        self.reset_staging_directory()
        self.extract_artifact(self.layout.embed_zip_path)
        path, version = self.locate_path_config()
        self.rewrite_path_config(version, path)
        return path, version

    def reset_staging_directory(self) -> None:
        """Delete the staging directory if it exists and recreate it empty."""
        env_dir = self.layout.env_dir
        try:
            if env_dir.exists():
                self.logger.log(f"Removing previous environment at {env_dir}", logging.DEBUG)
                shutil.rmtree(env_dir)
            env_dir.mkdir(parents=True)
        except OSError as e:
            raise StagingError(f"Could not reset staging directory {env_dir}: {e}") from e

    def extract_artifact(self, zip_path: pathlib.Path) -> None:
        """
        Extract every entry of ``zip_path`` into the staging directory.

        Raises:
            StagingError: If the archive is missing, unreadable or corrupt
        """
        zip_path = pathlib.Path(zip_path)
        if not zip_path.is_file():
            raise StagingError(
                f"Embeddable runtime archive not found: {zip_path} (run the fetch step first)"
            )

        self.logger.log(f"Extracting {zip_path.name} to {self.layout.env_dir}", logging.INFO)
        try:
            with zipfile.ZipFile(zip_path) as zf:
                bad_member = zf.testzip()
                if bad_member is not None:
                    raise StagingError(f"Corrupt entry {bad_member} in {zip_path}")
                zf.extractall(self.layout.env_dir)
        except zipfile.BadZipFile as e:
            raise StagingError(f"Could not read archive {zip_path}: {e}") from e
        except (OSError, NotImplementedError, RuntimeError) as e:
            # unsupported compression methods and encrypted members
            raise StagingError(f"Could not extract {zip_path}: {e}") from e

    def locate_path_config(self) -> Tuple[pathlib.Path, str]:
        """
        Find the python<version>._pth file among the top-level entries.

        Returns:
            Tuple of (file path, version token)

        Raises:
            StagingError: If there is no match or more than one
        """
        env_dir = self.layout.env_dir
        try:
            names = os.listdir(env_dir)
        except OSError as e:
            raise StagingError(f"Could not list staging directory {env_dir}: {e}") from e

        name, version = find_path_config(names)
        self.logger.log(f"Found {name} (version {version})", logging.INFO)
        return env_dir / name, version

    def rewrite_path_config(self, version: str, path: pathlib.Path) -> None:
        """Replace the whole content of the ._pth file."""
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(render_path_config(version))
        except OSError as e:
            raise StagingError(f"Could not rewrite {path}: {e}") from e

        self.logger.log(f"Rewrote {path.name}", logging.INFO)
