"""
Configuration for runtime_stager.

Provides the immutable DirectoryLayout shared by every component, and the
StagerConfig loaded from ``stager.toml``.
"""

import os
import pathlib
import re
import tomllib
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from runtime_stager.resource_models import file_name_from_url
from runtime_stager.stager_exceptions import ConfigurationError


CONFIG_FILE_NAME = "stager.toml"

DEFAULT_PYTHON_VERSION = "3.12.4"
DEFAULT_EMBED_ZIP_NAME = f"python-{DEFAULT_PYTHON_VERSION}-embed-amd64.zip"
DEFAULT_URLS = [
    f"https://www.python.org/ftp/python/{DEFAULT_PYTHON_VERSION}/{DEFAULT_EMBED_ZIP_NAME}",
    "https://bootstrap.pypa.io/get-pip.py",
]
DEFAULT_COMPRESSOR = "7za"

_EMBED_ZIP_PATTERN = re.compile(r"-embed-[^/]*\.zip$")


class DirectoryLayout(BaseModel):
    """
    Fixed filesystem locations used by one pipeline run.

    Every path is absolute and derived from ``repository_root``. The model is
    frozen; components read it and never modify it.
    """

    model_config = ConfigDict(frozen=True)

    repository_root: pathlib.Path
    build_root: pathlib.Path
    resources_dir: pathlib.Path
    env_dir: pathlib.Path
    embed_zip_path: pathlib.Path
    env_archive_path: pathlib.Path
    compressor_path: str = DEFAULT_COMPRESSOR

    @field_validator(
        "repository_root",
        "build_root",
        "resources_dir",
        "env_dir",
        "embed_zip_path",
        "env_archive_path",
    )
    @classmethod
    def _must_be_absolute(cls, value: pathlib.Path) -> pathlib.Path:
        if not value.is_absolute():
            raise ValueError(f"path must be absolute: {value}")
        return value

    @classmethod
    def from_root(
        cls,
        root: os.PathLike,
        embed_zip_name: str = DEFAULT_EMBED_ZIP_NAME,
        compressor_path: str = DEFAULT_COMPRESSOR,
    ) -> "DirectoryLayout":
        """
        Derive the full layout from a repository root.

        Args:
            root: Repository root; made absolute if relative
            embed_zip_name: File name of the embeddable runtime zip in resources
            compressor_path: Name or path of the 7-Zip executable

        Returns:
            DirectoryLayout instance
        """
        repository_root = pathlib.Path(os.path.abspath(root))
        build_root = repository_root / "build"
        resources_dir = build_root / "resources"
        return cls(
            repository_root=repository_root,
            build_root=build_root,
            resources_dir=resources_dir,
            env_dir=build_root / "env",
            embed_zip_path=resources_dir / embed_zip_name,
            env_archive_path=build_root / "env.7z",
            compressor_path=compressor_path,
        )


class StagerConfig(BaseModel):
    """Settings loaded from the ``[stager]`` table of ``stager.toml``."""

    model_config = ConfigDict(extra="forbid")

    urls: List[str] = Field(default_factory=lambda: list(DEFAULT_URLS))
    embed_zip_name: Optional[str] = None
    compressor_path: str = DEFAULT_COMPRESSOR
    request_timeout: Optional[float] = None

    @field_validator("request_timeout")
    @classmethod
    def _timeout_positive(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("request_timeout must be positive")
        return value

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "StagerConfig":
        """
        Create a StagerConfig from a dictionary (loaded from TOML).

        Args:
            config_dict: Dictionary loaded from stager.toml

        Returns:
            StagerConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        section = config_dict.get("stager", {})
        if not isinstance(section, dict):
            raise ConfigurationError("'stager' must be a table")

        try:
            return cls(**section)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid stager configuration: {e}") from e

    @classmethod
    def load(cls, path: os.PathLike) -> "StagerConfig":
        """
        Load configuration from a TOML file, falling back to defaults when
        the file does not exist.
        """
        if not os.path.exists(path):
            return cls()

        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Failed to read {path}: {e}") from e

        return cls.from_dict(toml_dict)

    def resolved_embed_zip_name(self) -> str:
        """
        Name of the embeddable runtime zip.

        An explicit ``embed_zip_name`` wins; otherwise the first configured
        URL that looks like an embeddable distribution, else the default.
        """
        if self.embed_zip_name:
            return self.embed_zip_name

        for url in self.urls:
            name = file_name_from_url(url)
            if _EMBED_ZIP_PATTERN.search(name):
                return name

        return DEFAULT_EMBED_ZIP_NAME

    def layout_for(self, root: os.PathLike) -> DirectoryLayout:
        return DirectoryLayout.from_root(
            root,
            embed_zip_name=self.resolved_embed_zip_name(),
            compressor_path=self.compressor_path,
        )
