"""
Pydantic data models for the artifacts fetched into the resources directory.

This module describes a remote artifact, the outcome of one attempt to
acquire it, and the summary reported at the end of a fetch run.
"""

import pathlib
import posixpath
from typing import List, Optional
from urllib.parse import unquote, urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator


def file_name_from_url(url: str) -> str:
    """
    Derive the local file name of an artifact from its URL.

    The name is the final segment of the URL path; query string and fragment
    are ignored.

    Args:
        url: The artifact URL

    Returns:
        The final path segment, or an empty string if the path has none
    """
    path = urlsplit(url).path
    return unquote(posixpath.basename(path))


class RemoteArtifact(BaseModel):
    """
    A downloadable artifact, identified by its source URL.

    Its local identity is the final path segment of the URL.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="HTTP(S) URL to download from")

    @field_validator("url")
    @classmethod
    def _url_has_file_name(cls, value: str) -> str:
        if not file_name_from_url(value):
            raise ValueError(f"URL has no file name in its path: {value}")
        return value

    @property
    def file_name(self) -> str:
        return file_name_from_url(self.url)

    def destination_in(self, directory: pathlib.Path) -> pathlib.Path:
        """Path this artifact occupies inside ``directory``."""
        return pathlib.Path(directory) / self.file_name


class DownloadOutcome(BaseModel):
    """
    Result of one acquisition attempt.

    ``cached`` is True when the file was already present and no transfer
    happened.
    """

    url: str
    destination_path: pathlib.Path
    success: bool
    cached: bool = False
    error: Optional[str] = None

    def __repr__(self) -> str:
        status = "cached" if self.cached else ("ok" if self.success else "failed")
        return f"DownloadOutcome(url={self.url}, status={status})"


class DownloadSummary(BaseModel):
    """Counts of downloaded, cached and failed artifacts for one fetch run."""

    completed: int = 0
    cached: int = 0
    failed: int = 0
    total: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: List[DownloadOutcome]) -> "DownloadSummary":
        cached = sum(1 for o in outcomes if o.success and o.cached)
        completed = sum(1 for o in outcomes if o.success and not o.cached)
        failed = sum(1 for o in outcomes if not o.success)
        return cls(
            completed=completed,
            cached=cached,
            failed=failed,
            total=len(outcomes),
        )

    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0
