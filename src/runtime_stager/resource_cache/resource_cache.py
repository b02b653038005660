"""
Resource cache implementation.

Makes sure every configured artifact has a file under the resources
directory, downloading only what is missing.
"""

import logging
import os
import pathlib
from typing import Iterable, List, Optional

from runtime_stager.resource_cache.http_fetcher import HttpFetcher
from runtime_stager.resource_models import (
    DownloadOutcome,
    DownloadSummary,
    RemoteArtifact,
)
from runtime_stager.stager_config import DirectoryLayout
from runtime_stager.stager_exceptions import DownloadError
from runtime_stager.stager_logger import StagerLogger


PARTIAL_SUFFIX = ".part"


class ResourceCache:
    """
    Downloads artifacts into the resources directory.

    A file that already exists is a cache hit and is never downloaded again.
    Failures are recorded per artifact and do not stop the remaining ones.
    """

    def __init__(
        self,
        layout: DirectoryLayout,
        logger: StagerLogger,
        fetcher: Optional[HttpFetcher] = None,
    ):
        """
        Initialize the resource cache.

        Args:
            layout: Directory layout of the current run
            logger: Logger for progress and error messages
            fetcher: HTTP fetch capability; a default HttpFetcher if omitted
        """
        self.layout = layout
        self.logger = logger
        self.fetcher = fetcher or HttpFetcher()

    def ensure_directories(self) -> None:
        """
        Create the build root and resources directory if they are missing.

        Raises:
            DownloadError: If either directory cannot be created
        """
        for directory in (self.layout.build_root, self.layout.resources_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DownloadError(f"Could not create {directory}: {e}") from e

    def acquire(self, url: str) -> DownloadOutcome:
        """
        Make sure a single artifact is present locally.

        Args:
            url: The artifact URL

        Returns:
            DownloadOutcome describing the attempt
        """
        try:
            artifact = RemoteArtifact(url=url)
        except ValueError as e:
            error_msg = f"Invalid artifact URL {url}: {e}"
            self.logger.log(error_msg, logging.ERROR)
            return DownloadOutcome(
                url=url,
                destination_path=self.layout.resources_dir,
                success=False,
                error=error_msg,
            )

        destination = artifact.destination_in(self.layout.resources_dir)

        if destination.exists():
            self.logger.log(f"{artifact.file_name} already cached", logging.INFO)
            return DownloadOutcome(
                url=url, destination_path=destination, success=True, cached=True
            )

        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        try:
            self.logger.log(f"Downloading {url}", logging.INFO)
            written = self.fetcher.stream_to(url, partial)
            os.replace(partial, destination)
        except (DownloadError, OSError) as e:
            self._discard_partial(partial)
            error_msg = f"Failed to download {artifact.file_name}: {e}"
            self.logger.log(error_msg, logging.ERROR)
            return DownloadOutcome(
                url=url, destination_path=destination, success=False, error=error_msg
            )

        self.logger.log(
            f"Downloaded {artifact.file_name} ({written} bytes) to {destination}",
            logging.INFO,
        )
        return DownloadOutcome(url=url, destination_path=destination, success=True)

    def acquire_all(self, urls: Iterable[str]) -> List[DownloadOutcome]:
        """
        Acquire every artifact in order.

        Returns:
            One DownloadOutcome per URL, failed ones included
        """
        self.ensure_directories()
        return [self.acquire(url) for url in urls]

    def _discard_partial(self, partial: pathlib.Path) -> None:
        try:
            partial.unlink(missing_ok=True)
        except OSError as e:
            self.logger.log(
                f"Could not remove partial download {partial}: {e}",
                logging.WARNING,
            )

    @staticmethod
    def summarize(outcomes: List[DownloadOutcome]) -> DownloadSummary:
        return DownloadSummary.from_outcomes(outcomes)
