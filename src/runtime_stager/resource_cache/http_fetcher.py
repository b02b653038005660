"""
HTTP fetch capability used by the resource cache.
"""

import pathlib
from typing import Optional

import requests

from runtime_stager.stager_exceptions import DownloadError


CHUNK_SIZE = 1024 * 1024


class HttpFetcher:
    """
    Streams the body of an HTTP(S) response into a file.

    The payload is written chunk by chunk and never held in memory as a whole.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        chunk_size: int = CHUNK_SIZE,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.chunk_size = chunk_size

    def stream_to(self, url: str, destination: pathlib.Path) -> int:
        """
        Download ``url`` into ``destination``.

        Args:
            url: URL to download from
            destination: File to write; created or truncated

        Returns:
            Number of bytes written

        Raises:
            DownloadError: On a network error or a non-success status
        """
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                if not 200 <= response.status_code < 300:
                    raise DownloadError(
                        f"HTTP {response.status_code} {response.reason} for {url}"
                    )

                written = 0
                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            f.write(chunk)
                            written += len(chunk)
                return written
        except requests.RequestException as e:
            raise DownloadError(f"Request for {url} failed: {e}") from e
