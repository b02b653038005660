"""
Resource cache.

This package handles:
1. Creating the build and resources directories
2. Downloading artifacts that are not cached yet
3. Reporting a DownloadOutcome per artifact
4. Summarizing the outcomes of a fetch run
"""

from .http_fetcher import HttpFetcher
from .resource_cache import ResourceCache

__all__ = ["HttpFetcher", "ResourceCache"]
