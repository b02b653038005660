"""
The fetch and stage phases of the runtime staging pipeline.

The two phases are independent; fetch must have produced the embeddable
runtime zip before stage runs.
"""

import logging
import pathlib
from typing import Iterable, List, Optional

from pydantic import BaseModel

from runtime_stager.environment_packager import EnvironmentPackager, ProcessRunner
from runtime_stager.environment_stager import EnvironmentStager
from runtime_stager.resource_cache import HttpFetcher, ResourceCache
from runtime_stager.resource_models import DownloadOutcome
from runtime_stager.stager_config import DirectoryLayout
from runtime_stager.stager_logger import StagerLogger


class StageResult(BaseModel):
    """What the stage phase produced."""

    version: str
    path_config_path: pathlib.Path
    archive_path: pathlib.Path


def run_fetch(
    layout: DirectoryLayout,
    urls: Iterable[str],
    fetcher: Optional[HttpFetcher] = None,
    logger: Optional[StagerLogger] = None,
) -> List[DownloadOutcome]:
    """
    Fetch every artifact into the resources directory.

    Failed downloads are reported in the returned outcomes; they never raise.
    """
    logger = logger or StagerLogger()
    cache = ResourceCache(layout, logger, fetcher)

    outcomes = cache.acquire_all(urls)

    summary = cache.summarize(outcomes)
    logger.log(
        f"Fetch summary: {summary.completed} downloaded, {summary.cached} cached, "
        f"{summary.failed} failed",
        logging.INFO if summary.all_succeeded else logging.ERROR,
    )
    return outcomes


def run_stage(
    layout: DirectoryLayout,
    runner: Optional[ProcessRunner] = None,
    logger: Optional[StagerLogger] = None,
) -> StageResult:
    """
    Stage the embeddable runtime and package it.

    Raises:
        StagingError: If the runtime cannot be staged; nothing is packaged
        PackagingError: If the compressor fails
    """
    logger = logger or StagerLogger()

    path_config_path, version = EnvironmentStager(layout, logger).stage()
    archive_path = EnvironmentPackager(layout, logger, runner).package()

    logger.log(f"Packaged Python {version} environment at {archive_path}", logging.INFO)
    return StageResult(
        version=version,
        path_config_path=path_config_path,
        archive_path=archive_path,
    )
