"""
runtime_stager stages the embeddable Python runtime for an application build:
it fetches the required artifacts, explodes the runtime zip into a clean
directory with a rewired ._pth file, and packages that directory with 7-Zip.
"""

from runtime_stager.pipeline import StageResult, run_fetch, run_stage
from runtime_stager.stager_config import DirectoryLayout, StagerConfig

__all__ = ["DirectoryLayout", "StagerConfig", "StageResult", "run_fetch", "run_stage"]

__version__ = "0.1.0"
