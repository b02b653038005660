"""
This file contains the exceptions raised by runtime_stager.
"""


class StagerException(Exception):
    """
    Base class for all exceptions raised by runtime_stager.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(StagerException):
    """Raised when stager.toml or a configuration value is invalid."""

    pass


class DownloadError(StagerException):
    """Raised when a single artifact could not be downloaded."""

    pass


class StagingError(StagerException):
    """
    Raised when the embedded runtime cannot be staged.

    Covers a missing or corrupt archive, a missing or ambiguous path
    configuration file, and filesystem failures while staging.
    """

    pass


class PackagingError(StagerException):
    """Raised when the external compressor fails or cannot be launched."""

    pass
