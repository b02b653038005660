"""
Logger used throughout runtime_stager.
"""

import logging
import sys


LOGGER_NAME = "runtime_stager"


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


class StagerLogger:
    """
    Thin wrapper over the ``runtime_stager`` logger.

    Components receive an instance and call ``log(message, level)``.
    """

    def __init__(self, name: str = LOGGER_NAME) -> None:
        self.logger = logging.getLogger(name)

    def log(self, message: str, level: int) -> None:
        self.logger.log(level, message)


def configure_logging(verbose: int = 0, quiet: int = 0) -> StagerLogger:
    """
    Configure the ``runtime_stager`` logger for command line use.

    Progress (below WARNING) goes to stdout, warnings and errors to stderr.

    Args:
        verbose: Verbosity count; one or more enables DEBUG
        quiet: Quietness count; one hides INFO, two hides WARNING

    Returns:
        A StagerLogger bound to the configured logger
    """
    level = logging.INFO
    if quiet >= 2:
        level = logging.ERROR
    elif quiet >= 1:
        level = logging.WARNING
    elif verbose >= 1:
        level = logging.DEBUG

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter("%(message)s")

    out_handler = logging.StreamHandler(stream=sys.stdout)
    out_handler.setLevel(level)
    out_handler.addFilter(_MaxLevelFilter(logging.WARNING))
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(stream=sys.stderr)
    err_handler.setLevel(max(level, logging.WARNING))
    err_handler.setFormatter(formatter)

    logger.addHandler(out_handler)
    logger.addHandler(err_handler)
    return StagerLogger()
