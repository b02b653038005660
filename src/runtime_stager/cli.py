"""Command line interface for runtime_stager."""

import argparse
import logging
import os
import pathlib
import sys
from typing import List, Optional

from runtime_stager.pipeline import run_fetch, run_stage
from runtime_stager.resource_cache import HttpFetcher
from runtime_stager.stager_config import CONFIG_FILE_NAME, StagerConfig
from runtime_stager.stager_exceptions import StagerException
from runtime_stager.stager_logger import StagerLogger, configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runtime-stager",
        description="Fetch, stage and package the embeddable Python runtime.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("fetch", "Download the configured artifacts into build/resources."),
        ("stage", "Extract the runtime into build/env and package it into build/env.7z."),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument(
            "--root",
            type=pathlib.Path,
            default=None,
            help="Repository root (defaults to the current directory).",
        )
        p.add_argument(
            "-c",
            "--config",
            type=pathlib.Path,
            default=None,
            help=f"Path to the configuration file (defaults to <root>/{CONFIG_FILE_NAME}).",
        )
        p.add_argument(
            "-v",
            "--verbose",
            action="count",
            default=0,
            help="Enable verbose logging.",
        )
        p.add_argument(
            "-q",
            "--quiet",
            action="count",
            default=0,
            help="Reduce logging. Pass twice to show errors only.",
        )

    return parser


def _fetch(config: StagerConfig, root: pathlib.Path, logger: StagerLogger) -> int:
    layout = config.layout_for(root)
    fetcher = HttpFetcher(timeout=config.request_timeout)
    outcomes = run_fetch(layout, config.urls, fetcher=fetcher, logger=logger)
    return 0 if all(o.success for o in outcomes) else 1


def _stage(config: StagerConfig, root: pathlib.Path, logger: StagerLogger) -> int:
    run_stage(config.layout_for(root), logger=logger)
    return 0


_COMMANDS = {
    "fetch": _fetch,
    "stage": _stage,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the runtime-stager CLI.

    Args:
        argv: Optional argv list (excluding program name)

    Returns:
        Exit code
    """
    ns = _build_parser().parse_args(argv)
    logger = configure_logging(verbose=ns.verbose, quiet=ns.quiet)

    root = ns.root if ns.root is not None else pathlib.Path(os.getcwd())
    config_path = ns.config if ns.config is not None else root / CONFIG_FILE_NAME

    try:
        config = StagerConfig.load(config_path)
        return _COMMANDS[ns.command](config, root, logger)
    except StagerException as e:
        logger.log(f"{ns.command} failed: {e.message}", logging.ERROR)
        return 1


if __name__ == "__main__":
    sys.exit(main())
