"""Logging configuration for notethreads.

Uses loguru. Library modules log through ``loguru.logger`` directly;
the CLI installs the single stderr sink.
"""

import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"


def configure_logging(level: str = "INFO", colorize: bool | None = None) -> None:
    """Replace loguru's default handler with one stderr sink at level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=colorize,
    )


def level_for_args(verbose: bool, quiet: bool, configured: str = "INFO") -> str:
    """Pick a log level from CLI flags, falling back to the config."""
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return configured


__all__ = ["configure_logging", "level_for_args", "logger"]
