"""Logging configuration for the prismic-kit CLI."""

import re
import sys
from typing import Any

from loguru import logger

# Matches the token in "?access_token=tok" and in the "#tok" suffix of cache keys.
_ACCESS_TOKEN_RE = re.compile(r"(access_token=)([^&#\s'\"]+)(#\2)?")


def redact_access_token(message: str) -> str:
    return _ACCESS_TOKEN_RE.sub(r"\1***", message)


def _make_format(verbose: bool):
    template = (
        "{time:HH:mm:ss.SSS} {level.icon} {name}: {extra[safe_message]}\n{exception}"
        if verbose
        else "{level.icon} {extra[safe_message]}\n{exception}"
    )

    def format_record(record: dict[str, Any]) -> str:
        record["extra"]["safe_message"] = redact_access_token(record["message"])
        return template

    return format_record


def configure_logging(*, verbose: bool = False) -> None:
    """Log to stderr with access tokens masked; verbose adds debug, timing and module."""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format=_make_format(verbose))
