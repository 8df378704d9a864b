"""Logging helpers that avoid heavy dependencies."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "build_constants"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def setup_logger(*, verbose: bool = False, stream=None) -> logging.Logger:
    """
    Configure the package logger used by the generator and its host.

    Messages go to stderr so that commands printing generated text or JSON on
    stdout stay machine-readable.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    stream_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    stream_handler.setFormatter(formatter)

    logger.addHandler(stream_handler)
    logger.propagate = False

    logger.debug("Logging initialized (verbose=%s)", verbose)
    return logger
