"""Logging configuration for the whatdo command line."""

import logging
import sys


def setup_logging(level: int | str = logging.WARNING) -> None:
    """Send whatdo logs to stderr at ``level``.

    Safe to call more than once; the previous handler is replaced.
    """
    logger = logging.getLogger("whatdo")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(handler)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
