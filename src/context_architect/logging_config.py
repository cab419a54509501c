"""Singleton logging configuration.

setup_logging() configures the root logger once per process. All
output goes to stderr so stdout stays reserved for JSON results.
Idempotent (guarded by a module-level flag).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_configured = False


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger on stderr.

    The handler is installed once; every call applies ``level`` to the
    root logger, even when another handler was already in place.
    """
    global _configured  # noqa: PLW0603
    numeric = getattr(logging, level.upper())
    if not _configured:
        _configured = True
        logging.basicConfig(
            level=numeric,
            format=LOG_FORMAT,
            datefmt=LOG_DATEFMT,
            stream=sys.stderr,
        )
    logging.getLogger().setLevel(numeric)
