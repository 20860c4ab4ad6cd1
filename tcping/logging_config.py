"""Logging configuration for tcping."""

import logging
import os
import sys


def configure_logging() -> None:
    """Configure application-wide logging.

    Respects TCPING_LOG_LEVEL environment variable (default: WARNING, so
    diagnostics stay out of the probe output). Logs to stderr with
    timestamp, level, module name, and message.

    Environment Variables:
        TCPING_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                          Default is WARNING.

    Examples:
        # Per-probe diagnostics
        $ TCPING_LOG_LEVEL=DEBUG python -m tcping example.com:443

        # Run start/stop messages
        $ TCPING_LOG_LEVEL=INFO python -m tcping -t example.com:443
    """
    log_level_str = os.environ.get("TCPING_LOG_LEVEL", "WARNING").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    log_level = log_level_map.get(log_level_str, logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured: level=%s", logging.getLevelName(log_level))
