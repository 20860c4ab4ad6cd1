"""Entry point for tcping."""

import sys

from tcping.cli import main
from tcping.logging_config import configure_logging


def console_main():
    """Entry point for the installed tcping script."""
    configure_logging()
    sys.exit(main())


if __name__ == "__main__":
    console_main()
