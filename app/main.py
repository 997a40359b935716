"""
Main Entry Module

This module serves as the process entry point: it reads configuration,
sets up logging and hands over to the server bootstrap.

Features:
- Configuration loading
- Logging setup
- Exit status

Dependencies:
- asyncio for the event loop
- Server bootstrap

Author: Snapped Development Team
"""

import asyncio
import sys

from .server import serve
from .shared.config import ConfigurationError, load_settings
from .shared.logger import logger, setup_logging


def main() -> int:
    """
    Run the backend until it stops.

    Returns:
        int: 0 after a clean run, 1 if the server never started
    """
    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(settings.log_level)
    started = asyncio.run(serve(settings))
    return 0 if started else 1


if __name__ == "__main__":
    sys.exit(main())
