"""
Logging setup for the backend process.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("backend")


def setup_logging(level: str = "INFO"):
    """Configure root logging once for the process."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
