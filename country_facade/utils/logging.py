"""
Logging setup for command-line entry points.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
process decides handlers and level once through ``configure_logging``.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler with a timestamped format."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
