"""Console logging for scripts built on speedrun_client."""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "speedrun_client"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    show_connections: bool = False,
) -> logging.Handler:
    """Send the client's log records to stdout.

    Only the ``speedrun_client`` logger hierarchy is configured, so the
    application's own logging setup is left alone. At DEBUG every request
    URL is printed, and swallowed fetch errors show up at WARNING.

    Args:
        level: Level for the client's loggers and the handler (default: INFO)
        format_string: Custom format string (optional)
        show_connections: Also print urllib3's connection messages

    Returns:
        The handler that was installed, so callers can remove it again

    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.addHandler(handler)

    urllib3_logger = logging.getLogger("urllib3")
    if show_connections:
        urllib3_logger.setLevel(logging.DEBUG)
        urllib3_logger.addHandler(handler)
    else:
        # requests logs every connection through urllib3 at debug level
        urllib3_logger.setLevel(logging.WARNING)

    return handler
