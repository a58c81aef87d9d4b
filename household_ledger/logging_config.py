"""
Logging setup.

Services log through module-level loggers
(logging.getLogger(__name__)); this module only decides
where the records go and at which level.
"""

import logging

from household_ledger.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Attach a stream handler to the package logger once."""
    level = level or get_settings().LOG_LEVEL
    package_logger = logging.getLogger("household_ledger")
    package_logger.setLevel(level)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
