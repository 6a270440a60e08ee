import logging
import logging.config
import os
import sys

from .config import load_stock_config
from .filters import canonical_only
from .formatters import ProjectdbJsonFormatter

LOG_CONFIG = os.environ.get("LOG_CONFIG")


def configure():
    """
    Configures logging for ProjectDB.

    A stock configuration is loaded from the ``projectdb/logging/configurations/*.yaml``
    files, chosen based on the value of ``LOG_CONFIG``.

    Python library warnings are captured and logged at the ``WARNING`` level.
    Uncaught exceptions are logged at the ``CRITICAL`` level before they cause
    the process to exit.
    """
    stock_config = load_stock_config(LOG_CONFIG if LOG_CONFIG else "default")
    logging.config.dictConfig(stock_config)

    # Log library API warnings.
    logging.captureWarnings(True)

    # Log any uncaught exceptions which are about to cause process exit.
    sys.excepthook = lambda *args: logging.getLogger().critical("Uncaught exception:", exc_info=args)  # type: ignore

    # Canonical request logs are emitted by a dedicated handler. Its formatter and filter are
    # un-configurable via file config.
    canonical_is_enabled = False
    root_logger = logging.getLogger()

    for handler in root_logger.handlers:
        if handler.get_name() == "canonical":
            handler.addFilter(canonical_only)
            handler.setFormatter(ProjectdbJsonFormatter())

            canonical_is_enabled = True

    if not canonical_is_enabled:
        root_logger.info("Canonical log handler is not enabled. Request logs will only be emitted as plain text.")
