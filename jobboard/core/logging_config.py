"""
Logging setup - one stream handler on the root logger.

Modules log through `logging.getLogger(__name__)`; call setup_logging()
once before the app starts serving.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(log_level.upper())

    # Avoid stacking handlers when the app module is re-imported (reload, tests)
    for handler in root.handlers:
        if getattr(handler, "_jobboard", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._jobboard = True
    root.addHandler(handler)

    # pymongo is chatty at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)
