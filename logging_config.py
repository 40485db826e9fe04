# logging_config.py
"""Process-wide logging setup for the rental backend."""
import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "rental-backend"


def configure_logging(level: Optional[str] = None) -> None:
     """
     Install a single stream handler on the root logger.

     Safe to call more than once; the handler is only added the first time.
     The level defaults to LOG_LEVEL from the environment, then INFO.
     """
     level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
     root = logging.getLogger()
     root.setLevel(level)

     if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
          return

     handler = logging.StreamHandler()
     handler.set_name(_HANDLER_NAME)
     handler.setFormatter(logging.Formatter(LOG_FORMAT))
     root.addHandler(handler)

