from __future__ import annotations

import logging
import logging.config
import os

from taskboard.config import settings

LOGGING_CONF = "logging.conf"


def configure_logging() -> None:
  """Use ``logging.conf`` from the working directory when present."""
  if os.path.exists(LOGGING_CONF):
    logging.config.fileConfig(LOGGING_CONF, disable_existing_loggers=False)
    return
  logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
  )
