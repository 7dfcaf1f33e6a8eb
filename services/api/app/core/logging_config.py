from __future__ import annotations

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    lvl = (level or settings.log_level or "INFO").upper()
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    if lvl != "DEBUG":
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
