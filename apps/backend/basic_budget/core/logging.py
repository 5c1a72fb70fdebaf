from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure the root logger once for the whole application.

    Args:
        log_level: DEBUG/INFO/WARNING/ERROR. Defaults to ``settings.LOG_LEVEL``.
    """
    level = (log_level or settings.LOG_LEVEL).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # SQL 에코는 DEBUG에서도 너무 시끄러우므로 WARNING으로 고정
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
