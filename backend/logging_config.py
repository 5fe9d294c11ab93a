"""Console logging setup for processes that host the evaluation engine."""

import logging
import sys

from config import settings


def setup_logging(log_level: str | None = None) -> None:
    """Configure the root logger with a single human-readable console handler."""
    level_name = (log_level or settings.log_level).upper()

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    # google-genai and its transport log every request at INFO
    logging.getLogger("google_genai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
