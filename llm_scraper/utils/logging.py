from __future__ import annotations

import logging
import os


def configure_logging() -> None:
    """
    Configure logging defaults for the API process.

    Idempotent: uvicorn or a host that already installed handlers keeps its setup.
    """
    root = logging.getLogger()

    if not root.handlers:
        level = os.environ.get("LOG_LEVEL", "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, level, logging.INFO),
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )

    # One log line per outbound call is already emitted by the scraper
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
