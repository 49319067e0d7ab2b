"""
Logging setup for the API process.

Log records go to stderr and, when ``LOG_FILE`` is set, to that file
as well.  Once the root logger has handlers, calling
``setup_logging`` again (tests, repeated ``create_app``) keeps the
first configuration.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger at ``level`` (case insensitive)."""
    if logging.getLogger().handlers:
        return
    handlers: list = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
