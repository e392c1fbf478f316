"""
Logging configuration for the application.

``setup_logging`` attaches a console handler and, optionally, an
append-mode file handler (deployments typically point ``LOG_FILE`` at
``app.log``) to the root logger.  Modules log through
``logging.getLogger(__name__)``: rejected input and missing songs at
WARNING, completed operations at INFO, store and enrichment failures
at ERROR.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that report every request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once per process.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        File to append log records to, resolved against the current
        working directory.  Console only when omitted.
    """
    root = logging.getLogger()
    if root.handlers:
        # Configured already (pytest, uvicorn or an earlier create_app).
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), mode="a", encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
