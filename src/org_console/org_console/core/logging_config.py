"""Central logging setup: console plus a rotating file under LOG_DIR."""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

_configured = False


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """Configure the ``org_console`` logger tree once per process."""
    global _configured
    if _configured:
        return

    root = logging.getLogger("org_console")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path / "org_console.log",
            maxBytes=10_485_760,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``org_console`` namespace."""
    tail = name.rsplit("org_console.", 1)[-1]
    return logging.getLogger(f"org_console.{tail}")
