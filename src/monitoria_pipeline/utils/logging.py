"""Logging for monitoria runs: console/file handlers driven by the ``logging:`` config block."""

import logging
import sys
from pathlib import Path
from typing import Any

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_QUIET = ("openpyxl",)

# Handlers this module attached to the root logger; replaced on every setup call.
_installed: list[logging.Handler] = []


def setup_logging(config: dict[str, Any] | None = None) -> None:
    """(Re)configure logging from the ``logging:`` config block.

    Keys: level, format, file (optional path), quiet (logger names held at
    WARNING, default openpyxl). Each call replaces the handlers installed by
    the previous one, so a later ``-v`` takes effect. Handlers added by
    others (pytest's caplog, for one) are left alone.
    """
    config = config or {}
    level_name = str(config.get("level") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(config.get("format") or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    _installed.append(logging.StreamHandler(sys.stdout))
    log_file = config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _installed.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in _installed:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    quiet = config.get("quiet")
    for name in DEFAULT_QUIET if quiet is None else quiet:
        logging.getLogger(str(name)).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
