"""Pipeline utilities: logging, label normalization."""

from .logging import setup_logging, get_logger
from .text import normalize_label, fold_text

__all__ = [
    "setup_logging",
    "get_logger",
    "normalize_label",
    "fold_text",
]
