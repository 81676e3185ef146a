"""Label normalization shared by header matching and product classification."""

from __future__ import annotations

import re
import unicodedata
from typing import Any


_WS_RE = re.compile(r"\s+")


def fold_text(value: Any) -> str:
    """Lower-case, trim and collapse whitespace. Accents are kept, composed (NFC)."""
    if value is None:
        return ""
    s = unicodedata.normalize("NFC", str(value)).replace("\n", " ").strip().casefold()
    return _WS_RE.sub(" ", s)


def normalize_label(value: Any) -> str:
    """Like :func:`fold_text`, but also strips accents ("OPERAÇÃO" -> "operacao")."""
    s = fold_text(value)
    if not s:
        return ""
    decomposed = unicodedata.normalize("NFKD", s)
    return "".join(c for c in decomposed if not unicodedata.combining(c))
