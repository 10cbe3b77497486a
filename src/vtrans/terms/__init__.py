"""Key-term extraction for overlap-based quality metrics."""
from __future__ import annotations

from vtrans.terms.extractor import (
    MIN_TERM_LENGTH,
    STOPWORDS,
    extract_key_terms,
    missing_terms,
    term_overlap,
)

__all__ = [
    "STOPWORDS",
    "MIN_TERM_LENGTH",
    "extract_key_terms",
    "term_overlap",
    "missing_terms",
]
