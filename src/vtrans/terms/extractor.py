"""Key-term extraction used by every quality metric.

A key term is a lower-cased alphanumeric word longer than three
characters that is not a stopword.  Step keywords (given/when/then) are
stopwords so that format scaffolding does not count as meaning.
"""
from __future__ import annotations

import re

_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")

MIN_TERM_LENGTH = 4

STOPWORDS: frozenset[str] = frozenset(
    {
        "that",
        "this",
        "with",
        "from",
        "have",
        "been",
        "will",
        "would",
        "could",
        "should",
        "when",
        "then",
        "given",
        "must",
        "shall",
        "does",
        "done",
    }
)


def extract_key_terms(text: str) -> frozenset[str]:
    """Return the key-term set of *text*.

    Examples
    --------
    ::

        extract_key_terms("Given a user with role admin")
        # frozenset({'user', 'role', 'admin'})
    """
    words = _NON_WORD_RE.sub(" ", text.lower()).split()
    return frozenset(
        word for word in words if len(word) >= MIN_TERM_LENGTH and word not in STOPWORDS
    )


def term_overlap(reference: str, candidate: str, empty_score: float) -> float:
    """Fraction of *reference*'s key terms that also occur in *candidate*.

    Parameters
    ----------
    reference:
        Text whose terms form the denominator.
    candidate:
        Text checked for those terms.
    empty_score:
        Returned when *reference* has no key terms.
    """
    reference_terms = extract_key_terms(reference)
    if not reference_terms:
        return empty_score
    shared = reference_terms & extract_key_terms(candidate)
    return len(shared) / len(reference_terms)


def missing_terms(reference: str, candidate: str) -> list[str]:
    """Sorted key terms of *reference* that *candidate* lacks."""
    return sorted(extract_key_terms(reference) - extract_key_terms(candidate))


__all__ = [
    "STOPWORDS",
    "MIN_TERM_LENGTH",
    "extract_key_terms",
    "term_overlap",
    "missing_terms",
]
