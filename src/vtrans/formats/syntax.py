"""Lightweight target-format sanity checks.

These checks never reject content; they return warning strings that the
language-model adapter appends to its result.
"""
from __future__ import annotations

import json
import re

from vtrans.formats.model import Format

_STEP_KEYWORD_RE = re.compile(r"\b(Given|When|Then)\b")
_ASSERTION_RE = re.compile(r"\bassert\b|pytest\.raises|\.assert\w*\(")


def check_format_syntax(content: str, fmt: Format) -> list[str]:
    """Return sanity-check warnings for *content* rendered as *fmt*.

    Parameters
    ----------
    content:
        Translated text.
    fmt:
        The format *content* is supposed to be in.

    Returns
    -------
    list[str]
        One warning per violated convention; empty when all checks pass.
    """
    warnings: list[str] = []
    if fmt is Format.BEHAVIORAL_SCENARIO:
        if not _STEP_KEYWORD_RE.search(content):
            warnings.append(
                "Behavioral scenario translation may be missing Given/When/Then keywords."
            )
    elif fmt is Format.EXECUTABLE_CODE:
        if not _ASSERTION_RE.search(content):
            warnings.append("Executable code translation may be missing assertions.")
    elif fmt is Format.STRUCTURED_DATA:
        try:
            json.loads(content)
        except (ValueError, RecursionError):
            warnings.append("Structured data translation is not valid JSON.")
    return warnings


__all__ = ["check_format_syntax"]
