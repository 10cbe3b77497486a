"""Heuristic converter set.

Rule-based translation between validator formats that needs **no
language model**, suitable for offline and CI use and as the fallback
whenever the language-model path fails.
"""
from __future__ import annotations

from vtrans.heuristics.converters import Conversion, UNSUPPORTED_CONFIDENCE
from vtrans.heuristics.registry import (
    DEFAULT_CONVERTERS,
    HEURISTIC_CAVEAT,
    Converter,
    ConverterRegistry,
    FormatPair,
    HeuristicTranslator,
)

__all__ = [
    "Conversion",
    "Converter",
    "FormatPair",
    "UNSUPPORTED_CONFIDENCE",
    "HEURISTIC_CAVEAT",
    "DEFAULT_CONVERTERS",
    "ConverterRegistry",
    "HeuristicTranslator",
]
