"""Result value objects returned by the translation engine.

All three types are plain dataclasses created per call.  Scores are
clamped to ``[0, 1]`` on construction so a value reported by an external
service can never leave that range.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from vtrans.formats.metadata import FormatMetadata
from vtrans.formats.model import Format


def clamp_unit(value: float) -> float:
    """Clamp *value* into ``[0.0, 1.0]``; NaN becomes ``0.0``."""
    number = float(value)
    if math.isnan(number):
        return 0.0
    return min(1.0, max(0.0, number))


@dataclass
class TranslationResult:
    """Outcome of translating one piece of validator content.

    Parameters
    ----------
    content:
        The translated text.
    source_format:
        Format the input was in.
    target_format:
        Format *content* is in.
    confidence:
        Expected fidelity of the translation, clamped to ``[0, 1]``.
    warnings:
        Caveats gathered while translating.
    used_language_model:
        True when the language-model adapter produced *content*.
    metadata:
        Per-format facts about *content*.
    """

    content: str
    source_format: Format
    target_format: Format
    confidence: float
    warnings: list[str] = field(default_factory=list)
    used_language_model: bool = False
    metadata: FormatMetadata = field(default_factory=FormatMetadata)

    def __post_init__(self) -> None:
        self.confidence = clamp_unit(self.confidence)

    @property
    def is_identity(self) -> bool:
        """True when source and target formats are the same."""
        return self.source_format is self.target_format

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "source_format": self.source_format.value,
            "target_format": self.target_format.value,
            "confidence": self.confidence,
            "warnings": list(self.warnings),
            "used_language_model": self.used_language_model,
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class SemanticValidation:
    """Verdict on whether a translation preserves the original's meaning.

    Parameters
    ----------
    is_valid:
        Overall verdict.
    equivalence:
        Estimated semantic equivalence, clamped to ``[0, 1]``.
    warnings:
        Detected problems.  On the heuristic path any warning makes the
        translation invalid.
    suggestions:
        Advice for improving the translation.
    used_language_model:
        True when the language model produced the verdict.
    """

    is_valid: bool
    equivalence: float
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    used_language_model: bool = False

    def __post_init__(self) -> None:
        self.equivalence = clamp_unit(self.equivalence)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "equivalence": self.equivalence,
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
            "used_language_model": self.used_language_model,
        }


@dataclass
class RoundTripResult:
    """Outcome of translating A → B → A and comparing the two A texts.

    Parameters
    ----------
    original_content:
        The input text.
    intermediate_content:
        The text in the target format.
    round_trip_content:
        The text translated back into the source format.
    preservation_score:
        Fraction of the original's key terms that survived.
    acceptable:
        True when *preservation_score* meets the round-trip threshold.
    differences:
        Human-readable lists of lost and added key terms.
    forward, backward:
        The two translation results, when available.
    """

    original_content: str
    intermediate_content: str
    round_trip_content: str
    preservation_score: float
    acceptable: bool
    differences: list[str] = field(default_factory=list)
    forward: TranslationResult | None = None
    backward: TranslationResult | None = None

    def __post_init__(self) -> None:
        self.preservation_score = clamp_unit(self.preservation_score)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "original_content": self.original_content,
            "intermediate_content": self.intermediate_content,
            "round_trip_content": self.round_trip_content,
            "preservation_score": self.preservation_score,
            "acceptable": self.acceptable,
            "differences": list(self.differences),
        }
        if self.forward is not None:
            data["forward"] = self.forward.to_dict()
        if self.backward is not None:
            data["backward"] = self.backward.to_dict()
        return data


__all__ = [
    "clamp_unit",
    "TranslationResult",
    "SemanticValidation",
    "RoundTripResult",
]
