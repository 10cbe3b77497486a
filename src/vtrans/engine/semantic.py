"""Semantic validator: does a translation mean the same as its original?

The language model rates equivalence when available.  Otherwise, or when
its reply is unusable, a key-term overlap heuristic decides.  On the
heuristic path a translation is valid only when equivalence reaches the
threshold **and** no warning fired.
"""
from __future__ import annotations

import logging

from vtrans.config import EngineConfig
from vtrans.formats.model import Format
from vtrans.llm.adapter import LanguageModelAdapter
from vtrans.llm.providers import LanguageModel
from vtrans.results import SemanticValidation
from vtrans.terms.extractor import missing_terms, term_overlap

logger = logging.getLogger(__name__)

NEUTRAL_EQUIVALENCE = 0.5

LENGTH_WARNING = "Translation length significantly differs from original."
REVIEW_SUGGESTION = "Review translation to ensure all requirements are captured."
SCENARIO_SUGGESTION = "Behavioral scenario format should include Given/When/Then structure."


class SemanticValidator:
    """Rates whether two differently formatted texts are equivalent.

    Parameters
    ----------
    model:
        Optional language-model back-end.
    config:
        Engine configuration supplying thresholds.
    """

    def __init__(
        self, model: LanguageModel | None = None, config: EngineConfig | None = None
    ) -> None:
        self._config = config or EngineConfig()
        self._adapter = LanguageModelAdapter(model, self._config) if model is not None else None

    def validate_translation(
        self,
        original: str,
        translated: str,
        source_format: Format | str,
        target_format: Format | str,
    ) -> SemanticValidation:
        """Validate that *translated* preserves the meaning of *original*.

        Raises
        ------
        InvalidFormatError
            If either format value is not a known format.
        """
        source = Format.parse(source_format)
        target = Format.parse(target_format)
        logger.info("Validating translation from %s to %s", source, target)

        if self._adapter is not None:
            try:
                return self._adapter.rate_equivalence(original, translated, source, target)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Language model validation failed, using heuristic validation: %s", exc
                )

        return self.validate_heuristically(original, translated, target)

    def validate_heuristically(
        self, original: str, translated: str, target: Format
    ) -> SemanticValidation:
        """Key-term overlap validation; never raises."""
        warnings: list[str] = []
        suggestions: list[str] = []

        if not self._length_ratio_ok(original, translated):
            warnings.append(LENGTH_WARNING)

        lost = missing_terms(original, translated)
        if lost:
            warnings.append(f"Some key terms may not be preserved: {', '.join(lost)}")
            suggestions.append(REVIEW_SUGGESTION)

        if target is Format.BEHAVIORAL_SCENARIO and "Given" not in translated:
            suggestions.append(SCENARIO_SUGGESTION)

        equivalence = term_overlap(original, translated, empty_score=NEUTRAL_EQUIVALENCE)
        is_valid = equivalence >= self._config.semantic_threshold and not warnings
        logger.debug(
            "Heuristic equivalence %.2f with %d warning(s)", equivalence, len(warnings)
        )
        return SemanticValidation(
            is_valid=is_valid,
            equivalence=equivalence,
            warnings=warnings,
            suggestions=suggestions,
            used_language_model=False,
        )

    def _length_ratio_ok(self, original: str, translated: str) -> bool:
        if not original:
            return not translated
        ratio = len(translated) / len(original)
        return self._config.min_length_ratio <= ratio <= self._config.max_length_ratio


__all__ = [
    "NEUTRAL_EQUIVALENCE",
    "LENGTH_WARNING",
    "REVIEW_SUGGESTION",
    "SCENARIO_SUGGESTION",
    "SemanticValidator",
]
