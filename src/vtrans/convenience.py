"""Convenience API for vtrans — one object for the whole engine.

The top-level ``vtrans`` module exposes ``translate``,
``validate_translation`` and ``test_round_trip`` as module-level
functions running on a heuristics-only engine.  This module provides
:class:`TranslationEngine`, which wires an optional language model and a
configuration into all three components at once.

Example
-------
::

    from vtrans import TranslationEngine

    engine = TranslationEngine()
    result = engine.to_natural_language(scenario_text, "gherkin")
    check = engine.validate_translation(scenario_text, result.content, "gherkin", "natural_language")
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from vtrans.config import EngineConfig
from vtrans.engine.orchestrator import TranslationOrchestrator
from vtrans.engine.roundtrip import RoundTripTester
from vtrans.engine.semantic import SemanticValidator
from vtrans.heuristics.registry import HeuristicTranslator

if TYPE_CHECKING:
    from vtrans.formats.model import Format
    from vtrans.llm.providers import LanguageModel
    from vtrans.results import RoundTripResult, SemanticValidation, TranslationResult


class TranslationEngine:
    """Zero-config facade over the orchestrator, validator and tester.

    Parameters
    ----------
    model:
        Optional language-model back-end shared by all components.
    config:
        Engine configuration.  Defaults to :class:`EngineConfig`.
    heuristics:
        Heuristic fallback translator.  Defaults to the built-in rules.
    """

    __test__ = False

    def __init__(
        self,
        model: "LanguageModel | None" = None,
        config: EngineConfig | None = None,
        heuristics: HeuristicTranslator | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._orchestrator = TranslationOrchestrator(model, self._config, heuristics)
        self._validator = SemanticValidator(model, self._config)
        self._tester = RoundTripTester(self._orchestrator, self._config)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def orchestrator(self) -> TranslationOrchestrator:
        return self._orchestrator

    @property
    def has_language_model(self) -> bool:
        """True when translations try the language model first."""
        return self._orchestrator.adapter is not None

    def translate(
        self, content: str, source_format: "Format | str", target_format: "Format | str"
    ) -> "TranslationResult":
        return self._orchestrator.translate(content, source_format, target_format)

    def to_behavioral_scenario(self, content: str, source_format: "Format | str") -> "TranslationResult":
        return self._orchestrator.to_behavioral_scenario(content, source_format)

    def to_natural_language(self, content: str, source_format: "Format | str") -> "TranslationResult":
        return self._orchestrator.to_natural_language(content, source_format)

    def to_executable_code(self, content: str, source_format: "Format | str") -> "TranslationResult":
        return self._orchestrator.to_executable_code(content, source_format)

    def to_structured_data(self, content: str, source_format: "Format | str") -> "TranslationResult":
        return self._orchestrator.to_structured_data(content, source_format)

    def validate_translation(
        self,
        original: str,
        translated: str,
        source_format: "Format | str",
        target_format: "Format | str",
    ) -> "SemanticValidation":
        return self._validator.validate_translation(
            original, translated, source_format, target_format
        )

    def test_round_trip(
        self, content: str, source_format: "Format | str", target_format: "Format | str"
    ) -> "RoundTripResult":
        return self._tester.test_round_trip(content, source_format, target_format)


__all__ = ["TranslationEngine"]
