"""Translation orchestrator.

Tries the language-model adapter first and falls back to the heuristic
converter set.  ``translate`` always returns a populated
:class:`~vtrans.results.TranslationResult`; the only error that escapes
is :class:`~vtrans.errors.InvalidFormatError` for a format value that is
not one of the four formats.

Usage
-----
::

    from vtrans.engine import TranslationOrchestrator

    orchestrator = TranslationOrchestrator()          # heuristics only
    result = orchestrator.translate(text, "gherkin", "natural_language")
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from vtrans.config import EngineConfig
from vtrans.formats.metadata import describe_content
from vtrans.formats.model import Format
from vtrans.heuristics.registry import HeuristicTranslator
from vtrans.llm.adapter import LanguageModelAdapter
from vtrans.llm.providers import LanguageModel
from vtrans.results import TranslationResult

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """Converts validator content between formats.

    Parameters
    ----------
    model:
        Optional language-model back-end.  When ``None`` every
        translation takes the heuristic path.
    config:
        Engine configuration.
    heuristics:
        Heuristic fallback translator.  Defaults to the built-in rules.
    """

    def __init__(
        self,
        model: LanguageModel | None = None,
        config: EngineConfig | None = None,
        heuristics: HeuristicTranslator | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._adapter = LanguageModelAdapter(model, self._config) if model is not None else None
        self._heuristics = heuristics or HeuristicTranslator()

    @property
    def adapter(self) -> LanguageModelAdapter | None:
        return self._adapter

    @property
    def heuristics(self) -> HeuristicTranslator:
        return self._heuristics

    def translate(
        self,
        content: str,
        source_format: Format | str,
        target_format: Format | str,
    ) -> TranslationResult:
        """Translate *content* from *source_format* to *target_format*.

        Raises
        ------
        InvalidFormatError
            If either format value is not a known format.
        """
        source = Format.parse(source_format)
        target = Format.parse(target_format)
        logger.info("Translating from %s to %s", source, target)

        if source is target:
            return TranslationResult(
                content=content,
                source_format=source,
                target_format=target,
                confidence=1.0,
                warnings=[],
                used_language_model=False,
                metadata=describe_content(content, target),
            )

        if self._adapter is not None:
            try:
                return self._adapter.translate(content, source, target)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Language model translation failed, falling back to heuristics: %s", exc
                )

        return self._heuristics.translate(content, source, target)

    def translate_batch(
        self,
        contents: Iterable[str],
        source_format: Format | str,
        target_format: Format | str,
    ) -> list[TranslationResult]:
        """Translate several texts sequentially, preserving order."""
        return [self.translate(content, source_format, target_format) for content in contents]

    def to_behavioral_scenario(
        self, content: str, source_format: Format | str
    ) -> TranslationResult:
        return self.translate(content, source_format, Format.BEHAVIORAL_SCENARIO)

    def to_natural_language(self, content: str, source_format: Format | str) -> TranslationResult:
        return self.translate(content, source_format, Format.NATURAL_LANGUAGE)

    def to_executable_code(self, content: str, source_format: Format | str) -> TranslationResult:
        return self.translate(content, source_format, Format.EXECUTABLE_CODE)

    def to_structured_data(self, content: str, source_format: Format | str) -> TranslationResult:
        return self.translate(content, source_format, Format.STRUCTURED_DATA)


__all__ = ["TranslationOrchestrator"]
