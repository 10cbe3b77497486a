"""Explicit converter mapping and the heuristic translator built on it.

Converters are looked up by the ordered ``(source, target)`` format pair.
Pairs without a registered converter take the documented default route:
bridge through structured data (``source → json → target``).  When no
bridge is viable the content is passed through unchanged with a low
confidence and a "not supported" warning.

Example
-------
::

    from vtrans.formats import Format
    from vtrans.heuristics import HeuristicTranslator

    translator = HeuristicTranslator()
    result = translator.translate(
        "Given a user\\nWhen they log in\\nThen they see the dashboard",
        Format.BEHAVIORAL_SCENARIO,
        Format.NATURAL_LANGUAGE,
    )
    result.confidence
    # 0.8
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping

from vtrans.formats.metadata import describe_content
from vtrans.formats.model import Format
from vtrans.heuristics.converters import (
    UNSUPPORTED_CONFIDENCE,
    Conversion,
    code_to_natural_language,
    code_to_scenario,
    code_to_structured,
    natural_language_to_code,
    natural_language_to_scenario,
    natural_language_to_structured,
    scenario_to_code,
    scenario_to_natural_language,
    scenario_to_structured,
    structured_to_code,
    structured_to_natural_language,
    structured_to_scenario,
)
from vtrans.results import TranslationResult

logger = logging.getLogger(__name__)

Converter = Callable[[str], Conversion]
FormatPair = tuple[Format, Format]

HEURISTIC_CAVEAT = (
    "Using heuristic translation (language model unavailable). Quality may be reduced."
)

DEFAULT_CONVERTERS: dict[FormatPair, Converter] = {
    (Format.BEHAVIORAL_SCENARIO, Format.NATURAL_LANGUAGE): scenario_to_natural_language,
    (Format.NATURAL_LANGUAGE, Format.BEHAVIORAL_SCENARIO): natural_language_to_scenario,
    (Format.BEHAVIORAL_SCENARIO, Format.EXECUTABLE_CODE): scenario_to_code,
    (Format.EXECUTABLE_CODE, Format.BEHAVIORAL_SCENARIO): code_to_scenario,
    (Format.NATURAL_LANGUAGE, Format.EXECUTABLE_CODE): natural_language_to_code,
    (Format.EXECUTABLE_CODE, Format.NATURAL_LANGUAGE): code_to_natural_language,
    (Format.BEHAVIORAL_SCENARIO, Format.STRUCTURED_DATA): scenario_to_structured,
    (Format.NATURAL_LANGUAGE, Format.STRUCTURED_DATA): natural_language_to_structured,
    (Format.EXECUTABLE_CODE, Format.STRUCTURED_DATA): code_to_structured,
    (Format.STRUCTURED_DATA, Format.BEHAVIORAL_SCENARIO): structured_to_scenario,
    (Format.STRUCTURED_DATA, Format.NATURAL_LANGUAGE): structured_to_natural_language,
    (Format.STRUCTURED_DATA, Format.EXECUTABLE_CODE): structured_to_code,
}


class ConverterRegistry:
    """Mapping from ordered format pairs to converter functions.

    Parameters
    ----------
    converters:
        Initial mapping.  When ``None`` the built-in
        :data:`DEFAULT_CONVERTERS` are used.
    """

    def __init__(self, converters: Mapping[FormatPair, Converter] | None = None) -> None:
        self._converters: dict[FormatPair, Converter] = dict(
            DEFAULT_CONVERTERS if converters is None else converters
        )

    def register(self, source: Format, target: Format, converter: Converter) -> None:
        """Register *converter* for ``source → target``, replacing any existing one."""
        if source is target:
            raise ValueError(f"Cannot register a converter from {source} to itself")
        self._converters[(source, target)] = converter
        logger.debug("Registered converter %s -> %s", source, target)

    def unregister(self, source: Format, target: Format) -> None:
        """Remove the converter for ``source → target`` if present."""
        self._converters.pop((source, target), None)

    def get(self, source: Format, target: Format) -> Converter | None:
        """Return the direct converter for the pair, or ``None``."""
        return self._converters.get((source, target))

    def __contains__(self, pair: object) -> bool:
        return pair in self._converters

    def __iter__(self) -> Iterator[FormatPair]:
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)

    def convert(self, content: str, source: Format, target: Format) -> Conversion:
        """Convert *content* from *source* to *target*; never raises.

        Returns
        -------
        Conversion
            The direct rule's output, a bridged conversion, or the
            unsupported-pair passthrough.
        """
        if source is target:
            return Conversion(content, 1.0)
        converter = self.get(source, target)
        if converter is not None:
            logger.debug("Direct heuristic rule for %s -> %s", source, target)
            return self._run(converter, content, source, target)
        return self._bridge(content, source, target)

    def _run(
        self, converter: Converter, content: str, source: Format, target: Format
    ) -> Conversion:
        try:
            return converter(content)
        except Exception:  # noqa: BLE001
            logger.exception("Heuristic converter %s -> %s raised", source, target)
            return _unsupported(content, source, target)

    def _bridge(self, content: str, source: Format, target: Format) -> Conversion:
        hub = Format.STRUCTURED_DATA
        first = self.get(source, hub)
        second = self.get(hub, target)
        if hub in (source, target) or first is None or second is None:
            logger.debug("No heuristic route for %s -> %s", source, target)
            return _unsupported(content, source, target)

        logger.debug("Bridging %s -> %s through %s", source, target, hub)
        to_hub = self._run(first, content, source, hub)
        from_hub = self._run(second, to_hub.content, hub, target)
        return Conversion(
            from_hub.content,
            to_hub.confidence * from_hub.confidence,
            (
                *to_hub.warnings,
                *from_hub.warnings,
                f"Translated from {source} to {target} via structured data.",
            ),
        )


def _unsupported(content: str, source: Format, target: Format) -> Conversion:
    return Conversion(
        content,
        UNSUPPORTED_CONFIDENCE,
        (f"Direct translation from {source} to {target} not supported.",),
    )


class HeuristicTranslator:
    """Deterministic fallback translator.

    Wraps a :class:`ConverterRegistry` and turns its conversions into
    :class:`~vtrans.results.TranslationResult` objects carrying the
    heuristic-quality caveat.  Never raises for any pair of formats.

    Parameters
    ----------
    registry:
        Converter mapping to use.  Defaults to the built-in rules.
    """

    def __init__(self, registry: ConverterRegistry | None = None) -> None:
        self._registry = registry if registry is not None else ConverterRegistry()

    @property
    def registry(self) -> ConverterRegistry:
        return self._registry

    def translate(self, content: str, source: Format, target: Format) -> TranslationResult:
        if source is target:
            return TranslationResult(
                content=content,
                source_format=source,
                target_format=target,
                confidence=1.0,
                metadata=describe_content(content, target),
            )
        conversion = self._registry.convert(content, source, target)
        return TranslationResult(
            content=conversion.content,
            source_format=source,
            target_format=target,
            confidence=conversion.confidence,
            warnings=[HEURISTIC_CAVEAT, *conversion.warnings],
            used_language_model=False,
            metadata=describe_content(conversion.content, target),
        )


__all__ = [
    "Converter",
    "FormatPair",
    "HEURISTIC_CAVEAT",
    "DEFAULT_CONVERTERS",
    "ConverterRegistry",
    "HeuristicTranslator",
]
