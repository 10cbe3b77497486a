"""Round-trip tester: translate A → B → A and score what survived."""
from __future__ import annotations

import logging

from vtrans.config import EngineConfig
from vtrans.engine.orchestrator import TranslationOrchestrator
from vtrans.formats.model import Format
from vtrans.results import RoundTripResult
from vtrans.terms.extractor import extract_key_terms, term_overlap

logger = logging.getLogger(__name__)


def preservation_score(original: str, round_trip: str) -> float:
    """Fraction of *original*'s key terms present in *round_trip*.

    Returns ``1.0`` when *original* has no key terms.
    """
    return term_overlap(original, round_trip, empty_score=1.0)


def term_differences(original: str, round_trip: str) -> list[str]:
    """Describe key terms lost and added by a round trip."""
    original_terms = extract_key_terms(original)
    round_trip_terms = extract_key_terms(round_trip)
    differences: list[str] = []
    lost = sorted(original_terms - round_trip_terms)
    added = sorted(round_trip_terms - original_terms)
    if lost:
        differences.append(f"Lost terms: {', '.join(lost)}")
    if added:
        differences.append(f"Added terms: {', '.join(added)}")
    return differences


class RoundTripTester:
    """Certifies translation quality by translating away and back.

    Parameters
    ----------
    orchestrator:
        The orchestrator used for both legs.
    config:
        Engine configuration supplying the acceptance threshold.
    """

    __test__ = False

    def __init__(
        self,
        orchestrator: TranslationOrchestrator | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._orchestrator = orchestrator or TranslationOrchestrator(config=self._config)

    def test_round_trip(
        self,
        content: str,
        source_format: Format | str,
        target_format: Format | str,
    ) -> RoundTripResult:
        """Translate *content* to *target_format* and back, then compare.

        The two translations run sequentially because the second one
        consumes the first one's output.

        Raises
        ------
        InvalidFormatError
            If either format value is not a known format.
        """
        source = Format.parse(source_format)
        target = Format.parse(target_format)
        logger.info("Testing round-trip translation: %s -> %s -> %s", source, target, source)

        forward = self._orchestrator.translate(content, source, target)
        backward = self._orchestrator.translate(forward.content, target, source)

        score = preservation_score(content, backward.content)
        return RoundTripResult(
            original_content=content,
            intermediate_content=forward.content,
            round_trip_content=backward.content,
            preservation_score=score,
            acceptable=score >= self._config.round_trip_threshold,
            differences=term_differences(content, backward.content),
            forward=forward,
            backward=backward,
        )


__all__ = [
    "preservation_score",
    "term_differences",
    "RoundTripTester",
]
