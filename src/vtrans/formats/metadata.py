"""Per-format descriptive metadata attached to translation results."""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any

from vtrans.formats.model import Format
from vtrans.formats.record import StructuredRecord, parse_scenario_headers, parse_scenario_steps

_TEST_NAME_RE = re.compile(r"^\s*(?:async\s+)?def\s+(test\w*)\s*\(", re.MULTILINE)
_ASSERT_RE = re.compile(r"^\s*assert\b|pytest\.raises", re.MULTILINE)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class FormatMetadata:
    """Fixed set of optional facts about a piece of validator content.

    Only the fields relevant to the content's format are populated; the
    rest stay ``None``.

    Parameters
    ----------
    feature:
        ``Feature:`` title of a behavioral scenario.
    scenario:
        ``Scenario:`` title of a behavioral scenario.
    test_name:
        Name of the first test function in executable code.
    given_count, when_count, then_count:
        Step counts of a behavioral scenario or structured record.
    sentence_count:
        Number of sentences in natural-language prose.
    assertion_count:
        Number of assertions in executable code.
    """

    feature: str | None = None
    scenario: str | None = None
    test_name: str | None = None
    given_count: int | None = None
    when_count: int | None = None
    then_count: int | None = None
    sentence_count: int | None = None
    assertion_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return only the populated fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}


def describe_content(content: str, fmt: Format) -> FormatMetadata:
    """Derive :class:`FormatMetadata` for *content* in *fmt*.

    Never raises; unparsable structured data yields empty metadata.
    """
    if fmt is Format.BEHAVIORAL_SCENARIO:
        feature, scenario = parse_scenario_headers(content)
        record = parse_scenario_steps(content)
        return FormatMetadata(
            feature=feature,
            scenario=scenario,
            given_count=len(record.given),
            when_count=len(record.when),
            then_count=len(record.then),
        )
    if fmt is Format.EXECUTABLE_CODE:
        match = _TEST_NAME_RE.search(content)
        return FormatMetadata(
            test_name=match.group(1) if match else None,
            assertion_count=len(_ASSERT_RE.findall(content)),
        )
    if fmt is Format.STRUCTURED_DATA:
        try:
            record = StructuredRecord.from_json(content)
        except ValueError:
            return FormatMetadata()
        return FormatMetadata(
            given_count=len(record.given),
            when_count=len(record.when),
            then_count=len(record.then),
        )
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(content) if s.strip()]
    return FormatMetadata(sentence_count=len(sentences))


__all__ = ["FormatMetadata", "describe_content"]
