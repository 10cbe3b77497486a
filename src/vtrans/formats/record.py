"""Structured-data record and the step parsers shared by converters.

The structured-data format is the hub of the heuristic converter set:
every format can be lowered into a :class:`StructuredRecord` and every
format can be rendered from one.

Usage
-----
::

    from vtrans.formats.record import StructuredRecord, parse_scenario_steps

    record = parse_scenario_steps("Given a user\\nWhen they log in\\nThen they see it")
    record.to_json()
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

# "Given a user exists" / "  And another thing" / "Then: it works"
STEP_LINE_RE = re.compile(
    r"^\s*(Given|When|Then|And|But)\b:?\s*(.*)$",
    re.IGNORECASE,
)

_HEADER_RE = re.compile(r"^\s*(Feature|Scenario(?: Outline)?):\s*(.*)$", re.IGNORECASE)

# "# Given: a user exists" inside generated test code
_LABELLED_COMMENT_RE = re.compile(
    r"^\s*#\s*(Given|When|Then|And)\s*:\s*(.+?)\s*$",
    re.IGNORECASE | re.MULTILINE,
)

_SECTIONS = ("given", "when", "then")


@dataclass
class StructuredRecord:
    """A validator expressed as three ordered step lists.

    Parameters
    ----------
    given:
        Preconditions, in order.
    when:
        Actions, in order.
    then:
        Expected outcomes, in order.
    source_format:
        Value of the format the record was derived from, if any.
    raw_content:
        The content the record was derived from, if any.
    """

    given: list[str] = field(default_factory=list)
    when: list[str] = field(default_factory=list)
    then: list[str] = field(default_factory=list)
    source_format: str | None = None
    raw_content: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return True if no section holds a step."""
        return not (self.given or self.when or self.then)

    def section(self, name: str) -> list[str]:
        """Return the step list for *name* (``given``, ``when`` or ``then``)."""
        if name not in _SECTIONS:
            raise KeyError(name)
        return getattr(self, name)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "given": list(self.given),
            "when": list(self.when),
            "then": list(self.then),
        }
        if self.source_format is not None:
            data["source_format"] = self.source_format
        if self.raw_content is not None:
            data["raw_content"] = self.raw_content
        return data

    def to_json(self) -> str:
        """Serialise to the structured-data format (indented JSON)."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "StructuredRecord":
        """Parse the structured-data format.

        Missing sections are treated as empty.  Scalar section values are
        wrapped into single-item lists.

        Raises
        ------
        ValueError
            If *text* is not JSON, is nested too deeply to decode, or does
            not hold a JSON object.
        """
        try:
            data = json.loads(text)
        except RecursionError as exc:
            raise ValueError("Structured data is nested too deeply to decode") from exc
        if not isinstance(data, dict):
            raise ValueError(
                f"Structured data must be a JSON object, got {type(data).__name__}"
            )
        sections: dict[str, list[str]] = {}
        for name in _SECTIONS:
            value = data.get(name) or []
            if not isinstance(value, list):
                value = [value]
            sections[name] = [str(item) for item in value]
        source_format = data.get("source_format", data.get("sourceFormat"))
        raw_content = data.get("raw_content", data.get("rawContent"))
        return cls(
            given=sections["given"],
            when=sections["when"],
            then=sections["then"],
            source_format=str(source_format) if source_format is not None else None,
            raw_content=str(raw_content) if raw_content is not None else None,
        )


def parse_scenario_steps(content: str) -> StructuredRecord:
    """Collect the Given/When/Then steps of a behavioral scenario.

    ``And``/``But`` lines continue whichever section came before them.
    ``Feature:``/``Scenario:`` headers and other lines are ignored.
    """
    record = StructuredRecord()
    current: str | None = None
    for line in content.splitlines():
        match = STEP_LINE_RE.match(line)
        if match is None:
            continue
        keyword, text = match.group(1).lower(), match.group(2).strip()
        if keyword in _SECTIONS:
            current = keyword
        elif current is None:
            # Leading "And" with nothing to continue reads as a precondition.
            current = "given"
        if text:
            record.section(current).append(text)
    return record


def parse_scenario_headers(content: str) -> tuple[str | None, str | None]:
    """Return the ``(feature, scenario)`` titles of a scenario, if present."""
    feature: str | None = None
    scenario: str | None = None
    for line in content.splitlines():
        match = _HEADER_RE.match(line)
        if match is None:
            continue
        if match.group(1).lower() == "feature":
            feature = feature or match.group(2).strip() or None
        else:
            scenario = scenario or match.group(2).strip() or None
    return feature, scenario


def parse_labelled_comments(content: str) -> StructuredRecord:
    """Collect ``# Given: …`` style comments from test code."""
    record = StructuredRecord()
    current = "given"
    for match in _LABELLED_COMMENT_RE.finditer(content):
        keyword, text = match.group(1).lower(), match.group(2)
        if keyword in _SECTIONS:
            current = keyword
        record.section(current).append(text)
    return record


__all__ = [
    "STEP_LINE_RE",
    "StructuredRecord",
    "parse_scenario_steps",
    "parse_scenario_headers",
    "parse_labelled_comments",
]
