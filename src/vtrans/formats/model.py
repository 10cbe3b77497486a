"""The four validator formats and the conventions each one implies."""
from __future__ import annotations

from enum import Enum

from vtrans.errors import InvalidFormatError


class Format(str, Enum):
    """Closed set of notations a validator can be expressed in.

    BEHAVIORAL_SCENARIO
        Gherkin-style step lines prefixed by Given/When/Then/And.
    NATURAL_LANGUAGE
        Free prose.
    EXECUTABLE_CODE
        A pytest test function containing one or more ``assert`` statements.
    STRUCTURED_DATA
        A JSON object with ordered ``given``, ``when`` and ``then`` lists.
    """

    BEHAVIORAL_SCENARIO = "gherkin"
    NATURAL_LANGUAGE = "natural_language"
    EXECUTABLE_CODE = "pytest"
    STRUCTURED_DATA = "json"

    @classmethod
    def parse(cls, value: "Format | str") -> "Format":
        """Coerce *value* into a :class:`Format`.

        Accepts a member, its value (``"gherkin"``) or its name
        (``"behavioral_scenario"``, ``"behavioral-scenario"``), compared
        case-insensitively.

        Raises
        ------
        InvalidFormatError
            If *value* names no format.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidFormatError(value)
        key = value.strip().lower().replace("-", "_")
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise InvalidFormatError(value)

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``"behavioral scenario"``."""
        return self.name.lower().replace("_", " ")

    def __str__(self) -> str:
        return self.value


FORMAT_DESCRIPTIONS: dict[Format, str] = {
    Format.BEHAVIORAL_SCENARIO: "Gherkin format with Given/When/Then structure",
    Format.NATURAL_LANGUAGE: "Clear, human-readable natural language description",
    Format.EXECUTABLE_CODE: "Python pytest test function with assert statements",
    Format.STRUCTURED_DATA: "Structured JSON with given, when and then lists",
}

FORMAT_GUIDELINES: dict[Format, str] = {
    Format.BEHAVIORAL_SCENARIO: (
        "Use proper Given/When/Then structure, be specific about "
        "preconditions and outcomes"
    ),
    Format.NATURAL_LANGUAGE: (
        "Write clear, complete sentences that describe the behavior being validated"
    ),
    Format.EXECUTABLE_CODE: (
        "Generate a runnable pytest test function with plain assert statements"
    ),
    Format.STRUCTURED_DATA: (
        'Structure as { "given": [], "when": [], "then": [] } with clear conditions'
    ),
}


__all__ = [
    "Format",
    "FORMAT_DESCRIPTIONS",
    "FORMAT_GUIDELINES",
]
