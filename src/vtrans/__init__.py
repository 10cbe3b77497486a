"""vtrans — translate validators between scenario, prose, test code and JSON.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import vtrans

    scenario = '''
    Given a user with role admin
    When they access /api/users
    Then access is granted
    '''

    # Translate (heuristics only; pass a language model to TranslationEngine
    # for model-assisted translation)
    result = vtrans.translate(scenario, "gherkin", "natural_language")

    # Check that the translation kept its meaning
    check = vtrans.validate_translation(scenario, result.content, "gherkin", "natural_language")

    # Certify a format pair by translating there and back
    report = vtrans.test_round_trip(scenario, "gherkin", "json")

    vtrans.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from vtrans.convenience import TranslationEngine
from vtrans.errors import InvalidFormatError
from vtrans.formats.model import Format

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from vtrans.results import RoundTripResult, SemanticValidation, TranslationResult


def translate(
    content: str, source_format: "Format | str", target_format: "Format | str"
) -> "TranslationResult":
    """Translate *content* between formats using the heuristic engine.

    Parameters
    ----------
    content:
        Validator text in *source_format*.
    source_format, target_format:
        A :class:`Format` or its string value, e.g. ``"gherkin"``.

    Returns
    -------
    TranslationResult
        Always populated; never raises for data-quality reasons.

    Raises
    ------
    InvalidFormatError
        If a format value is not one of the four formats.
    """
    return TranslationEngine().translate(content, source_format, target_format)


def to_behavioral_scenario(content: str, source_format: "Format | str") -> "TranslationResult":
    """Translate *content* into a Given/When/Then scenario."""
    return translate(content, source_format, Format.BEHAVIORAL_SCENARIO)


def to_natural_language(content: str, source_format: "Format | str") -> "TranslationResult":
    """Translate *content* into natural-language prose."""
    return translate(content, source_format, Format.NATURAL_LANGUAGE)


def to_executable_code(content: str, source_format: "Format | str") -> "TranslationResult":
    """Translate *content* into a pytest test function."""
    return translate(content, source_format, Format.EXECUTABLE_CODE)


def to_structured_data(content: str, source_format: "Format | str") -> "TranslationResult":
    """Translate *content* into a JSON given/when/then record."""
    return translate(content, source_format, Format.STRUCTURED_DATA)


def validate_translation(
    original: str,
    translated: str,
    source_format: "Format | str",
    target_format: "Format | str",
) -> "SemanticValidation":
    """Rate whether *translated* preserves the meaning of *original*.

    Uses key-term overlap; see :class:`~vtrans.engine.SemanticValidator`.
    """
    return TranslationEngine().validate_translation(
        original, translated, source_format, target_format
    )


def test_round_trip(
    content: str, source_format: "Format | str", target_format: "Format | str"
) -> "RoundTripResult":
    """Translate *content* to *target_format* and back, scoring what survived."""
    return TranslationEngine().test_round_trip(content, source_format, target_format)


# Keep pytest from collecting this when a test module imports it.
test_round_trip.__test__ = False  # type: ignore[attr-defined]


__all__ = [
    "__version__",
    "Format",
    "InvalidFormatError",
    "TranslationEngine",
    "translate",
    "to_behavioral_scenario",
    "to_natural_language",
    "to_executable_code",
    "to_structured_data",
    "validate_translation",
    "test_round_trip",
]
