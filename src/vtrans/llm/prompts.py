"""Prompt templates for the language-model adapter."""
from __future__ import annotations

from vtrans.formats.model import FORMAT_DESCRIPTIONS, FORMAT_GUIDELINES, Format

SOURCE_MARKER = "---SOURCE---"
SOURCE_END_MARKER = "---END SOURCE---"

TRANSLATION_MARKER = "---TRANSLATION---"
CONFIDENCE_MARKER = "---CONFIDENCE---"
WARNINGS_MARKER = "---WARNINGS---"
END_MARKER = "---END---"


def translation_system_prompt() -> str:
    """System prompt describing the translator's job and every format's conventions."""
    guidelines = "\n".join(
        f"- {fmt.label.capitalize()} ({fmt.value}): {FORMAT_GUIDELINES[fmt]}" for fmt in Format
    )
    return (
        "You are an expert at translating software validation specifications "
        "between different formats.\n"
        "\n"
        "Your translations must:\n"
        "1. Preserve exact semantic meaning - the translated validator must test "
        "the same behavior\n"
        "2. Use proper syntax for the target format\n"
        "3. Be clear and unambiguous\n"
        "4. Include all conditions and assertions from the original\n"
        "\n"
        "Format-specific guidelines:\n"
        f"{guidelines}\n"
        "\n"
        "Always assess your confidence in the translation accuracy and note any "
        "potential issues."
    )


def build_translation_prompt(content: str, source: Format, target: Format) -> str:
    """User prompt asking for *content* to be translated from *source* to *target*."""
    return (
        f"Translate the following validator from {FORMAT_DESCRIPTIONS[source]} "
        f"to {FORMAT_DESCRIPTIONS[target]}.\n"
        "\n"
        f"Source ({source.value}):\n"
        f"{SOURCE_MARKER}\n"
        f"{content}\n"
        f"{SOURCE_END_MARKER}\n"
        "\n"
        "Requirements:\n"
        "1. Preserve the exact semantic meaning\n"
        f"2. Use proper {target.value} syntax and conventions\n"
        "3. Be precise and unambiguous\n"
        "\n"
        "Respond with the translation, followed by a confidence score (0.0-1.0), "
        "and any warnings.\n"
        "Format:\n"
        f"{TRANSLATION_MARKER}\n"
        "[translated content]\n"
        f"{CONFIDENCE_MARKER}\n"
        "[score]\n"
        f"{WARNINGS_MARKER}\n"
        "[warning 1]\n"
        "[warning 2]\n"
        f"{END_MARKER}"
    )


VALIDATION_SYSTEM_PROMPT = (
    "You are an expert at analyzing software requirements and test "
    "specifications. Respond only with valid JSON."
)


def build_validation_prompt(
    original: str, translated: str, source: Format, target: Format
) -> str:
    """User prompt asking whether two validator texts mean the same thing."""
    return (
        "Compare these two validator specifications and determine if they have "
        "the same semantic meaning.\n"
        "\n"
        f"Original ({source.value}):\n"
        f"{original}\n"
        "\n"
        f"Translated ({target.value}):\n"
        f"{translated}\n"
        "\n"
        "Analyze:\n"
        "1. Do they test the same behavior?\n"
        "2. Are there any semantic differences?\n"
        "3. Are there any missing or added requirements?\n"
        "\n"
        "Respond with JSON:\n"
        "{\n"
        '  "semanticEquivalence": 0.0-1.0,\n'
        '  "isEquivalent": true/false,\n'
        '  "differences": ["difference 1", ...],\n'
        '  "suggestions": ["suggestion 1", ...]\n'
        "}"
    )


__all__ = [
    "SOURCE_MARKER",
    "SOURCE_END_MARKER",
    "TRANSLATION_MARKER",
    "CONFIDENCE_MARKER",
    "WARNINGS_MARKER",
    "END_MARKER",
    "VALIDATION_SYSTEM_PROMPT",
    "translation_system_prompt",
    "build_translation_prompt",
    "build_validation_prompt",
]
