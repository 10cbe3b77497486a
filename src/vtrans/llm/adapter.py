"""Language-model adapter.

Builds prompts, invokes a :class:`~vtrans.llm.providers.LanguageModel`
and parses its structured replies.  The adapter raises on failure:
:class:`~vtrans.errors.LanguageModelError` when the service call fails
and :class:`~vtrans.errors.ResponseParseError` when a reply cannot be
salvaged.  Callers (the orchestrator and the semantic validator) catch
these and fall back to heuristics.

Salvageable problems never raise.  A reply without delimiters is used
whole, an out-of-range confidence is clamped, and every target-format
sanity-check violation is recorded as a warning.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from vtrans.config import EngineConfig
from vtrans.errors import LanguageModelError, ResponseParseError
from vtrans.formats.metadata import describe_content
from vtrans.formats.model import Format
from vtrans.formats.syntax import check_format_syntax
from vtrans.llm import prompts
from vtrans.llm.providers import InvokeOptions, LanguageModel, Message
from vtrans.results import SemanticValidation, TranslationResult, clamp_unit

logger = logging.getLogger(__name__)

NON_STANDARD_REPLY_WARNING = (
    "Response format was non-standard, using entire response as translation."
)

_TRANSLATION_RE = re.compile(
    rf"{re.escape(prompts.TRANSLATION_MARKER)}\s*(.*?)\s*"
    rf"(?:{re.escape(prompts.CONFIDENCE_MARKER)}|{re.escape(prompts.WARNINGS_MARKER)}"
    rf"|{re.escape(prompts.END_MARKER)}|\Z)",
    re.DOTALL,
)
# The value may be negative but must not be the next "---" delimiter.
_CONFIDENCE_RE = re.compile(rf"{re.escape(prompts.CONFIDENCE_MARKER)}\s*(-?[^\s-]\S*)")
_WARNINGS_RE = re.compile(
    rf"{re.escape(prompts.WARNINGS_MARKER)}\s*(.*?)\s*(?:{re.escape(prompts.END_MARKER)}|\Z)",
    re.DOTALL,
)
_BULLET_RE = re.compile(r"^(?:[-*•]|\d+[.)])\s*")
_NO_WARNINGS = {"none", "n/a", "no warnings", "[]"}

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


@dataclass
class ParsedTranslation:
    """Fields recovered from a translation reply."""

    content: str
    confidence: float
    warnings: list[str] = field(default_factory=list)


def parse_translation_reply(
    reply: str, target: Format, default_confidence: float = 0.7
) -> ParsedTranslation:
    """Parse a delimiter-structured translation reply.

    Parameters
    ----------
    reply:
        Raw reply text.
    target:
        Format the translation should be in; used for sanity checks.
    default_confidence:
        Confidence used when the reply carries none.

    Raises
    ------
    ResponseParseError
        If the reply, or its translation section, is empty.
    """
    if not reply or not reply.strip():
        raise ResponseParseError("Language model returned an empty reply", raw_reply=reply)

    warnings: list[str] = []
    match = _TRANSLATION_RE.search(reply)
    if match is not None:
        content = match.group(1).strip()
        if not content:
            raise ResponseParseError("Translation section is empty", raw_reply=reply)
    else:
        content = reply.strip()
        warnings.append(NON_STANDARD_REPLY_WARNING)

    confidence = default_confidence
    confidence_match = _CONFIDENCE_RE.search(reply)
    if confidence_match is not None:
        raw_confidence = confidence_match.group(1)
        try:
            confidence = clamp_unit(float(raw_confidence))
        except ValueError:
            warnings.append(
                f"Confidence value {raw_confidence!r} could not be parsed; "
                f"using {default_confidence}."
            )

    warnings_match = _WARNINGS_RE.search(reply)
    if warnings_match is not None:
        for line in warnings_match.group(1).splitlines():
            text = _BULLET_RE.sub("", line.strip()).strip()
            if text and text.lower() not in _NO_WARNINGS:
                warnings.append(text)

    warnings.extend(check_format_syntax(content, target))
    return ParsedTranslation(content=content, confidence=confidence, warnings=warnings)


def _load_json_object(reply: str) -> dict[str, Any]:
    candidates = [reply.strip()]
    fenced = _CODE_FENCE_RE.search(reply)
    if fenced is not None:
        candidates.append(fenced.group(1))
    braces = _JSON_OBJECT_RE.search(reply)
    if braces is not None:
        candidates.append(braces.group(0))
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        if isinstance(data, dict):
            return data
    raise ResponseParseError("Reply does not contain a JSON object", raw_reply=reply)


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(item) for item in value if str(item).strip()]
    return [str(value)]


def parse_equivalence_reply(reply: str, threshold: float = 0.7) -> SemanticValidation:
    """Parse a JSON equivalence rating.

    The reply is valid only when ``equivalence >= threshold``, no
    differences are reported and ``isEquivalent`` (when it is a boolean)
    is true.

    Raises
    ------
    ResponseParseError
        If the reply holds no JSON object or no numeric equivalence.
    """
    data = _load_json_object(reply)
    raw_equivalence = data.get("semanticEquivalence", data.get("equivalence"))
    if isinstance(raw_equivalence, bool) or not isinstance(raw_equivalence, (int, float)):
        raise ResponseParseError(
            f"Missing or non-numeric semanticEquivalence: {raw_equivalence!r}",
            raw_reply=reply,
        )
    equivalence = clamp_unit(raw_equivalence)
    differences = _string_list(data.get("differences"))
    suggestions = _string_list(data.get("suggestions"))
    verdict = data.get("isEquivalent")
    model_agrees = verdict if isinstance(verdict, bool) else True
    return SemanticValidation(
        is_valid=model_agrees and equivalence >= threshold and not differences,
        equivalence=equivalence,
        warnings=differences,
        suggestions=suggestions,
        used_language_model=True,
    )


class LanguageModelAdapter:
    """Talks to a language model on behalf of the engine.

    Parameters
    ----------
    model:
        The language-model back-end.
    config:
        Engine configuration supplying call options and defaults.
    """

    def __init__(self, model: LanguageModel, config: EngineConfig | None = None) -> None:
        self._model = model
        self._config = config or EngineConfig()

    @property
    def model(self) -> LanguageModel:
        return self._model

    def translate(self, content: str, source: Format, target: Format) -> TranslationResult:
        """Translate *content* with the language model.

        Raises
        ------
        LanguageModelError
            If the service call fails.
        ResponseParseError
            If the reply cannot be salvaged.
        """
        messages = [
            Message("system", prompts.translation_system_prompt()),
            Message("user", prompts.build_translation_prompt(content, source, target)),
        ]
        options = InvokeOptions(
            temperature=self._config.translation_temperature,
            max_tokens=self._config.translation_max_tokens,
            agent_name="validator-translation",
            purpose=f"Translate validator from {source} to {target}",
        )
        reply = self._invoke(messages, options)
        parsed = parse_translation_reply(reply, target, self._config.default_confidence)
        logger.debug(
            "Language model translated %s -> %s with confidence %.2f",
            source,
            target,
            parsed.confidence,
        )
        return TranslationResult(
            content=parsed.content,
            source_format=source,
            target_format=target,
            confidence=parsed.confidence,
            warnings=parsed.warnings,
            used_language_model=True,
            metadata=describe_content(parsed.content, target),
        )

    def rate_equivalence(
        self, original: str, translated: str, source: Format, target: Format
    ) -> SemanticValidation:
        """Ask the language model whether two texts mean the same thing.

        Raises
        ------
        LanguageModelError
            If the service call fails.
        ResponseParseError
            If the reply is not a usable JSON rating.
        """
        messages = [
            Message("system", prompts.VALIDATION_SYSTEM_PROMPT),
            Message(
                "user",
                prompts.build_validation_prompt(original, translated, source, target),
            ),
        ]
        options = InvokeOptions(
            temperature=self._config.validation_temperature,
            max_tokens=self._config.validation_max_tokens,
            agent_name="validator-translation-validation",
            purpose="Validate translation semantic equivalence",
        )
        reply = self._invoke(messages, options)
        return parse_equivalence_reply(reply, self._config.semantic_threshold)

    def _invoke(self, messages: list[Message], options: InvokeOptions) -> str:
        try:
            reply = self._model.invoke(messages, options)
        except Exception as exc:
            raise LanguageModelError(
                f"Language model call failed: {exc}", purpose=options.purpose
            ) from exc
        text = reply if isinstance(reply, str) else getattr(reply, "content", None)
        if not isinstance(text, str):
            raise ResponseParseError(
                f"Language model reply has no text content: {reply!r}"
            )
        return text


__all__ = [
    "NON_STANDARD_REPLY_WARNING",
    "ParsedTranslation",
    "parse_translation_reply",
    "parse_equivalence_reply",
    "LanguageModelAdapter",
]
