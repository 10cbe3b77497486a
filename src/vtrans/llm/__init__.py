"""Language-model adapter and the capability protocol it consumes.

The language model is optional everywhere in vtrans: with no model
configured the engine degrades straight to its heuristic paths.
"""
from __future__ import annotations

from vtrans.llm.adapter import (
    NON_STANDARD_REPLY_WARNING,
    LanguageModelAdapter,
    ParsedTranslation,
    parse_equivalence_reply,
    parse_translation_reply,
)
from vtrans.llm.providers import (
    EchoLanguageModel,
    InvokeOptions,
    LanguageModel,
    LanguageModelReply,
    Message,
    MockLanguageModel,
)

__all__ = [
    "LanguageModel",
    "LanguageModelReply",
    "Message",
    "InvokeOptions",
    "EchoLanguageModel",
    "MockLanguageModel",
    "LanguageModelAdapter",
    "ParsedTranslation",
    "NON_STANDARD_REPLY_WARNING",
    "parse_translation_reply",
    "parse_equivalence_reply",
]
