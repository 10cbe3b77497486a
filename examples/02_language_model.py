#!/usr/bin/env python3
"""Example: plugging in a language model — vtrans

Any object with an ``invoke(messages, options)`` method can drive the
engine.  This example wires a toy model that fails on its first call to
show the heuristic fallback, then succeeds on the next.

Usage:
    python examples/02_language_model.py
"""
from __future__ import annotations

from vtrans import TranslationEngine
from vtrans.llm import InvokeOptions, LanguageModelReply, Message


class FlakyModel:
    """Raises once, then answers every prompt with a fixed translation."""

    def __init__(self) -> None:
        self.calls = 0

    def invoke(self, messages: list[Message], options: InvokeOptions) -> LanguageModelReply:
        self.calls += 1
        if self.calls == 1:
            raise ConnectionError("service warming up")
        return LanguageModelReply(
            "---TRANSLATION---\n"
            "Administrators can list all users through the users API.\n"
            "---CONFIDENCE---\n"
            "0.92\n"
            "---WARNINGS---\n"
            "none\n"
            "---END---"
        )


SCENARIO = "Given a user with role admin\nWhen they access /api/users\nThen access is granted"


def main() -> None:
    engine = TranslationEngine(FlakyModel())

    for attempt in (1, 2):
        result = engine.to_natural_language(SCENARIO, "gherkin")
        source = "language model" if result.used_language_model else "heuristics"
        print(f"Attempt {attempt} via {source} (confidence {result.confidence:.2f}):")
        print(f"  {result.content}")
        for warning in result.warnings:
            print(f"  [warning] {warning}")


if __name__ == "__main__":
    main()
