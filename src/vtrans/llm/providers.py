"""Language-model capability consumed by the adapter.

Defines the ``LanguageModel`` protocol plus two built-in stubs:

- ``EchoLanguageModel`` — replies to a translation prompt with the
  prompt's own source content, well-formed and fully confident.
- ``MockLanguageModel`` — canned replies or a responder callable, with
  call recording; used in tests and never calls a real service.

Real back-ends are injected by callers; this package ships no
proprietary language-model dependencies.

Usage
-----
::

    from vtrans.llm.providers import InvokeOptions, Message, MockLanguageModel

    model = MockLanguageModel(replies="---TRANSLATION---\\nGiven x\\n---CONFIDENCE---\\n0.9")
    reply = model.invoke([Message("user", "translate")], InvokeOptions())
"""
from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from vtrans.llm.prompts import SOURCE_END_MARKER, SOURCE_MARKER


@dataclass(frozen=True)
class Message:
    """One chat message sent to the language model."""

    role: str
    content: str


@dataclass(frozen=True)
class InvokeOptions:
    """Call options for a language-model invocation.

    Parameters
    ----------
    temperature:
        Sampling temperature.  Kept low so translations are repeatable.
    max_tokens:
        Upper bound on the reply length.
    agent_name:
        Label identifying the caller, for the service's own bookkeeping.
    purpose:
        Short description of why the call is made.
    """

    temperature: float = 0.3
    max_tokens: int = 2000
    agent_name: str = "validator-translation"
    purpose: str = ""


@dataclass(frozen=True)
class LanguageModelReply:
    """Reply from a language-model invocation."""

    content: str


@runtime_checkable
class LanguageModel(Protocol):
    """Protocol for language-model back-ends.

    Any object with an ``invoke(messages, options)`` method returning an
    object with a ``content`` string (or a plain string) satisfies this
    protocol.  Implementations may raise any exception on failure; the
    adapter wraps it.
    """

    def invoke(
        self, messages: Sequence[Message], options: InvokeOptions
    ) -> "LanguageModelReply | str":
        ...  # pragma: no cover


_SOURCE_BLOCK_RE = re.compile(
    rf"{re.escape(SOURCE_MARKER)}\n(.*?)\n{re.escape(SOURCE_END_MARKER)}",
    re.DOTALL,
)


class EchoLanguageModel:
    """Stub model that translates by returning its input unchanged.

    For translation prompts the reply is the prompt's source block
    wrapped in the standard delimiters with confidence ``1.0``.  Any
    other prompt is echoed back verbatim.
    """

    def __init__(self) -> None:
        self._call_count = 0

    def invoke(self, messages: Sequence[Message], options: InvokeOptions) -> LanguageModelReply:
        self._call_count += 1
        prompt = messages[-1].content if messages else ""
        match = _SOURCE_BLOCK_RE.search(prompt)
        if match is None:
            return LanguageModelReply(prompt)
        return LanguageModelReply(
            "---TRANSLATION---\n"
            f"{match.group(1)}\n"
            "---CONFIDENCE---\n"
            "1.0\n"
            "---WARNINGS---\n"
            "---END---"
        )

    @property
    def call_count(self) -> int:
        return self._call_count


Responder = Callable[[Sequence[Message], InvokeOptions], str]


@dataclass
class RecordedCall:
    """A call captured by :class:`MockLanguageModel`."""

    messages: list[Message]
    options: InvokeOptions


class MockLanguageModel:
    """Deterministic language-model stub for unit and CI tests.

    Parameters
    ----------
    replies:
        A single reply returned for every call, a list of replies
        returned in order (the last one repeats), or a callable computing
        the reply from the messages and options.
    error:
        When set, every call raises this exception instead of replying.
    """

    def __init__(
        self,
        replies: "str | list[str] | Responder" = "",
        error: Exception | None = None,
    ) -> None:
        self._replies = replies
        self._error = error
        self.calls: list[RecordedCall] = []

    def invoke(self, messages: Sequence[Message], options: InvokeOptions) -> LanguageModelReply:
        self.calls.append(RecordedCall(list(messages), options))
        if self._error is not None:
            raise self._error
        if callable(self._replies):
            return LanguageModelReply(self._replies(messages, options))
        if isinstance(self._replies, list):
            if not self._replies:
                return LanguageModelReply("")
            index = min(len(self.calls), len(self._replies)) - 1
            return LanguageModelReply(self._replies[index])
        return LanguageModelReply(self._replies)

    @property
    def call_count(self) -> int:
        """Return the number of times :meth:`invoke` has been called."""
        return len(self.calls)

    def reset_call_count(self) -> None:
        """Forget all recorded calls."""
        self.calls.clear()


__all__ = [
    "Message",
    "InvokeOptions",
    "LanguageModelReply",
    "LanguageModel",
    "EchoLanguageModel",
    "MockLanguageModel",
    "RecordedCall",
]
