"""Exception types for vtrans.

Only :class:`InvalidFormatError` (a caller contract violation) and
:class:`ConfigError` are expected to escape the public API.  The
language-model errors are raised inside the adapter and absorbed by the
orchestrator and semantic validator, which fall back to heuristics.
"""
from __future__ import annotations


class VtransError(Exception):
    """Base class for all vtrans errors."""


class InvalidFormatError(VtransError, ValueError):
    """Raised when a value is not one of the four validator formats.

    Parameters
    ----------
    value:
        The offending value supplied by the caller.
    """

    def __init__(self, value: object) -> None:
        from vtrans.formats.model import Format

        self.value = value
        allowed = ", ".join(repr(fmt.value) for fmt in Format)
        super().__init__(
            f"Unknown validator format {value!r}. Expected one of: {allowed}."
        )


class LanguageModelError(VtransError):
    """Raised when the language-model service fails to produce a reply.

    Parameters
    ----------
    message:
        Human-readable error description.
    purpose:
        What the adapter was trying to do when the call failed.
    """

    def __init__(self, message: str, purpose: str = "") -> None:
        super().__init__(message)
        self.purpose = purpose


class ResponseParseError(VtransError):
    """Raised when a language-model reply cannot be salvaged.

    Parameters
    ----------
    message:
        Human-readable error description.
    raw_reply:
        The reply text that failed to parse.
    """

    def __init__(self, message: str, raw_reply: str = "") -> None:
        super().__init__(message)
        self.raw_reply = raw_reply


class ConfigError(VtransError, ValueError):
    """Raised when an engine configuration is malformed."""


__all__ = [
    "VtransError",
    "InvalidFormatError",
    "LanguageModelError",
    "ResponseParseError",
    "ConfigError",
]
