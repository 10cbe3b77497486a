"""Validator format model.

Exposes the closed :class:`Format` set, the structured-data record used
as the hub for heuristic conversion, per-format sanity checks and the
metadata record attached to translation results.
"""
from __future__ import annotations

from vtrans.formats.metadata import FormatMetadata, describe_content
from vtrans.formats.model import FORMAT_DESCRIPTIONS, FORMAT_GUIDELINES, Format
from vtrans.formats.record import (
    StructuredRecord,
    parse_labelled_comments,
    parse_scenario_headers,
    parse_scenario_steps,
)
from vtrans.formats.syntax import check_format_syntax

__all__ = [
    "Format",
    "FORMAT_DESCRIPTIONS",
    "FORMAT_GUIDELINES",
    "FormatMetadata",
    "describe_content",
    "StructuredRecord",
    "parse_scenario_steps",
    "parse_scenario_headers",
    "parse_labelled_comments",
    "check_format_syntax",
]
