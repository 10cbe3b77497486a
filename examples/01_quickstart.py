#!/usr/bin/env python3
"""Example: Quickstart — vtrans

Minimal working example: translate a behavioral scenario into every
other format, validate one translation, and round-trip it through JSON.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install vtrans
"""
from __future__ import annotations

import vtrans
from vtrans import Format

SCENARIO = """\
Given a user with role admin
When they access /api/users
Then access is granted"""


def main() -> None:
    print(f"vtrans version: {vtrans.__version__}")

    # Step 1: Translate into each of the other formats
    for target in (Format.NATURAL_LANGUAGE, Format.EXECUTABLE_CODE, Format.STRUCTURED_DATA):
        result = vtrans.translate(SCENARIO, Format.BEHAVIORAL_SCENARIO, target)
        print(f"\n--- {target.label} (confidence {result.confidence:.2f}) ---")
        print(result.content)

    # Step 2: Check that the prose kept the scenario's meaning
    prose = vtrans.to_natural_language(SCENARIO, "gherkin")
    check = vtrans.validate_translation(SCENARIO, prose.content, "gherkin", "natural_language")
    print(f"\nValid: {check.is_valid}, equivalence={check.equivalence:.2f}")
    for warning in check.warnings:
        print(f"  [warning] {warning}")

    # Step 3: Round-trip through structured data
    report = vtrans.test_round_trip(SCENARIO, "gherkin", "json")
    print(f"\nRound trip preservation: {report.preservation_score:.2f} "
          f"({'acceptable' if report.acceptable else 'not acceptable'})")


if __name__ == "__main__":
    main()
