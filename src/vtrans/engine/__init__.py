"""Translation engine: orchestrator, semantic validator and round-trip tester."""
from __future__ import annotations

from vtrans.engine.orchestrator import TranslationOrchestrator
from vtrans.engine.roundtrip import RoundTripTester, preservation_score, term_differences
from vtrans.engine.semantic import SemanticValidator

__all__ = [
    "TranslationOrchestrator",
    "SemanticValidator",
    "RoundTripTester",
    "preservation_score",
    "term_differences",
]
