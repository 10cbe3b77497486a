"""Unit tests for vtrans.terms — key-term extraction and overlap."""
from __future__ import annotations

import pytest

from vtrans.terms import (
    MIN_TERM_LENGTH,
    STOPWORDS,
    extract_key_terms,
    missing_terms,
    term_overlap,
)


class TestExtractKeyTerms:
    def test_stopwords_and_short_words_dropped(self) -> None:
        assert extract_key_terms("Given a user with role admin") == {"user", "role", "admin"}

    def test_lowercases(self) -> None:
        assert extract_key_terms("ADMIN Admin admin") == {"admin"}

    def test_punctuation_splits_words(self) -> None:
        assert extract_key_terms("they access /api/users") == {"they", "access", "users"}

    def test_identifiers_split_on_underscore(self) -> None:
        assert extract_key_terms("test_user_login") == {"test", "user", "login"}

    def test_step_keywords_are_stopwords(self) -> None:
        for keyword in ("given", "when", "then"):
            assert keyword in STOPWORDS
        assert extract_key_terms("Given When Then") == frozenset()

    def test_minimum_length(self) -> None:
        assert MIN_TERM_LENGTH == 4
        assert extract_key_terms("abc abcd") == {"abcd"}

    def test_empty_text(self) -> None:
        assert extract_key_terms("") == frozenset()


class TestTermOverlap:
    def test_full_overlap(self) -> None:
        assert term_overlap("admin users", "users and admin", empty_score=0.0) == 1.0

    def test_partial_overlap(self) -> None:
        assert term_overlap("admin users audit logs", "admin users", empty_score=0.0) == 0.5

    @pytest.mark.parametrize("empty_score", [0.5, 1.0])
    def test_reference_without_terms(self, empty_score: float) -> None:
        assert term_overlap("a b c", "anything goes", empty_score=empty_score) == empty_score

    def test_extra_candidate_terms_do_not_count(self) -> None:
        assert term_overlap("admin", "admin plus extra words", empty_score=0.0) == 1.0


class TestMissingTerms:
    def test_sorted(self) -> None:
        assert missing_terms("zebra apple mango", "mango") == ["apple", "zebra"]

    def test_none_missing(self) -> None:
        assert missing_terms("admin", "the admin") == []
