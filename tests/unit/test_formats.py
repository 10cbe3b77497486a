"""Unit tests for vtrans.formats — the format enum, structured records,
step parsers, syntax checks and per-format metadata.

Coverage targets
----------------
- vtrans/formats/model.py
- vtrans/formats/record.py
- vtrans/formats/syntax.py
- vtrans/formats/metadata.py
- vtrans/errors.py  (InvalidFormatError)
"""
from __future__ import annotations

import json

import pytest

from vtrans.errors import InvalidFormatError, VtransError
from vtrans.formats import (
    FORMAT_DESCRIPTIONS,
    FORMAT_GUIDELINES,
    Format,
    FormatMetadata,
    StructuredRecord,
    check_format_syntax,
    describe_content,
    parse_labelled_comments,
    parse_scenario_headers,
    parse_scenario_steps,
)

_DEEP_JSON = "[" * 100_000 + "]" * 100_000


# ===========================================================================
# 1. Format enum
# ===========================================================================


class TestFormat:
    def test_exactly_four_formats(self) -> None:
        assert len(list(Format)) == 4

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("gherkin", Format.BEHAVIORAL_SCENARIO),
            ("natural_language", Format.NATURAL_LANGUAGE),
            ("pytest", Format.EXECUTABLE_CODE),
            ("json", Format.STRUCTURED_DATA),
            ("behavioral-scenario", Format.BEHAVIORAL_SCENARIO),
            ("EXECUTABLE_CODE", Format.EXECUTABLE_CODE),
            ("  Structured-Data ", Format.STRUCTURED_DATA),
        ],
    )
    def test_parse_accepts_values_and_names(self, value: str, expected: Format) -> None:
        assert Format.parse(value) is expected

    def test_parse_returns_member_unchanged(self) -> None:
        assert Format.parse(Format.NATURAL_LANGUAGE) is Format.NATURAL_LANGUAGE

    def test_parse_unknown_string_raises(self) -> None:
        with pytest.raises(InvalidFormatError) as exc_info:
            Format.parse("yaml")
        assert exc_info.value.value == "yaml"
        assert "'gherkin'" in str(exc_info.value)

    def test_parse_non_string_raises(self) -> None:
        with pytest.raises(InvalidFormatError):
            Format.parse(3)  # type: ignore[arg-type]

    def test_invalid_format_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Format.parse("xml")
        assert issubclass(InvalidFormatError, VtransError)

    def test_str_is_value(self) -> None:
        assert str(Format.STRUCTURED_DATA) == "json"
        assert f"{Format.BEHAVIORAL_SCENARIO}" == "gherkin"

    def test_label(self) -> None:
        assert Format.NATURAL_LANGUAGE.label == "natural language"

    def test_every_format_described(self) -> None:
        for fmt in Format:
            assert FORMAT_DESCRIPTIONS[fmt]
            assert FORMAT_GUIDELINES[fmt]


# ===========================================================================
# 2. StructuredRecord
# ===========================================================================


class TestStructuredRecord:
    def test_empty_by_default(self) -> None:
        assert StructuredRecord().is_empty is True

    def test_not_empty_with_a_step(self) -> None:
        assert StructuredRecord(then=["it works"]).is_empty is False

    def test_section_lookup(self) -> None:
        record = StructuredRecord(given=["a"])
        record.section("when").append("b")
        assert record.section("given") == ["a"]
        assert record.when == ["b"]

    def test_section_unknown_raises(self) -> None:
        with pytest.raises(KeyError):
            StructuredRecord().section("and")

    def test_to_dict_omits_unset_provenance(self) -> None:
        data = StructuredRecord(given=["a"]).to_dict()
        assert data == {"given": ["a"], "when": [], "then": []}

    def test_to_json_keeps_provenance(self) -> None:
        record = StructuredRecord(then=["ok"], source_format="gherkin", raw_content="Then ok")
        data = json.loads(record.to_json())
        assert data["source_format"] == "gherkin"
        assert data["raw_content"] == "Then ok"

    def test_from_json_preserves_order(self) -> None:
        record = StructuredRecord.from_json('{"given": ["first", "second"], "then": ["done"]}')
        assert record.given == ["first", "second"]
        assert record.when == []
        assert record.then == ["done"]

    def test_from_json_wraps_scalars(self) -> None:
        record = StructuredRecord.from_json('{"given": "one", "when": 2}')
        assert record.given == ["one"]
        assert record.when == ["2"]

    def test_from_json_accepts_camel_case_provenance(self) -> None:
        record = StructuredRecord.from_json(
            '{"then": ["x"], "sourceFormat": "pytest", "rawContent": "assert x"}'
        )
        assert record.source_format == "pytest"
        assert record.raw_content == "assert x"

    def test_from_json_rejects_non_object(self) -> None:
        with pytest.raises(ValueError, match="JSON object"):
            StructuredRecord.from_json('["given"]')

    def test_from_json_rejects_invalid_json(self) -> None:
        with pytest.raises(ValueError):
            StructuredRecord.from_json("not json")

    def test_from_json_rejects_deeply_nested_json(self) -> None:
        with pytest.raises(ValueError, match="nested too deeply"):
            StructuredRecord.from_json(_DEEP_JSON)


# ===========================================================================
# 3. Step parsers
# ===========================================================================


class TestParseScenarioSteps:
    def test_basic_steps(self, scenario_text: str) -> None:
        record = parse_scenario_steps(scenario_text)
        assert record.given == ["a user with role admin"]
        assert record.when == ["they access /api/users"]
        assert record.then == ["access is granted"]

    def test_and_but_continue_previous_section(self) -> None:
        record = parse_scenario_steps("Given a\nAnd b\nWhen c\nThen d\nBut e")
        assert record.given == ["a", "b"]
        assert record.when == ["c"]
        assert record.then == ["d", "e"]

    def test_leading_and_is_precondition(self) -> None:
        record = parse_scenario_steps("And orphan step\nThen done")
        assert record.given == ["orphan step"]

    def test_headers_and_noise_ignored(self) -> None:
        text = "Feature: Login\n  Scenario: Admin\n    # comment\n    Given a\n    Then b"
        record = parse_scenario_steps(text)
        assert record.given == ["a"]
        assert record.then == ["b"]

    def test_case_insensitive_keywords(self) -> None:
        record = parse_scenario_steps("given lower\nTHEN upper")
        assert record.given == ["lower"]
        assert record.then == ["upper"]


class TestParseScenarioHeaders:
    def test_both_headers(self) -> None:
        text = "Feature: Access control\n  Scenario: Admin access\n    Given a"
        assert parse_scenario_headers(text) == ("Access control", "Admin access")

    def test_no_headers(self, scenario_text: str) -> None:
        assert parse_scenario_headers(scenario_text) == (None, None)

    def test_scenario_outline(self) -> None:
        assert parse_scenario_headers("Scenario Outline: Many")[1] == "Many"


class TestParseLabelledComments:
    def test_labelled_comments(self) -> None:
        code = (
            "def test_x():\n"
            "    # Given: a user\n"
            "    # And: a role\n"
            "    # When: they act\n"
            "    # Then: it works\n"
            "    assert True\n"
        )
        record = parse_labelled_comments(code)
        assert record.given == ["a user", "a role"]
        assert record.when == ["they act"]
        assert record.then == ["it works"]

    def test_plain_comments_ignored(self) -> None:
        assert parse_labelled_comments("# just a note\nassert x").is_empty


# ===========================================================================
# 4. Syntax checks
# ===========================================================================


class TestCheckFormatSyntax:
    def test_scenario_with_keywords_passes(self, scenario_text: str) -> None:
        assert check_format_syntax(scenario_text, Format.BEHAVIORAL_SCENARIO) == []

    def test_scenario_without_keywords_warns(self) -> None:
        warnings = check_format_syntax("a user logs in", Format.BEHAVIORAL_SCENARIO)
        assert len(warnings) == 1
        assert "Given/When/Then" in warnings[0]

    def test_code_with_assert_passes(self) -> None:
        assert check_format_syntax("def test_x():\n    assert x\n", Format.EXECUTABLE_CODE) == []

    def test_code_with_pytest_raises_passes(self) -> None:
        code = "def test_x():\n    with pytest.raises(ValueError):\n        f()\n"
        assert check_format_syntax(code, Format.EXECUTABLE_CODE) == []

    def test_code_without_assert_warns(self) -> None:
        warnings = check_format_syntax("print('x')", Format.EXECUTABLE_CODE)
        assert warnings == ["Executable code translation may be missing assertions."]

    def test_invalid_json_warns(self) -> None:
        warnings = check_format_syntax("{not json", Format.STRUCTURED_DATA)
        assert warnings == ["Structured data translation is not valid JSON."]

    def test_deeply_nested_json_warns(self) -> None:
        warnings = check_format_syntax(_DEEP_JSON, Format.STRUCTURED_DATA)
        assert warnings == ["Structured data translation is not valid JSON."]

    def test_valid_json_passes(self, structured_text: str) -> None:
        assert check_format_syntax(structured_text, Format.STRUCTURED_DATA) == []

    def test_natural_language_never_warns(self) -> None:
        assert check_format_syntax("", Format.NATURAL_LANGUAGE) == []


# ===========================================================================
# 5. Metadata
# ===========================================================================


class TestDescribeContent:
    def test_scenario_metadata(self) -> None:
        text = "Feature: F\n  Scenario: S\n    Given a\n    And b\n    When c\n    Then d"
        meta = describe_content(text, Format.BEHAVIORAL_SCENARIO)
        assert meta.feature == "F"
        assert meta.scenario == "S"
        assert (meta.given_count, meta.when_count, meta.then_count) == (2, 1, 1)
        assert meta.test_name is None

    def test_code_metadata(self) -> None:
        code = "def test_login():\n    assert a\n    assert b\n"
        meta = describe_content(code, Format.EXECUTABLE_CODE)
        assert meta.test_name == "test_login"
        assert meta.assertion_count == 2

    def test_structured_metadata(self, structured_text: str) -> None:
        meta = describe_content(structured_text, Format.STRUCTURED_DATA)
        assert (meta.given_count, meta.when_count, meta.then_count) == (1, 1, 1)

    def test_unparsable_structured_data_gives_empty_metadata(self) -> None:
        assert describe_content("oops", Format.STRUCTURED_DATA) == FormatMetadata()

    def test_deeply_nested_structured_data_gives_empty_metadata(self) -> None:
        assert describe_content(_DEEP_JSON, Format.STRUCTURED_DATA) == FormatMetadata()

    def test_natural_language_sentence_count(self) -> None:
        meta = describe_content("Users log in. They see a dashboard!", Format.NATURAL_LANGUAGE)
        assert meta.sentence_count == 2

    def test_to_dict_drops_unset_fields(self) -> None:
        assert FormatMetadata(sentence_count=1).to_dict() == {"sentence_count": 1}
