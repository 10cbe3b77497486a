"""Rule-based converters between validator formats.

Every converter is a plain function ``(content: str) -> Conversion``.
Converters are deterministic, need no network access and never consult a
language model.  Each one returns a fixed confidence reflecting how much
fidelity the rule is expected to lose.

+-----------------------------+------------+
| Pair                        | Confidence |
+=============================+============+
| scenario → natural language | 0.8        |
+-----------------------------+------------+
| natural language → scenario | 0.6        |
+-----------------------------+------------+
| scenario → code             | 0.7        |
+-----------------------------+------------+
| code → scenario             | 0.5        |
+-----------------------------+------------+
| natural language → code     | 0.5        |
+-----------------------------+------------+
| code → natural language     | 0.6        |
+-----------------------------+------------+
| any → structured data       | 0.7        |
+-----------------------------+------------+
| structured data → any       | 0.7        |
+-----------------------------+------------+
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from vtrans.formats.model import Format
from vtrans.formats.record import (
    STEP_LINE_RE,
    StructuredRecord,
    parse_labelled_comments,
    parse_scenario_headers,
    parse_scenario_steps,
)

UNSUPPORTED_CONFIDENCE = 0.3

DEFAULT_PRECONDITION = "the system is in a valid state"
DEFAULT_ACTION = "the validation is executed"


@dataclass(frozen=True)
class Conversion:
    """Output of a single heuristic converter.

    Parameters
    ----------
    content:
        Converted text.
    confidence:
        Fixed confidence of the rule that produced *content*.
    warnings:
        Rule-specific caveats.
    """

    content: str
    confidence: float
    warnings: tuple[str, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_CONDITION_CUE_RE = re.compile(r"\b(if|when|given|assuming|with)\b", re.IGNORECASE)
_OUTCOME_CUE_RE = re.compile(r"\b(then|should|must|will|expect|verify)\b", re.IGNORECASE)
_LEADING_STEP_WORD_RE = re.compile(
    r"^(?:given|when|then|and|if|assuming)\b[\s,:]*", re.IGNORECASE
)
_LEADING_CONDITION_RE = re.compile(r"^(?:given|assuming|if|with)\b", re.IGNORECASE)

_TEST_DEF_RE = re.compile(r"^\s*(?:async\s+)?def\s+(test\w*)\s*\(", re.MULTILINE)
_DOCSTRING_RE = re.compile(r'"""(.*?)"""', re.DOTALL)
_COMMENT_RE = re.compile(r"^\s*#\s*(.+?)\s*$", re.MULTILINE)
_ASSERT_RE = re.compile(r"^\s*assert\s+(.+?)\s*$", re.MULTILINE)

_MAX_NAME_LENGTH = 60


def _sanitize(name: str) -> str:
    """Convert free text to a valid Python identifier fragment."""
    cleaned = re.sub(r"[^a-zA-Z0-9_]", "_", name)
    cleaned = re.sub(r"_+", "_", cleaned).strip("_")
    cleaned = cleaned.lower()[:_MAX_NAME_LENGTH].rstrip("_")
    return cleaned if cleaned else "validator"


def _lower_first(text: str) -> str:
    return text[:1].lower() + text[1:] if text else text


def _upper_first(text: str) -> str:
    return text[:1].upper() + text[1:] if text else text


def _split_sentences(content: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(content) if s.strip()]


def _escape_docstring(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


def _unescape_docstring(text: str) -> str:
    return text.replace('\\"\\"\\"', '"""').replace("\\\\", "\\")


def _strip_step_word(text: str) -> str:
    return _LEADING_STEP_WORD_RE.sub("", text, count=1).strip()


def classify_sentences(content: str) -> StructuredRecord:
    """Assign each prose sentence to Given, When or Then by cue words.

    A sentence opening with a condition word ("if", "given", "assuming",
    "with") is a precondition, one opening with "when" is an action and
    one opening with "then" is an outcome.  A conditional sentence with a
    comma ("If X, Y should Z") is split into a precondition and an
    outcome.  Otherwise outcome cues win over condition cues, and
    sentences with neither cue become actions.
    """
    record = StructuredRecord()
    for sentence in _split_sentences(content):
        lowered = sentence.lower()
        if _LEADING_CONDITION_RE.match(sentence) or lowered.startswith("when "):
            head, sep, tail = sentence.partition(",")
            section = "given" if _LEADING_CONDITION_RE.match(sentence) else "when"
            if sep and tail.strip():
                record.section(section).append(_strip_step_word(head))
                record.then.append(_strip_step_word(tail))
            else:
                record.section(section).append(_strip_step_word(sentence))
        elif lowered.startswith("then "):
            record.then.append(_strip_step_word(sentence))
        elif _OUTCOME_CUE_RE.search(sentence):
            record.then.append(sentence)
        elif _CONDITION_CUE_RE.search(sentence):
            record.given.append(sentence)
        else:
            record.when.append(sentence)
    return record


def _record_from_code(content: str) -> StructuredRecord:
    """Lower executable test code into a record.

    Labelled ``# Given:``/``# When:``/``# Then:`` comments are used when
    present; otherwise the first comment is the precondition and every
    ``assert`` becomes an outcome.
    """
    labelled = parse_labelled_comments(content)
    if not labelled.is_empty:
        return labelled
    record = StructuredRecord()
    comments = _COMMENT_RE.findall(content)
    if comments:
        record.given.append(comments[0])
    for assertion in _ASSERT_RE.findall(content):
        record.then.append(f"the assertion `{assertion}` should pass")
    return record


def _test_name(content: str) -> str | None:
    match = _TEST_DEF_RE.search(content)
    return match.group(1) if match else None


def _docstring(content: str) -> str | None:
    match = _DOCSTRING_RE.search(content)
    if match is None:
        return None
    text = " ".join(_unescape_docstring(match.group(1)).split())
    return text or None


# ---------------------------------------------------------------------------
# Renderers shared by several converters
# ---------------------------------------------------------------------------


def render_scenario(
    record: StructuredRecord,
    feature: str | None = None,
    scenario: str | None = None,
) -> str:
    """Render *record* as Given/When/Then step lines.

    When *feature* or *scenario* is given the steps are nested under
    ``Feature:``/``Scenario:`` headers; otherwise bare step lines are
    emitted.
    """
    lines: list[str] = []
    indent = ""
    if feature or scenario:
        lines.append(f"Feature: {feature or 'Validator'}")
        lines.append(f"  Scenario: {scenario or 'Validation'}")
        indent = "    "
    for keyword, steps in (("Given", record.given), ("When", record.when), ("Then", record.then)):
        for index, step in enumerate(steps):
            lines.append(f"{indent}{keyword if index == 0 else 'And'} {step}")
    return "\n".join(lines)


def render_natural_language(record: StructuredRecord) -> str:
    """Render *record* as one prose sentence."""
    parts: list[str] = []
    if record.given:
        parts.append(f"Given {' and '.join(record.given)}")
    if record.when:
        parts.append(f"when {' and '.join(record.when)}")
    if record.then:
        parts.append(f"then {' and '.join(record.then)}")
    if not parts:
        return ""
    return _upper_first(", ".join(parts)) + "."


def render_code(record: StructuredRecord, name: str | None = None, title: str | None = None) -> str:
    """Render *record* as a pytest test function.

    Steps become labelled comments; each outcome gets an ``assert``
    placeholder carrying the outcome text as its message.
    """
    function_name = f"test_{_sanitize(name or (record.then[0] if record.then else 'validator'))}"
    lines = [f"def {function_name}():"]
    if title:
        lines.append(f'    """{_escape_docstring(title)}"""')
    for keyword, steps in (("Given", record.given), ("When", record.when)):
        for step in steps:
            lines.append(f"    # {keyword}: {step}")
    if record.then:
        for step in record.then:
            lines.append(f"    # Then: {step}")
            lines.append(f"    assert True, {step!r}")
    else:
        lines.append("    assert True")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Pair-specific converters
# ---------------------------------------------------------------------------

_SCENARIO_PHRASES = {
    "given": "starting with",
    "when": "when",
    "then": "then",
    "and": "and",
    "but": "but",
}


def scenario_to_natural_language(content: str) -> Conversion:
    """Join step lines into a single "The system should validate that …" sentence."""
    parts: list[str] = []
    for line in content.splitlines():
        match = STEP_LINE_RE.match(line)
        if match is None or not match.group(2).strip():
            continue
        phrase = _SCENARIO_PHRASES[match.group(1).lower()]
        parts.append(f"{phrase} {_lower_first(match.group(2).strip())}")
    if not parts:
        return Conversion(content, 0.8)
    return Conversion(f"The system should validate that {', '.join(parts)}.", 0.8)


def natural_language_to_scenario(content: str) -> Conversion:
    """Scan sentences for condition and outcome cues to build a scenario."""
    warning = "Natural language to behavioral scenario conversion may not capture all nuances."
    sentences = _split_sentences(content)
    if not sentences:
        return Conversion(content, 0.6, (warning,))
    record = classify_sentences(content)
    if not record.given:
        record.given.append(DEFAULT_PRECONDITION)
    if not record.when:
        record.when.append(DEFAULT_ACTION)
    if not record.then:
        record.then.append(sentences[0])
    return Conversion(render_scenario(record, "Validator", "Validation"), 0.6, (warning,))


def scenario_to_code(content: str) -> Conversion:
    """Turn step lines into labelled comments and one assert per outcome."""
    record = parse_scenario_steps(content)
    _, scenario = parse_scenario_headers(content)
    return Conversion(render_code(record, name=scenario, title=scenario), 0.7)


def code_to_scenario(content: str) -> Conversion:
    """Rebuild step lines from labelled comments or from comments and asserts."""
    record = _record_from_code(content)
    if not record.given:
        record.given.append("the system is configured")
    if not record.when:
        record.when.append("the validation runs")
    if not record.then:
        record.then.append("the validation should pass")
    name = _test_name(content)
    title = _docstring(content) or (name[len("test_"):].replace("_", " ") if name else None)
    return Conversion(
        render_scenario(record, "Extracted from test code", title or "Validation"),
        0.5,
        ("Executable code to behavioral scenario conversion is approximate.",),
    )


def natural_language_to_code(content: str) -> Conversion:
    """Wrap the requirement in a test function's docstring and comments."""
    requirement = " ".join(content.split())
    words = requirement.split()[:8]
    lines = [f"def test_{_sanitize(' '.join(words))}():"]
    if requirement:
        lines.append(f'    """{_escape_docstring(requirement)}"""')
    lines.append("    # Requirement:")
    for line in content.strip().splitlines() or [""]:
        lines.append(f"    # {line.strip()}".rstrip())
    lines.append("    assert True")
    return Conversion(
        "\n".join(lines) + "\n",
        0.5,
        ("Natural language to executable code conversion is approximate.",),
    )


def code_to_natural_language(content: str) -> Conversion:
    """Describe a test function through its docstring, steps or name."""
    parts: list[str] = []
    docstring = _docstring(content)
    if docstring:
        parts.append(docstring if docstring[-1] in ".!?" else f"{docstring}.")
    labelled = parse_labelled_comments(content)
    if not labelled.is_empty:
        parts.append(render_natural_language(labelled))
    if not parts:
        name = _test_name(content)
        behavior = name[len("test_"):].replace("_", " ").strip() if name else ""
        parts.append(f"The system {behavior or 'behaves correctly'}.")
    return Conversion(" ".join(parts), 0.6)


# ---------------------------------------------------------------------------
# Structured-data hub
# ---------------------------------------------------------------------------


def _to_structured(record: StructuredRecord, source: Format, content: str) -> Conversion:
    record.source_format = source.value
    record.raw_content = content
    return Conversion(record.to_json(), 0.7)


def scenario_to_structured(content: str) -> Conversion:
    return _to_structured(parse_scenario_steps(content), Format.BEHAVIORAL_SCENARIO, content)


def natural_language_to_structured(content: str) -> Conversion:
    record = classify_sentences(content)
    if record.is_empty and content.strip():
        record.then.append(content.strip())
    return _to_structured(record, Format.NATURAL_LANGUAGE, content)


def code_to_structured(content: str) -> Conversion:
    return _to_structured(_record_from_code(content), Format.EXECUTABLE_CODE, content)


def _parse_structured(content: str) -> StructuredRecord | None:
    try:
        return StructuredRecord.from_json(content)
    except ValueError:
        return None


def _unparsable(content: str) -> Conversion:
    return Conversion(
        content,
        UNSUPPORTED_CONFIDENCE,
        ("Structured data could not be parsed; content passed through unchanged.",),
    )


def _from_structured(content: str, target: Format) -> Conversion:
    record = _parse_structured(content)
    if record is None:
        return _unparsable(content)
    if record.is_empty:
        # Nothing to render; only the raw source can stand in for it.
        same_format = record.source_format == target.value
        return Conversion(record.raw_content if same_format and record.raw_content else "", 0.7)
    if target is Format.BEHAVIORAL_SCENARIO:
        return Conversion(render_scenario(record), 0.7)
    if target is Format.NATURAL_LANGUAGE:
        return Conversion(render_natural_language(record), 0.7)
    return Conversion(render_code(record), 0.7)


def structured_to_scenario(content: str) -> Conversion:
    return _from_structured(content, Format.BEHAVIORAL_SCENARIO)


def structured_to_natural_language(content: str) -> Conversion:
    return _from_structured(content, Format.NATURAL_LANGUAGE)


def structured_to_code(content: str) -> Conversion:
    return _from_structured(content, Format.EXECUTABLE_CODE)


__all__ = [
    "Conversion",
    "UNSUPPORTED_CONFIDENCE",
    "classify_sentences",
    "render_scenario",
    "render_natural_language",
    "render_code",
    "scenario_to_natural_language",
    "natural_language_to_scenario",
    "scenario_to_code",
    "code_to_scenario",
    "natural_language_to_code",
    "code_to_natural_language",
    "scenario_to_structured",
    "natural_language_to_structured",
    "code_to_structured",
    "structured_to_scenario",
    "structured_to_natural_language",
    "structured_to_code",
]
