import dataclasses
import time

import pytest

from models import EvaluationRecord
from parsers import extract_evaluation


GEMINI_STYLE = """**Code Evaluation**

**Score: 8/10**

**Strengths:**
* The function is short and focused.
* Variable names describe their purpose.

**Areas for Improvement:**
* There is no input validation.
* The loop can be replaced with `sum()`.

**Suggestions:**
* Add type hints.
"""

SAMPLES = [
    "",
    "   \n\n  ",
    GEMINI_STYLE,
    "Score: 99999999999999999999999999999999",
    "**/10** score: rating: out of 10 ////",
    "## Strengths\n## Improvements\n## Conclusion\n",
    "-\n-\n*\n•\n---\n===\n",
    "\x00\x01 binary-ish � text 3.5/10",
    "a" * 20000,
    "should " * 500,
    "## Strengths:\n" + "- item\n" * 300,
]


def test_full_record_from_gemini_style_reply():
    record = extract_evaluation(GEMINI_STYLE)
    assert record.score == 8.0
    assert record.strengths == (
        "The function is short and focused.",
        "Variable names describe their purpose.",
    )
    assert record.improvements == (
        "There is no input validation.",
        "The loop can be replaced with `sum()`.",
    )
    assert record.raw_text == GEMINI_STYLE


@pytest.mark.parametrize("text", SAMPLES)
def test_invariants_hold_for_any_input(text):
    record = extract_evaluation(text)
    assert 1.0 <= record.score <= 10.0
    assert len(record.strengths) >= 1
    assert len(record.improvements) >= 1
    assert all(s.strip() == s and s for s in record.strengths + record.improvements)
    assert record.raw_text == text


@pytest.mark.parametrize("text", SAMPLES)
def test_extraction_is_idempotent(text):
    assert extract_evaluation(text) == extract_evaluation(text)


@pytest.mark.parametrize("line", [
    " " * 200_000 + "x",
    "1" * 200_000 + "x",
    " " * 70_000 + "1" * 70_000 + " word" * 12_000,
    "should consider " * 13_000,
    "**" + " 1" * 100_000,
])
def test_long_single_line_is_extracted_quickly(line):
    started = time.perf_counter()
    record = extract_evaluation(line)
    assert time.perf_counter() - started < 2.0
    assert record.score == 5.0
    assert record.improvements == ("No specific improvements suggested",)


def test_unstructured_prose_record():
    record = extract_evaluation("The program prints hello world and exits.")
    assert record == EvaluationRecord(
        score=5.0,
        strengths=("No specific strengths identified",),
        improvements=("No specific improvements suggested",),
        raw_text="The program prints hello world and exits.",
    )


def test_none_and_bytes_input():
    assert extract_evaluation(None).raw_text == ""
    record = extract_evaluation("Score: 4\n- ok".encode("utf-8"))
    assert record.score == 4.0
    assert record.strengths == ("ok",)


def test_record_is_immutable():
    record = extract_evaluation("Score: 4")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.score = 9.0  # type: ignore[misc]


def test_record_row_and_preview():
    record = extract_evaluation(GEMINI_STYLE)
    row = record.to_row()
    assert row["score"] == 8.0
    assert row["full_evaluation"] == GEMINI_STYLE
    assert isinstance(row["strengths"], list)
    assert EvaluationRecord.from_row(row) == record

    assert record.preview(10) == GEMINI_STYLE[:10] + "..."
    assert extract_evaluation("short").preview(200) == "short"
