from parsers import extract_improvements, extract_section, extract_strengths, section_strategies
from parsers.sections import HeadingMatcher, section_slice, split_items
from utils.config import ExtractorConfig


MARKDOWN_REVIEW = """# Code Evaluation Report

## Score: **7/10**

## Strengths
- Clear function names
- Good use of list comprehensions
- Consistent formatting

## Improvements
- Add error handling around file access
- Write unit tests for edge cases

## Conclusion
Overall a reasonable start.
"""


def test_strengths_between_headers():
    assert extract_strengths(MARKDOWN_REVIEW) == (
        "Clear function names",
        "Good use of list comprehensions",
        "Consistent formatting",
    )


def test_improvements_stop_at_conclusion():
    assert extract_improvements(MARKDOWN_REVIEW) == (
        "Add error handling around file access",
        "Write unit tests for edge cases",
    )


def test_numbered_headings_and_synonyms():
    text = (
        "1. Score: 6/10\n"
        "2. Pros:\n"
        "• Small functions\n"
        "• Docstrings everywhere\n"
        "3. Areas for Improvement:\n"
        "* Avoid global state\n"
        "* Cache the parsed config\n"
        "4. Suggestions:\n"
        "* Try type hints\n"
    )
    assert extract_strengths(text) == ("Small functions", "Docstrings everywhere")
    assert extract_improvements(text) == ("Avoid global state", "Cache the parsed config")


def test_bold_headings_with_inline_colon():
    text = (
        "**Strengths:**\n"
        "- Readable\n"
        "**Weaknesses:**\n"
        "- No tests\n"
    )
    assert extract_strengths(text) == ("Readable",)
    assert extract_improvements(text) == ("No tests",)


def test_qualified_heading():
    text = "### Key Strengths\n- Tight loop\n### Potential Improvements\n- Name the magic numbers\n"
    assert extract_strengths(text) == ("Tight loop",)
    assert extract_improvements(text) == ("Name the magic numbers",)


def test_wrapped_bullet_is_one_statement():
    text = (
        "## Strengths\n"
        "- The parser handles malformed input\n"
        "  without raising\n"
        "- Good naming\n"
        "## Improvements\n"
        "- Split the module\n"
    )
    assert extract_strengths(text) == (
        "The parser handles malformed input without raising",
        "Good naming",
    )


def test_separator_lines_are_dropped():
    text = "## Strengths\n- Fast\n---\n- Simple\n=====\n## Improvements\n- More docs\n"
    assert extract_strengths(text) == ("Fast", "Simple")


def test_generic_markdown_heading_ends_section():
    text = (
        "### Areas for Improvement\n"
        "- Add comments\n"
        "- Consider edge cases\n\n"
        "### Detailed Analysis\n"
        "This is a detailed analysis of your code.\n"
    )
    assert extract_improvements(text) == ("Add comments", "Consider edge cases")


def test_duplicates_are_kept_in_order():
    text = "## Strengths\n- Tidy\n- Tidy\n- Fast\n## Improvements\n- Tests\n"
    assert extract_strengths(text) == ("Tidy", "Tidy", "Fast")


def test_strengths_fallback_to_bullet_lines():
    text = "Here is what I noticed:\n- Uses pathlib\n- Handles unicode\n\nThat's all."
    assert extract_strengths(text) == ("Uses pathlib", "Handles unicode")


def test_improvements_fallback_to_signal_sentences():
    text = "The code works. You should validate the input. It is fast! Consider adding logging?"
    assert extract_improvements(text) == (
        "You should validate the input.",
        "Consider adding logging?",
    )


def test_unstructured_prose_gets_sentinels():
    text = "The program prints a greeting and exits. It is short."
    assert extract_strengths(text) == ("No specific strengths identified",)
    assert extract_improvements(text) == ("No specific improvements suggested",)


def test_empty_text_gets_sentinels():
    assert extract_strengths("") == ("No specific strengths identified",)
    assert extract_improvements(None) == ("No specific improvements suggested",)


def test_heading_without_items_falls_back():
    text = "## Strengths\n\n## Improvements\n- Add tests\n"
    # the empty strengths section falls back to every bullet line
    assert extract_strengths(text) == ("Add tests",)


def test_windows_line_endings():
    text = "## Strengths\r\n- Clean\r\n## Improvements\r\n- Faster IO\r\n"
    assert extract_strengths(text) == ("Clean",)
    assert extract_improvements(text) == ("Faster IO",)


def test_custom_headers():
    cfg = ExtractorConfig(strengths_headers=("what went well",), improvements_headers=("to do",))
    text = "What went well:\n- Tests pass\nTo do:\n- Refactor\n"
    assert extract_section(text, "strengths", cfg) == ("Tests pass",)
    assert extract_section(text, "improvements", cfg) == ("Refactor",)


def test_heading_requires_colon_or_line_end_outside_markdown():
    matcher = HeadingMatcher(("strengths",), ("key",))
    assert matcher.match("## Strengths") == ""
    assert matcher.match("Strengths: fast") == "fast"
    assert matcher.match("2. **3. Key Strengths:**") == ""
    assert matcher.match("## Strengths of the Code") == ""
    assert matcher.match("Strengths are visible throughout the code") is None
    assert matcher.match("**Strengths of the Code**") is None


def test_markdown_heading_with_trailing_words():
    text = "## Strengths of the Code\n- Clear names\n\n## Areas for Improvement\n- Add tests\n"
    assert extract_strengths(text) == ("Clear names",)
    assert extract_improvements(text) == ("Add tests",)


def test_bullet_fallback_accepts_markers_without_space():
    text = "Notes:\n-Uses pathlib\n•Handles unicode\n*emphasis only*\n---\n"
    assert extract_strengths(text) == ("Uses pathlib", "Handles unicode")


def test_section_slice_missing_heading():
    assert section_slice("no headings at all", "strengths") is None


def test_split_items_joins_continuations_and_splits_paragraphs():
    block = "\nIntro line\n- first\n  continued\n\n1. second\n2) third\n"
    assert split_items(block) == ["Intro line", "first continued", "second", "third"]


def test_strategy_order_per_category():
    assert [s.__name__ for s in section_strategies("strengths")] == [
        "structural_split", "bullet_lines", "sentinel",
    ]
    assert [s.__name__ for s in section_strategies("improvements")] == [
        "structural_split", "signal_sentences", "sentinel",
    ]
