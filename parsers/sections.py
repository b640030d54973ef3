from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from models import IMPROVEMENTS, STRENGTHS
from utils.config import ExtractorConfig
from utils.logging import get_logger
from .strategy import Strategy, first_result


logger = get_logger(__name__)

Statements = Tuple[str, ...]

# "- item", "• item", "* item", "+ item", "1. item", "2) item"
ITEM_MARKER = re.compile(r"^[ \t]*(?:[-•*+]|\d+[.)])[ \t]+")
# "-item" and "•item" are bullets, "*item" is emphasis
BULLET_MARKER = re.compile(r"(?:[-•]|\*(?=\s))\s*")
SEPARATOR = re.compile(r"[-=*_~•#\s]+")
SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
HEADING_MARKS = re.compile(r"#{1,6}")
MARKDOWN_HEADING = re.compile(r"#{1,6}\s+\S")
ORDINAL = re.compile(r"\d+[.)]?\s*")
EMPHASIS = ("**", "__")


def _alternation(labels: Iterable[str]) -> str:
    words = sorted({label.strip().lower() for label in labels if label.strip()}, key=len, reverse=True)
    return "|".join(r"\s+".join(re.escape(w) for w in label.split()) for label in words)


def _strip_emphasis(s: str) -> str:
    for mark in EMPHASIS:
        if s.startswith(mark):
            return s[len(mark):].lstrip()
    return s


def _strip_ordinal(s: str) -> str:
    m = ORDINAL.match(s)
    return s[m.end():] if m else s


class HeadingMatcher:
    """Recognizes a section heading line such as ``## Strengths``,
    ``2. Areas for Improvement:``, ``**Key Strengths:**`` or a bare ``Pros``.

    Outside markdown headings the label must be followed by a colon (inline
    content may follow it) or the end of the line. A markdown heading may
    carry more words after the label (``## Strengths of the Code``).

    Lines are matched one at a time with anchored patterns, so the cost stays
    linear in the line length.
    """

    def __init__(self, labels: Iterable[str], qualifiers: Iterable[str] = ()):
        self.label = re.compile(rf"(?:{_alternation(labels)})\b", re.IGNORECASE)
        quals = _alternation(qualifiers)
        self.qualifier = re.compile(rf"(?:{quals})\s+", re.IGNORECASE) if quals else None

    def match(self, line: str) -> Optional[str]:
        """Return the inline content after the heading ("" when there is
        none), or None when ``line`` is not a heading."""
        s = line.strip()
        marks = HEADING_MARKS.match(s)
        if marks:
            s = s[marks.end():].lstrip()
        s = _strip_ordinal(_strip_emphasis(_strip_ordinal(s)))
        end = self._label_end(s)
        if end is None:
            return None
        rest = _strip_emphasis(s[end:].lstrip())
        if rest.startswith(":"):
            return _strip_emphasis(rest[1:].lstrip())
        if not rest or marks:
            return ""
        return None

    def _label_end(self, s: str) -> Optional[int]:
        m = self.label.match(s)
        if m:
            return m.end()
        q = self.qualifier.match(s) if self.qualifier else None
        if q:
            m = self.label.match(s, q.end())
            if m:
                return m.end()
        return None


def is_markdown_heading(line: str) -> bool:
    return MARKDOWN_HEADING.match(line.strip()) is not None


def section_slice(text: str, category: str, config: Optional[ExtractorConfig] = None) -> Optional[str]:
    cfg = config or ExtractorConfig()
    heading = HeadingMatcher(cfg.headers_for(category), cfg.heading_qualifiers)
    terminator = HeadingMatcher(cfg.terminators_for(category), cfg.heading_qualifiers)
    lines = text.split("\n")
    for i, line in enumerate(lines):
        inline = heading.match(line)
        if inline is None:
            continue
        body = [inline]
        for following in lines[i + 1:]:
            if is_markdown_heading(following) or terminator.match(following) is not None:
                break
            body.append(following)
        return "\n".join(body)
    return None


def normalize_newlines(text: Optional[str]) -> str:
    return (text or "").replace("\r\n", "\n").replace("\r", "\n")


def is_separator(line: str) -> bool:
    return SEPARATOR.fullmatch(line) is not None


def split_items(block: str) -> List[str]:
    """Split a section body into statements.

    A list marker starts a new statement; the lines that directly follow it
    are joined onto it. A blank or separator line closes the current
    statement.
    """
    items: List[str] = []
    current: Optional[List[str]] = None

    def flush() -> None:
        if current:
            statement = " ".join(current).strip()
            if statement and not is_separator(statement):
                items.append(statement)

    for line in block.splitlines():
        stripped = line.strip()
        if not stripped or is_separator(stripped):
            flush()
            current = None
            continue
        marker = ITEM_MARKER.match(line)
        if marker:
            flush()
            current = [line[marker.end():].strip()]
        elif current is None:
            current = [stripped]
        else:
            current.append(stripped)
    flush()
    return items


def _non_empty(items: List[str]) -> Optional[Statements]:
    return tuple(items) if items else None


def section_strategies(category: str, config: Optional[ExtractorConfig] = None) -> List[Strategy[Statements]]:
    cfg = config or ExtractorConfig()
    signal = re.compile(rf"\b(?:{_alternation(cfg.improvement_signals)})", re.IGNORECASE)

    def structural_split(text: str) -> Optional[Statements]:
        block = section_slice(text, category, cfg)
        if block is None:
            return None
        return _non_empty(split_items(block))

    def bullet_lines(text: str) -> Optional[Statements]:
        found: List[str] = []
        for line in text.split("\n"):
            stripped = line.strip()
            marker = BULLET_MARKER.match(stripped)
            if not marker:
                continue
            item = stripped[marker.end():].strip()
            if item and not is_separator(item):
                found.append(item)
        return _non_empty(found)

    def signal_sentences(text: str) -> Optional[Statements]:
        found: List[str] = []
        for line in text.split("\n"):
            for part in SENTENCE_BREAK.split(line.strip()):
                marker = ITEM_MARKER.match(part)
                sentence = (part[marker.end():] if marker else part).strip()
                # only complete sentences count
                if not sentence or sentence[-1] not in ".!?" or is_separator(sentence):
                    continue
                if signal.search(sentence):
                    found.append(sentence)
        return _non_empty(found)

    def sentinel(text: str) -> Optional[Statements]:
        return (cfg.sentinel_for(category),)

    if category == STRENGTHS:
        return [structural_split, bullet_lines, sentinel]
    if category == IMPROVEMENTS:
        return [structural_split, signal_sentences, sentinel]
    raise ValueError(f"Unknown category: {category}")


def extract_section(text: Optional[str], category: str, config: Optional[ExtractorConfig] = None) -> Statements:
    cfg = config or ExtractorConfig()
    name, statements = first_result(section_strategies(category, cfg), normalize_newlines(text))
    if not statements:
        name, statements = "sentinel", (cfg.sentinel_for(category),)
    if name == "sentinel":
        logger.info(f"No {category} found in evaluation text")
    else:
        logger.debug(f"{len(statements)} {category} found by {name}")
    return statements


def extract_strengths(text: Optional[str], config: Optional[ExtractorConfig] = None) -> Statements:
    return extract_section(text, STRENGTHS, config)


def extract_improvements(text: Optional[str], config: Optional[ExtractorConfig] = None) -> Statements:
    return extract_section(text, IMPROVEMENTS, config)
