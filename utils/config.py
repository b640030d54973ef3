from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple
import os


DEFAULT_STRENGTHS_HEADERS: Tuple[str, ...] = ("strengths", "strength", "pros")
DEFAULT_IMPROVEMENTS_HEADERS: Tuple[str, ...] = (
    "areas for improvement",
    "area for improvement",
    "improvements",
    "improvement",
    "weaknesses",
    "cons",
)
DEFAULT_TERMINATOR_HEADERS: Tuple[str, ...] = (
    "suggestions",
    "recommendations",
    "conclusion",
    "detailed analysis",
    "analysis",
    "summary",
)
DEFAULT_IMPROVEMENT_SIGNALS: Tuple[str, ...] = (
    "improve",
    "consider",
    "recommend",
    "suggest",
    "better",
    "should",
    "avoid",
)


@dataclass(frozen=True)
class ExtractorConfig:
    strengths_headers: Tuple[str, ...] = DEFAULT_STRENGTHS_HEADERS
    improvements_headers: Tuple[str, ...] = DEFAULT_IMPROVEMENTS_HEADERS
    terminator_headers: Tuple[str, ...] = DEFAULT_TERMINATOR_HEADERS
    improvement_signals: Tuple[str, ...] = DEFAULT_IMPROVEMENT_SIGNALS
    heading_qualifiers: Tuple[str, ...] = ("key", "main", "major", "notable", "potential", "suggested")
    default_score: float = 5.0
    min_score: float = 1.0
    max_score: float = 10.0
    strengths_sentinel: str = "No specific strengths identified"
    improvements_sentinel: str = "No specific improvements suggested"

    def headers_for(self, category: str) -> Tuple[str, ...]:
        if category == "strengths":
            return self.strengths_headers
        if category == "improvements":
            return self.improvements_headers
        raise ValueError(f"Unknown category: {category}")

    def terminators_for(self, category: str) -> Tuple[str, ...]:
        other = "improvements" if category == "strengths" else "strengths"
        return self.headers_for(other) + self.terminator_headers

    def sentinel_for(self, category: str) -> str:
        if category == "strengths":
            return self.strengths_sentinel
        if category == "improvements":
            return self.improvements_sentinel
        raise ValueError(f"Unknown category: {category}")


@dataclass
class AppConfig:
    openai_api_key: Optional[str]
    anthropic_api_key: Optional[str]
    model_preference: str
    request_timeout_seconds: int
    max_retries: int
    log_level: str
    preview_chars: int = 200
    extractor: ExtractorConfig = field(default_factory=ExtractorConfig)


def _csv_env(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    items = tuple(part.strip().lower() for part in raw.split(",") if part.strip())
    return items or default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def load_extractor_config() -> ExtractorConfig:
    return ExtractorConfig(
        strengths_headers=_csv_env("EXTRACTOR_STRENGTHS_HEADERS", DEFAULT_STRENGTHS_HEADERS),
        improvements_headers=_csv_env("EXTRACTOR_IMPROVEMENTS_HEADERS", DEFAULT_IMPROVEMENTS_HEADERS),
        terminator_headers=_csv_env("EXTRACTOR_TERMINATOR_HEADERS", DEFAULT_TERMINATOR_HEADERS),
        default_score=_float_env("EXTRACTOR_DEFAULT_SCORE", 5.0),
    )


def load_config() -> AppConfig:
    return AppConfig(
        openai_api_key=(
            os.getenv("OPENAI_API_KEY")
            or os.getenv("OPENAI_KEY")
        ),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        model_preference=os.getenv("MODEL_PREFERENCE", "openai:gpt-4o-mini"),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT_SECONDS", "60")),
        max_retries=int(os.getenv("MAX_RETRIES", "3")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        preview_chars=int(os.getenv("PREVIEW_CHARS", "200")),
        extractor=load_extractor_config(),
    )
