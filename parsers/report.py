from __future__ import annotations

from typing import Optional, Union

from models import EvaluationRecord
from utils.config import ExtractorConfig
from .score import extract_score
from .sections import extract_improvements, extract_strengths


def as_text(raw: Union[str, bytes, None]) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw if isinstance(raw, str) else str(raw)


def extract_evaluation(
    raw: Union[str, bytes, None],
    config: Optional[ExtractorConfig] = None,
) -> EvaluationRecord:
    """Turn a model's free-text code review into an :class:`EvaluationRecord`.

    Pure and safe to call from any thread. Text without any recognizable
    structure yields the default score and the sentinel statements; the raw
    text is kept unmodified on the record.
    """
    cfg = config or ExtractorConfig()
    text = as_text(raw)
    return EvaluationRecord(
        score=extract_score(text, cfg),
        strengths=extract_strengths(text, cfg),
        improvements=extract_improvements(text, cfg),
        raw_text=text,
    )
