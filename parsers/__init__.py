from .report import extract_evaluation
from .score import extract_score, score_strategies, clamp_score
from .sections import extract_section, extract_strengths, extract_improvements, section_strategies

__all__ = [
    "extract_evaluation",
    "extract_score",
    "score_strategies",
    "clamp_score",
    "extract_section",
    "extract_strengths",
    "extract_improvements",
    "section_strategies",
]
