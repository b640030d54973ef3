from .evaluation import EvaluationRecord
from .submission import CodeSubmission, ReviewTask

STRENGTHS = "strengths"
IMPROVEMENTS = "improvements"
CATEGORIES = (STRENGTHS, IMPROVEMENTS)

__all__ = [
    "EvaluationRecord",
    "CodeSubmission",
    "ReviewTask",
    "STRENGTHS",
    "IMPROVEMENTS",
    "CATEGORIES",
]
