from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class EvaluationRecord:
    score: float
    strengths: Tuple[str, ...]
    improvements: Tuple[str, ...]
    raw_text: str

    def preview(self, limit: int = 200) -> str:
        if len(self.raw_text) <= limit:
            return self.raw_text
        return self.raw_text[:limit] + "..."

    def to_row(self) -> Dict[str, Any]:
        # Column names of the evaluations table
        return {
            "score": self.score,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "full_evaluation": self.raw_text,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "raw_text": self.raw_text,
        }

    @staticmethod
    def from_row(row: Dict[str, Any]) -> "EvaluationRecord":
        strengths: List[str] = list(row.get("strengths") or [])
        improvements: List[str] = list(row.get("improvements") or [])
        return EvaluationRecord(
            score=float(row.get("score", 5.0)),
            strengths=tuple(strengths),
            improvements=tuple(improvements),
            raw_text=str(row.get("full_evaluation") or ""),
        )
