from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
import time
import uuid

from .evaluation import EvaluationRecord


@dataclass
class CodeSubmission:
    submission_id: str
    code: str
    language: str
    title: str = "Untitled"
    description: str = ""
    created_at: float = field(default_factory=time.time)

    @staticmethod
    def new(
        code: str,
        language: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> "CodeSubmission":
        return CodeSubmission(
            submission_id=uuid.uuid4().hex,
            code=code,
            language=(language or "").strip() or "plaintext",
            title=(title or "").strip() or "Untitled",
            description=(description or "").strip(),
        )


@dataclass
class ReviewTask:
    task_id: str
    submission: CodeSubmission
    evaluation: Optional[EvaluationRecord] = None
    model_used: Optional[str] = None
    created_at: float = field(default_factory=time.time)
    evaluated_at: Optional[float] = None

    @staticmethod
    def new(submission: CodeSubmission) -> "ReviewTask":
        return ReviewTask(task_id=uuid.uuid4().hex, submission=submission)

    @property
    def is_evaluated(self) -> bool:
        return self.evaluation is not None

    def attach(self, record: EvaluationRecord, model_used: Optional[str] = None) -> None:
        self.evaluation = record
        self.model_used = model_used
        self.evaluated_at = time.time()
