from __future__ import annotations

from typing import Optional

from models import CodeSubmission, EvaluationRecord
from parsers import extract_evaluation
from utils.config import ExtractorConfig
from utils.telemetry import Telemetry
from .base_agent import BaseAgent, CompletionClient


REVIEWER_SYSTEM = (
    "You are an expert code reviewer. Evaluate code for quality, readability, correctness, "
    "performance and best practices. Be specific and reference the code where possible."
)


def build_review_prompt(submission: CodeSubmission) -> str:
    return (
        "Please evaluate the following code for quality, best practices, and potential improvements.\n"
        f"Code Title: {submission.title}\n"
        f"Description: {submission.description or 'No description provided'}\n"
        f"Language: {submission.language}\n\n"
        f"```{submission.language}\n{submission.code}\n```\n\n"
        "Structure your evaluation with these sections:\n"
        "1. A score from 1-10, written as **N/10**\n"
        "2. ## Strengths, as a bulleted list\n"
        "3. ## Areas for Improvement, as a bulleted list\n"
        "4. ## Suggestions, with specific better practices\n"
    )


class ReviewerAgent(BaseAgent):
    def __init__(
        self,
        llm: CompletionClient,
        config: Optional[ExtractorConfig] = None,
        telemetry: Optional[Telemetry] = None,
        name: str = "reviewer",
    ):
        super().__init__(name, "Reviews submitted code and extracts a structured evaluation", llm, telemetry)
        self.config = config or ExtractorConfig()

    @property
    def model_name(self) -> str:
        return getattr(self.llm, "model_name", "unknown")

    async def review(self, submission: CodeSubmission) -> EvaluationRecord:
        if not submission.code or not submission.code.strip():
            raise ValueError("Code is required")
        self.logger.info(
            f"Reviewing submission {submission.submission_id} ({submission.language}, {len(submission.code)} chars)"
        )
        raw = await self.acomplete(REVIEWER_SYSTEM, build_review_prompt(submission))
        return self.extract(raw)

    def extract(self, raw: Optional[str]) -> EvaluationRecord:
        self.telemetry.incr("extractions")
        with self.telemetry.timer("extract_ms"):
            record = extract_evaluation(raw, self.config)
        self.logger.info(
            f"Extracted score={record.score} strengths={len(record.strengths)} improvements={len(record.improvements)}"
        )
        return record
