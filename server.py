from __future__ import annotations

from typing import Any, Dict, List, Optional
import time

from dotenv import load_dotenv, find_dotenv
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from agents.reviewer_agent import ReviewerAgent
from models import CodeSubmission, EvaluationRecord, ReviewTask
from tools.export import task_to_dict
from tools.llm_client import LLMClient, LLMError
from tools.store import EvaluationExistsError, EvaluationStore, TaskNotFoundError
from utils.config import load_config
from utils.logging import get_logger, setup_logging
from utils.telemetry import Telemetry

load_dotenv(find_dotenv(), override=False)

CONFIG = load_config()
setup_logging(CONFIG.log_level)
logger = get_logger(__name__)

app = FastAPI(title="Code Review Evaluator")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.start_time = time.time()
app.state.telemetry = Telemetry()
app.state.store = EvaluationStore()
app.state.reviewer = None


class ExtractReq(BaseModel):
    text: str


class EvaluationResp(BaseModel):
    score: float
    strengths: List[str]
    improvements: List[str]
    full_evaluation: str


class EvaluateReq(BaseModel):
    code: str
    language: str = "plaintext"
    title: Optional[str] = None
    description: Optional[str] = None


class TaskSummaryResp(BaseModel):
    task_id: str
    title: str
    language: str
    model_used: Optional[str] = None
    score: Optional[float] = None
    strengths: List[str] = []
    improvements: List[str] = []
    preview: str = ""
    created_at: float


class TaskDetailResp(TaskSummaryResp):
    code: str
    description: str
    full_evaluation: Optional[str] = None


class HealthResp(BaseModel):
    status: str
    uptime_seconds: float
    tasks: int
    telemetry: Dict[str, Any]


class VersionResp(BaseModel):
    version: str
    api: str


def get_store() -> EvaluationStore:
    return app.state.store


def get_reviewer() -> ReviewerAgent:
    if app.state.reviewer is None:
        app.state.reviewer = ReviewerAgent(
            LLMClient(CONFIG),
            config=CONFIG.extractor,
            telemetry=app.state.telemetry,
        )
    return app.state.reviewer


def _record_resp(record: EvaluationRecord) -> EvaluationResp:
    return EvaluationResp(**record.to_row())


def _summary(task: ReviewTask) -> TaskSummaryResp:
    record = task.evaluation
    return TaskSummaryResp(
        task_id=task.task_id,
        title=task.submission.title,
        language=task.submission.language,
        model_used=task.model_used,
        score=record.score if record else None,
        strengths=list(record.strengths) if record else [],
        improvements=list(record.improvements) if record else [],
        preview=record.preview(CONFIG.preview_chars) if record else "",
        created_at=task.created_at,
    )


@app.get("/health", response_model=HealthResp)
async def health(store: EvaluationStore = Depends(get_store)) -> HealthResp:
    return HealthResp(
        status="ok",
        uptime_seconds=round(time.time() - app.state.start_time, 3),
        tasks=len(store),
        telemetry=app.state.telemetry.snapshot(),
    )


@app.get("/version", response_model=VersionResp)
async def version() -> VersionResp:
    return VersionResp(version="0.1.0", api="v1")


@app.post("/api/extract", response_model=EvaluationResp)
async def extract(req: ExtractReq, reviewer: ReviewerAgent = Depends(get_reviewer)) -> EvaluationResp:
    return _record_resp(reviewer.extract(req.text))


@app.post("/api/evaluations", response_model=TaskSummaryResp)
async def create_evaluation(
    req: EvaluateReq,
    store: EvaluationStore = Depends(get_store),
    reviewer: ReviewerAgent = Depends(get_reviewer),
) -> TaskSummaryResp:
    if not req.code.strip():
        raise HTTPException(status_code=400, detail="Code is required")

    submission = CodeSubmission.new(req.code, req.language, req.title, req.description)
    task = store.create_task(submission)
    try:
        record = await reviewer.review(submission)
    except LLMError as e:
        logger.error(f"Evaluation failed for task {task.task_id}: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to evaluate code: {e}")

    try:
        task = store.save_evaluation(task.task_id, record, reviewer.model_name)
    except EvaluationExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _summary(task)


@app.get("/api/evaluations", response_model=List[TaskSummaryResp])
async def list_evaluations(store: EvaluationStore = Depends(get_store)) -> List[TaskSummaryResp]:
    return [_summary(t) for t in store.list_tasks()]


@app.get("/api/evaluations/{task_id}", response_model=TaskDetailResp)
async def get_evaluation(task_id: str, store: EvaluationStore = Depends(get_store)) -> TaskDetailResp:
    try:
        task = store.get(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="evaluation not found")
    summary = _summary(task)
    return TaskDetailResp(
        **summary.model_dump(),
        code=task.submission.code,
        description=task.submission.description,
        full_evaluation=task.evaluation.raw_text if task.evaluation else None,
    )


@app.get("/api/evaluations/{task_id}/export")
async def export_evaluation(task_id: str, store: EvaluationStore = Depends(get_store)) -> dict:
    try:
        return task_to_dict(store.get(task_id))
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="evaluation not found")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
