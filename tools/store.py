from __future__ import annotations

import threading
from typing import Dict, List, Optional

from models import CodeSubmission, EvaluationRecord, ReviewTask
from utils.logging import get_logger


logger = get_logger(__name__)


class TaskNotFoundError(KeyError):
    pass


class EvaluationExistsError(Exception):
    pass


class EvaluationStore:
    """In-memory task/evaluation store. Each task accepts exactly one evaluation."""

    def __init__(self) -> None:
        self._tasks: Dict[str, ReviewTask] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def create_task(self, submission: CodeSubmission) -> ReviewTask:
        task = ReviewTask.new(submission)
        with self._lock:
            self._tasks[task.task_id] = task
        logger.debug(f"Created task {task.task_id} for submission {submission.submission_id}")
        return task

    def save_evaluation(self, task_id: str, record: EvaluationRecord, model_used: Optional[str] = None) -> ReviewTask:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            if task.is_evaluated:
                raise EvaluationExistsError(f"task {task_id} already has an evaluation")
            task.attach(record, model_used)
        logger.info(f"Saved evaluation for task {task_id} score={record.score}")
        return task

    def get(self, task_id: str) -> ReviewTask:
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def list_tasks(self) -> List[ReviewTask]:
        with self._lock:
            tasks = list(self._tasks.values())
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)
