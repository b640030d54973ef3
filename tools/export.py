from __future__ import annotations

import json
from typing import Any

from models import ReviewTask


def task_to_dict(task: ReviewTask) -> dict[str, Any]:
    sub = task.submission
    return {
        "task_id": task.task_id,
        "submission": {
            "submission_id": sub.submission_id,
            "title": sub.title,
            "description": sub.description,
            "language": sub.language,
            "code": sub.code,
        },
        "model_used": task.model_used,
        "created_at": task.created_at,
        "evaluated_at": task.evaluated_at,
        "evaluation": task.evaluation.to_row() if task.evaluation else None,
    }


def save_task_json(task: ReviewTask, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(task_to_dict(task), f, indent=2, ensure_ascii=False)
