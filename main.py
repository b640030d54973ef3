import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv, find_dotenv

from agents.reviewer_agent import ReviewerAgent
from models import CodeSubmission, EvaluationRecord
from parsers import extract_evaluation
from tools.export import save_task_json, task_to_dict
from tools.llm_client import LLMClient, LLMError
from tools.store import EvaluationStore
from utils.config import load_config
from utils.logging import setup_logging, get_logger

load_dotenv(find_dotenv(), override=False)


logger = get_logger(__name__)

EXTENSION_LANGUAGES = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".java": "java",
    ".go": "go",
    ".rb": "ruby",
    ".rs": "rust",
    ".c": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
}


def guess_language(path: str) -> str:
    return EXTENSION_LANGUAGES.get(os.path.splitext(path)[1].lower(), "plaintext")


def read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def print_record(record: EvaluationRecord) -> None:
    print(f"\nScore: {record.score:.1f}/10")
    print("\nStrengths:")
    for s in record.strengths:
        print(f"  - {s}")
    print("\nImprovements:")
    for i in record.improvements:
        print(f"  - {i}")


def run_extract(args: argparse.Namespace) -> int:
    cfg = load_config()
    record = extract_evaluation(read_text(args.file), cfg.extractor)
    if args.json:
        print(json.dumps(record.to_row(), indent=2, ensure_ascii=False))
    else:
        print_record(record)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(record.to_row(), f, indent=2, ensure_ascii=False)
    return 0


async def run_review(args: argparse.Namespace) -> int:
    cfg = load_config()
    code = read_text(args.file)
    submission = CodeSubmission.new(
        code,
        args.language or guess_language(args.file),
        title=args.title or os.path.basename(args.file),
        description=args.description,
    )
    store = EvaluationStore()
    task = store.create_task(submission)
    reviewer = ReviewerAgent(LLMClient(cfg), config=cfg.extractor)
    try:
        record = await reviewer.review(submission)
    except (LLMError, ValueError) as e:
        logger.error(f"Review failed: {e}")
        return 1
    task = store.save_evaluation(task.task_id, record, reviewer.model_name)

    if args.json:
        print(json.dumps(task_to_dict(task), indent=2, ensure_ascii=False))
    else:
        print_record(record)
    if args.output:
        save_task_json(task, args.output)
        logger.info(f"Saved evaluation to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI code review evaluator")
    sub = parser.add_subparsers(dest="command", required=True)

    ext = sub.add_parser("extract", help="Extract a structured evaluation from a saved model reply")
    ext.add_argument("file", help="Path to the evaluation text, or - for stdin")

    rev = sub.add_parser("review", help="Review a source file with the configured model")
    rev.add_argument("file", help="Path to the source file, or - for stdin")
    rev.add_argument("--language")
    rev.add_argument("--title")
    rev.add_argument("--description")

    for p in (ext, rev):
        p.add_argument("--json", action="store_true", help="Print JSON instead of a summary")
        p.add_argument("--output", help="Also write the JSON result to this path")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(load_config().log_level, stream=sys.stderr)
    if args.command == "extract":
        return run_extract(args)
    return asyncio.run(run_review(args))


if __name__ == "__main__":
    raise SystemExit(main())
