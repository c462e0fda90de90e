"""
Seed the prompt template and the turning-of-the-year questionnaire.

Replaces the stored `turning_of_year_reading` prompt with the built-in
template and replaces every question in the `turning_of_year` category.

Usage (from repo root):
  python -m clarity.seed --dry-run
  python -m clarity.seed --db data/clarity.db
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .config import get_settings
from .models import QuestionCreate
from .prompting import DEFAULT_PROMPT_TEMPLATE
from .storage.prompts_db import PromptStore
from .storage.questions_db import QuestionStore

log = logging.getLogger("clarity.seed")

DATA_PATH = Path(__file__).resolve().parent / "data" / "turning_of_year.json"


def load_seed_data(path: Path = DATA_PATH) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def seed(db_path: str, dry_run: bool = False, data: Optional[Dict[str, Any]] = None) -> int:
    """Returns the number of questions written (or that would be written)."""
    data = data or load_seed_data()
    category = data["category"]
    questions = [QuestionCreate(category=category, **q) for q in data["questions"]]

    if dry_run:
        log.info("dry run: prompt %s and %d questions in %s", data["prompt_key"], len(questions), category)
        return len(questions)

    prompts = PromptStore(db_path)
    prompts.init_db()
    prompts.upsert(data["prompt_key"], DEFAULT_PROMPT_TEMPLATE)
    log.info("added prompt %s", data["prompt_key"])

    store = QuestionStore(db_path)
    store.init_db()
    removed = store.delete_category(category)
    if removed:
        log.info("removed %d existing %s questions", removed, category)
    for q in questions:
        store.create_question(q)
        log.info("added question: %s", q.text[:50])

    return len(questions)


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--db", help="SQLite file (defaults to CLARITY_DB_PATH)")
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    count = seed(args.db or get_settings().db_path, dry_run=args.dry_run)
    print(f"{'Would seed' if args.dry_run else 'Seeded'} {count} questions")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
