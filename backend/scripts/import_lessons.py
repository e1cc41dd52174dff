#!/usr/bin/env python3
"""
Import lesson documents from JSON files into the lessons collection.

Features
- Scans a directory (default: lessons/) for *.json files
- Each file holds one lesson object or a list of them
- Filters via --only/--exclude (substring match against filename or title)
- --dry-run prints what would be stored without touching the database

Lessons go through LessonRepository.create, so every imported document gets
the same defaults as one submitted through the API.

Examples
  # Preview everything under lessons/
  python scripts/import_lessons.py --dry-run

  # Import only lessons whose title or filename mentions "gratitude"
  DB_URL=mongodb://localhost:27017 python scripts/import_lessons.py --only gratitude
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from inner_circle.db import DocumentStore  # noqa: E402
from inner_circle.logging_utils import setup_logging  # noqa: E402
from inner_circle.repositories import LessonRepository  # noqa: E402

logger = logging.getLogger("import_lessons")


def find_lesson_files(root: Path) -> list[Path]:
    return sorted(p for p in root.glob("*.json") if p.is_file())


def load_lessons(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    raise ValueError(f"{path.name}: expected a JSON object or list of objects")


def filter_lessons(
    entries: Iterable[tuple[Path, dict[str, Any]]],
    only: list[str],
    exclude: list[str],
) -> list[tuple[Path, dict[str, Any]]]:
    def match_any(path: Path, lesson: dict[str, Any], needles: list[str]) -> bool:
        hay = f"{path.name} {lesson.get('title') or ''}".lower()
        return any(n.lower() in hay for n in needles)

    out: list[tuple[Path, dict[str, Any]]] = []
    for path, lesson in entries:
        if only and not match_any(path, lesson, only):
            continue
        if exclude and match_any(path, lesson, exclude):
            continue
        out.append((path, lesson))
    return out


def import_lessons(
    repo: LessonRepository | None,
    entries: list[tuple[Path, dict[str, Any]]],
    *,
    dry_run: bool,
) -> int:
    imported = 0
    for i, (path, lesson) in enumerate(entries, start=1):
        title = lesson.get("title") or "(untitled)"
        if dry_run:
            print(f"[{i}/{len(entries)}] would import {title!r} from {path.name}")
            continue
        if repo is None:
            raise RuntimeError("a LessonRepository is required unless dry_run is set")
        created = repo.create(lesson)
        imported += 1
        print(f"[{i}/{len(entries)}] imported {title!r} as {created['_id']}")
    return imported


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Import lessons from JSON files")
    ap.add_argument("--dir", default="lessons", help="Directory with lesson JSON files")
    ap.add_argument("--only", action="append", default=[], help="Only import lessons matching this (title or filename). Can be repeated.")
    ap.add_argument("--exclude", action="append", default=[], help="Skip lessons matching this (title or filename). Can be repeated.")
    ap.add_argument("--dry-run", action="store_true", help="List lessons without writing them.")
    args = ap.parse_args(argv)

    setup_logging()
    root = Path(args.dir).resolve()
    if not root.exists():
        raise SystemExit(f"Lesson directory not found: {root}")

    entries = [(path, lesson) for path in find_lesson_files(root) for lesson in load_lessons(path)]
    entries = filter_lessons(entries, args.only, args.exclude)
    if not entries:
        print("No lessons found.")
        return 0

    print(f"Found {len(entries)} lesson(s) under {root}")
    if args.dry_run:
        import_lessons(None, entries, dry_run=True)
        return 0

    store = DocumentStore.from_settings()
    try:
        count = import_lessons(LessonRepository(store), entries, dry_run=False)
    finally:
        store.close()
    logger.info("Lesson import finished", extra={"imported": count})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
