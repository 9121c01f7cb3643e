"""Inspect a question catalog: steps, required ids and schema size."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from core.errors import SchemaDerivationError
from core.schema import FieldKind, derive_schema
from models.questionnaire import Question
from questions.catalog import load_catalog
from questions.grouping import group_by_category, step_label
from questions.tree import answerable_ids, count_required, required_answerable_ids


def summarize_catalog(questions: Sequence[Question], *, allow_duplicate_ids: bool = False) -> dict[str, Any]:
    """Return a JSON-serialisable overview of ``questions``."""

    schema = derive_schema(questions, allow_duplicate_ids=allow_duplicate_ids)
    steps = [
        {
            "index": index,
            "category": group.category,
            "label": step_label(group.category),
            "questions": len(answerable_ids(group.questions)),
            "required_ids": required_answerable_ids(group.questions),
        }
        for index, group in enumerate(group_by_category(questions))
    ]
    return {
        "steps": steps,
        "total_required": count_required(questions),
        "schema_fields": len(schema),
        "collection_fields": [key for key, rule in schema.items() if rule.kind is FieldKind.COLLECTION],
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Print the catalog summary as JSON.

    Example::

        python -m cli.inspect_catalog --catalog questions/data/risk_questionnaire.json
    """

    parser = argparse.ArgumentParser(description="Inspect a questionnaire catalog")
    parser.add_argument("--catalog", type=Path, help="Path to the catalog JSON (default: bundled demo)")
    parser.add_argument(
        "--allow-duplicates",
        action="store_true",
        help="Warn about duplicate question ids instead of failing",
    )
    args = parser.parse_args(argv)

    try:
        questions = load_catalog(args.catalog)
        summary = summarize_catalog(questions, allow_duplicate_ids=args.allow_duplicates)
    except SchemaDerivationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI convenience
    raise SystemExit(main())
