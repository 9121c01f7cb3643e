"""Load question catalogs from JSON payloads."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.errors import SchemaDerivationError
from models.questionnaire import Question, QuestionCatalog

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "risk_questionnaire.json"


def _format_location(location: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in location) or "<root>"


def parse_catalog(payload: Any) -> list[Question]:
    """Validate ``payload`` (a list or ``{"questions": [...]}``) into questions.

    Raises:
        SchemaDerivationError: If any node is malformed, e.g. carries an
            unknown ``responseType``.
    """

    if isinstance(payload, list):
        payload = {"questions": payload}
    try:
        catalog = QuestionCatalog.model_validate(payload)
    except ValidationError as exc:
        problems = {_format_location(error["loc"]): error["msg"] for error in exc.errors()}
        summary = "; ".join(f"{loc}: {msg}" for loc, msg in problems.items())
        raise SchemaDerivationError(f"Invalid question catalog: {summary}", details=problems) from exc
    return list(catalog.questions)


def load_catalog(path: Path | str | None = None) -> list[Question]:
    """Read and validate the catalog stored at ``path`` (default: bundled demo)."""

    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        with catalog_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise SchemaDerivationError(f"Failed to load catalog {catalog_path}: {exc}") from exc
    questions = parse_catalog(payload)
    logger.info("Loaded %d top-level questions from %s", len(questions), catalog_path)
    return questions


__all__ = ["DEFAULT_CATALOG_PATH", "load_catalog", "parse_catalog"]
