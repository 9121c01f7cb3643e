from __future__ import annotations

import json
from pathlib import Path

from cli.inspect_catalog import main, summarize_catalog
from questions.catalog import load_catalog


def test_summarize_bundled_catalog() -> None:
    summary = summarize_catalog(load_catalog())

    assert [step["label"] for step in summary["steps"]][:2] == ["Organization", "Security tools"]
    assert summary["total_required"] == 14
    assert summary["steps"][2]["required_ids"] == ["4", "22", "20", "13", "14"]
    assert summary["collection_fields"] == ["100", "3", "6"]


def test_main_prints_json(capsys) -> None:
    exit_code = main([])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["schema_fields"] == 18


def test_main_reports_duplicates(tmp_path: Path, capsys) -> None:
    path = tmp_path / "dupes.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "category": "a", "responseType": "text"},
                {"id": 1, "category": "b", "responseType": "text"},
            ]
        ),
        encoding="utf-8",
    )

    assert main(["--catalog", str(path)]) == 1
    assert "Duplicate question ids" in capsys.readouterr().err
    assert main(["--catalog", str(path), "--allow-duplicates"]) == 0
