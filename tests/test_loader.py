"""
Tests for the ingestion pipeline (loader.py).

Strategy: build real SQLite files under tmp_path. A bad entry must abort
the build before anything is written.
"""

import json
import sqlite3
import pytest
from pydantic import ValidationError

from kb.ingestion.loader import build_database, flatten_vocabulary, load_dataset, main
from kb.models import VocabularyEntry
from kb.namespaces import DPV


def count(db_path, table):
    conn = sqlite3.connect(db_path)
    try:
        return conn.execute(f"SELECT count(*) FROM {table}").fetchone()[0]
    finally:
        conn.close()


# ============================================================
# build_database
# ============================================================

class TestBuildDatabase:

    def test_counts_per_table(self, tmp_path, dataset):
        counts = build_database(tmp_path / "kb.db", dataset)
        assert counts["definitions"] == 4
        assert counts["articles"] == 3
        assert counts["gdpr"] == 5
        assert counts["dpa"] == 4
        assert counts["dpv_terms"] == 2
        assert counts["dpv_creators"] == 2

    def test_rows_are_written(self, db_path):
        assert count(db_path, "gdpr") == 5
        assert count(db_path, "dpv_definitions") == 2

    def test_invalid_entry_aborts_before_writing(self, tmp_path, dataset):
        dataset["gdpr"].append({"language": "en", "article": 1, "subclause": "a", "text": "Orphan subclause."})
        target = tmp_path / "kb.db"
        with pytest.raises(ValidationError):
            build_database(target, dataset)
        assert not target.exists()

    def test_rebuild_replaces_database(self, tmp_path, dataset):
        target = tmp_path / "kb.db"
        build_database(target, dataset)
        build_database(target, {"definitions": dataset["definitions"][:1]})
        assert count(target, "definitions") == 1
        assert count(target, "gdpr") == 0
        assert not (tmp_path / "kb.db.tmp").exists()

    def test_missing_sections_are_empty(self, tmp_path):
        counts = build_database(tmp_path / "kb.db", {})
        assert set(counts.values()) == {0}


# ============================================================
# DPV flattening
# ============================================================

class TestFlattenVocabulary:

    def test_facets_become_rows(self):
        entry = VocabularyEntry(
            term="Purpose", status="accepted",
            creators=["Ada"], definitions={"en": "Goal", "fr": "But"}, labels={"en": "Purpose"},
        )
        rows = flatten_vocabulary([entry])

        assert rows["dpv_terms"] == [{"term": DPV + "Purpose", "created": None,
                                      "term_status": "accepted", "is_sub_type_of": None}]
        assert rows["dpv_creators"] == [{"term": DPV + "Purpose", "creator": "Ada"}]
        assert {r["language"] for r in rows["dpv_definitions"]} == {"en", "fr"}
        assert rows["dpv_labels"] == [{"term": DPV + "Purpose", "language": "en", "label": "Purpose"}]
        assert rows["dpv_notes"] == []


# ============================================================
# Entry point
# ============================================================

class TestMain:

    def test_missing_dataset_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "missing.json")

    def test_main_builds_database(self, tmp_path, dataset):
        source = tmp_path / "dataset.json"
        source.write_text(json.dumps(dataset), encoding="utf-8")
        target = tmp_path / "out" / "kb.db"

        assert main([str(source), "--output", str(target)]) == 0
        assert count(target, "dpa") == 4

    def test_main_reports_failure(self, tmp_path):
        assert main([str(tmp_path / "missing.json"), "--output", str(tmp_path / "kb.db")]) == 1
