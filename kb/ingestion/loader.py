"""
Ingestion Pipeline for the knowledge base.

Builds the read-only SQLite database the service queries:
- Validation of every dataset entry against the Pydantic contracts
- Batch inserts with progress reporting
- Atomic replacement (the database is built next to the target, then swapped in)

Dataset format (JSON):
    {
      "definitions": [{"language", "term", "definition"}, ...],
      "articles":    [{"language", "title", "abstract", ...}, ...],
      "gdpr":        [{"language", "article", "clause", "subclause", "eli", "text"}, ...],
      "dpa":         [{"language", "country", "name", ...}, ...],
      "dpv":         [{"term", "created", "status", "sub_type_of",
                       "sources", "related", "creators",
                       "definitions": {"en": "..."}, "notes": {...}, "labels": {...}}, ...]
    }
"""

import argparse
import json
import logging
import os
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Type

from pydantic import BaseModel
from tqdm import tqdm

from kb.config import settings
from kb.ingestion.schema import create_schema
from kb.models import DefinitionEntry, DirectoryEntry, LegalClause, NewsArticle, VocabularyEntry

logger = logging.getLogger(__name__)


INSERTS = {
    "definitions": "INSERT INTO definitions (language, term, definition) VALUES (:language, :term, :definition)",
    "articles": """INSERT INTO articles (language, title, abstract, keywords, authors, kind, url)
        VALUES (:language, :title, :abstract, :keywords, :authors, :kind, :url)""",
    "gdpr": """INSERT INTO gdpr (language, article, clause, subclause, eli, text)
        VALUES (:language, :article, :clause, :subclause, :eli, :text)""",
    "dpa": """INSERT INTO dpa (language, country, name, address, tel, fax, email, url, modified)
        VALUES (:language, :country, :name, :address, :tel, :fax, :email, :url, :modified)""",
    "dpv_terms": """INSERT INTO dpv_terms (term, created, term_status, is_sub_type_of)
        VALUES (:term, :created, :term_status, :is_sub_type_of)""",
    "dpv_sources": "INSERT INTO dpv_sources (term, source) VALUES (:term, :source)",
    "dpv_related": "INSERT INTO dpv_related (term, related) VALUES (:term, :related)",
    "dpv_creators": "INSERT INTO dpv_creators (term, creator) VALUES (:term, :creator)",
    "dpv_definitions": "INSERT INTO dpv_definitions (term, language, definition) VALUES (:term, :language, :definition)",
    "dpv_notes": "INSERT INTO dpv_notes (term, language, note) VALUES (:term, :language, :note)",
    "dpv_labels": "INSERT INTO dpv_labels (term, language, label) VALUES (:term, :language, :label)",
}

SIMPLE_SECTIONS: Sequence[Tuple[str, Type[BaseModel]]] = (
    ("definitions", DefinitionEntry),
    ("articles", NewsArticle),
    ("gdpr", LegalClause),
    ("dpa", DirectoryEntry),
)


def validate_section(items: Iterable[Mapping[str, Any]], model: Type[BaseModel]) -> List[BaseModel]:
    """Validates raw entries. A single invalid entry aborts the load (ValidationError)."""
    return [model(**item) for item in items]


def flatten_vocabulary(entries: Sequence[VocabularyEntry]) -> Dict[str, List[Dict[str, Any]]]:
    """Splits nested DPV entries into the rows of the dpv_* tables."""
    rows: Dict[str, List[Dict[str, Any]]] = {
        table: [] for table in INSERTS if table.startswith("dpv_")
    }

    for entry in entries:
        term = entry.term
        rows["dpv_terms"].append({
            "term": term,
            "created": entry.created,
            "term_status": entry.status,
            "is_sub_type_of": entry.sub_type_of,
        })
        rows["dpv_sources"].extend({"term": term, "source": s} for s in entry.sources)
        rows["dpv_related"].extend({"term": term, "related": r} for r in entry.related)
        rows["dpv_creators"].extend({"term": term, "creator": c} for c in entry.creators)

        for column, facet in (("definition", entry.definitions), ("note", entry.notes), ("label", entry.labels)):
            table = f"dpv_{column}s"
            for language, texts in facet.items():
                rows[table].extend({"term": term, "language": language, column: t} for t in texts)

    return rows


def insert_batches(conn: sqlite3.Connection, table: str, rows: Sequence[Mapping[str, Any]]) -> int:
    sql = INSERTS[table]
    for i in tqdm(range(0, len(rows), settings.BATCH_SIZE), desc=f"Loading {table}", disable=not rows):
        conn.executemany(sql, rows[i : i + settings.BATCH_SIZE])
    return len(rows)


def build_database(db_path: Path, dataset: Mapping[str, Any]) -> Dict[str, int]:
    """
    Validates `dataset` and writes it to a fresh database at `db_path`.

    Returns:
        Number of rows written per table.
    """
    # 1. Validate everything before touching the filesystem
    tables: Dict[str, List[Dict[str, Any]]] = {}
    for section, model in SIMPLE_SECTIONS:
        entries = validate_section(dataset.get(section, []), model)
        tables[section] = [e.model_dump() for e in entries]
    tables.update(flatten_vocabulary(validate_section(dataset.get("dpv", []), VocabularyEntry)))

    # 2. Build next to the target, then swap in
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = db_path.with_name(db_path.name + ".tmp")
    if tmp_path.exists():
        tmp_path.unlink()

    counts = {}
    conn = sqlite3.connect(str(tmp_path))
    try:
        create_schema(conn)
        with conn:
            for table, rows in tables.items():
                counts[table] = insert_batches(conn, table, rows)
    finally:
        conn.close()

    os.replace(tmp_path, db_path)
    logger.info(f"Database written to {db_path}: {counts}")
    return counts


def load_dataset(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found at: {path}")

    logger.info(f"Loading dataset from {path}...")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: Sequence[str] = None) -> int:
    """Entry point: dataset JSON → SQLite database."""
    parser = argparse.ArgumentParser(
        prog="kb-load",
        description="Build the knowledge-base database from a JSON dataset",
    )
    parser.add_argument("dataset", type=Path, nargs="?", default=settings.DATASET_FILE)
    parser.add_argument("--output", type=Path, default=settings.DATABASE_PATH)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    try:
        dataset = load_dataset(args.dataset)
        build_database(args.output, dataset)
    except Exception as e:
        logger.critical(f"Database build failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
