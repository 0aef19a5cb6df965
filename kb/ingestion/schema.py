"""
SQLite schema of the reference database.

'articles' is an FTS5 table: the service searches it with MATCH and
orders by its built-in rank.
"""

import sqlite3

SCHEMA = """
CREATE TABLE IF NOT EXISTS definitions (
    language TEXT NOT NULL,
    term TEXT NOT NULL,
    definition TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS definitions_term ON definitions (lower(term), language);

CREATE VIRTUAL TABLE IF NOT EXISTS articles USING fts5(
    language UNINDEXED,
    title,
    abstract,
    keywords,
    authors,
    kind UNINDEXED,
    url UNINDEXED
);

CREATE TABLE IF NOT EXISTS gdpr (
    language TEXT NOT NULL,
    article INTEGER NOT NULL,
    clause INTEGER,
    subclause TEXT,
    eli TEXT,
    text TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS gdpr_article ON gdpr (language, article, clause, subclause);

CREATE TABLE IF NOT EXISTS dpa (
    language TEXT NOT NULL,
    country TEXT NOT NULL,
    name TEXT NOT NULL,
    address TEXT,
    tel TEXT,
    fax TEXT,
    email TEXT,
    url TEXT,
    modified TEXT
);
CREATE INDEX IF NOT EXISTS dpa_country ON dpa (lower(country), language);

CREATE TABLE IF NOT EXISTS dpv_terms (
    term TEXT PRIMARY KEY,
    created TEXT,
    term_status TEXT,
    is_sub_type_of TEXT
);
CREATE TABLE IF NOT EXISTS dpv_sources (term TEXT NOT NULL, source TEXT NOT NULL);
CREATE TABLE IF NOT EXISTS dpv_related (term TEXT NOT NULL, related TEXT NOT NULL);
CREATE TABLE IF NOT EXISTS dpv_creators (term TEXT NOT NULL, creator TEXT NOT NULL);
CREATE TABLE IF NOT EXISTS dpv_definitions (term TEXT NOT NULL, language TEXT NOT NULL, definition TEXT NOT NULL);
CREATE TABLE IF NOT EXISTS dpv_notes (term TEXT NOT NULL, language TEXT NOT NULL, note TEXT NOT NULL);
CREATE TABLE IF NOT EXISTS dpv_labels (term TEXT NOT NULL, language TEXT NOT NULL, label TEXT NOT NULL);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    with conn:
        conn.executescript(SCHEMA)
