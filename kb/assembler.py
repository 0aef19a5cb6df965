"""
Record Assembly for the knowledge base.

Turns store rows into JSON-LD records:
- Simple entities (definitions, news articles, GDPR clauses, DPAs) map one
  row to one record, each wrapped in its own @context so that language and
  vocabulary travel with the record.
- A DPV term is assembled from one core row plus independently queried
  facets (sources, related terms, creators, definitions, notes, labels).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from kb.fallback import Row, first_available
from kb.models import LegalReference, expand_term
from kb.namespaces import (
    DC_CREATED, DC_CREATOR, DC_SOURCE, DPV, DPV_CONCEPT, DPV_ISSUBTYPEOF,
    NS_ARTICLES, NS_DEFINITIONS, NS_DPA, NS_GDPR, RDF_ISDEFINEDBY,
    SCHEMA_DATE, SKOS_CONCEPT, SKOS_DEFINITION, SKOS_INSCHEME, SKOS_NOTE,
    SKOS_PREFLABEL, SKOS_RELATED, SW_TERMSTATUS,
)
from kb.store import KnowledgeStore

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


# --- Envelope ---

def envelope(language: str, vocab: str) -> Record:
    return {"@context": {"@language": language, "@vocab": vocab}}


# --- Simple Entities ---

def definition_record(row: Row) -> Record:
    return {
        **envelope(row["language"], NS_DEFINITIONS),
        "term": row["term"],
        "definition": row["definition"],
    }


def article_record(row: Row) -> Record:
    return {
        **envelope(row["language"], NS_ARTICLES),
        "title": row["title"],
        "abstract": row["abstract"],
        "keywords": row["keywords"],
        "authors": row["authors"],
        "kind": row["kind"],
        "url": row["url"],
    }


def legal_clause_record(row: Row) -> Record:
    """The 'n' field is the citation rebuilt from the row, e.g. '30(1)(g)'."""
    reference = LegalReference(
        article=row["article"],
        clause=row["clause"],
        subclause=row["subclause"],
    )
    return {
        **envelope(row["language"], NS_GDPR),
        "n": reference.citation,
        "eli": row["eli"],
        "text": row["text"],
    }


def directory_record(row: Row) -> Record:
    return {
        **envelope(row["language"], NS_DPA),
        "country": row["country"],
        "name": row["name"],
        "address": row["address"],
        "tel": row["tel"],
        "fax": row["fax"],
        "email": row["email"],
        "url": row["url"],
        "modified": row["modified"],
    }


# --- JSON-LD value lists ---

def references(rows: Sequence[Row], column: str) -> List[Record]:
    return [{"@id": row[column]} for row in rows]


def plain_literals(rows: Sequence[Row], column: str) -> List[Record]:
    return [{"@value": row[column]} for row in rows]


def tagged_literals(rows: Sequence[Row], column: str) -> List[Record]:
    return [{"@language": row["language"], "@value": row[column]} for row in rows]


# --- DPV Terms ---

FACET_QUERIES = {
    "sources": "SELECT source FROM dpv_sources WHERE term = :t",
    "related": "SELECT related FROM dpv_related WHERE term = :t",
    "creators": "SELECT creator FROM dpv_creators WHERE term = :t",
}

LANGUAGE_FACET_QUERIES = {
    "definitions": "SELECT language, definition FROM dpv_definitions WHERE term = :t AND language = :l",
    "notes": "SELECT language, note FROM dpv_notes WHERE term = :t AND language = :l",
    "labels": "SELECT language, label FROM dpv_labels WHERE term = :t AND language = :l",
}

CORE_QUERY = """SELECT term, created, term_status, is_sub_type_of
    FROM dpv_terms WHERE term = :t"""


def vocabulary_term_record(core: Row, facets: Mapping[str, Sequence[Row]]) -> Record:
    """
    Merges a core dpv_terms row and its facet rows into one JSON-LD node.

    Every predicate is always present. A facet without rows gives an
    empty list.
    """
    def facet(name: str) -> Sequence[Row]:
        return facets.get(name) or []

    super_type = core.get("is_sub_type_of")

    return {
        "@id": core["term"],
        "@type": [SKOS_CONCEPT, DPV_CONCEPT],
        DC_CREATED: [{"@type": SCHEMA_DATE, "@value": core.get("created")}],
        DC_CREATOR: plain_literals(facet("creators"), "creator"),
        DC_SOURCE: references(facet("sources"), "source"),
        RDF_ISDEFINEDBY: [{"@id": DPV}],
        SW_TERMSTATUS: [{"@language": "en", "@value": core.get("term_status")}],
        SKOS_DEFINITION: tagged_literals(facet("definitions"), "definition"),
        SKOS_INSCHEME: [{"@id": DPV}],
        SKOS_NOTE: tagged_literals(facet("notes"), "note"),
        SKOS_PREFLABEL: tagged_literals(facet("labels"), "label"),
        SKOS_RELATED: references(facet("related"), "related"),
        DPV_ISSUBTYPEOF: [{"@id": super_type}] if super_type else [],
    }


def fetch_facets(store: KnowledgeStore, languages: Sequence[str], term: str) -> Dict[str, List[Row]]:
    """
    Runs every facet query for one term URI.

    Language-tagged facets each run their own fallback chain, so the
    definition may come back in French while the label is in English.
    """
    facets = {
        name: store.query(sql, {"t": term})
        for name, sql in FACET_QUERIES.items()
    }
    for name, sql in LANGUAGE_FACET_QUERIES.items():
        facets[name] = first_available(
            languages,
            lambda lang, sql=sql: store.query(sql, {"t": term, "l": lang}),
        )
    return facets


def assemble_vocabulary_term(
    store: KnowledgeStore, languages: Sequence[str], term: str
) -> Optional[List[Record]]:
    """
    Builds the JSON-LD records for a DPV term.

    Args:
        term: A full URI or a bare DPV local name.

    Returns:
        One record per core row, or None if the term has no core row
        (facet rows alone do not make a term exist).
    """
    uri = expand_term(term)

    core_rows = store.query(CORE_QUERY, {"t": uri})
    if not core_rows:
        logger.info(f"No DPV term '{uri}'")
        return None

    facets = fetch_facets(store, languages, uri)
    return [vocabulary_term_record(core, facets) for core in core_rows]
