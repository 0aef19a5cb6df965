"""
Action Resolvers for the knowledge base.

One routine per action. Each takes the store and the request context and
returns a JSON-serializable payload, or raises a KnowledgeBaseError.
Parameters are validated before any query runs.
"""

import logging
import os
import re
import sqlite3
from enum import Enum
from typing import Any, Callable, Dict, List

from kb import messages
from kb.assembler import (
    Record, article_record, assemble_vocabulary_term, definition_record,
    directory_record, legal_clause_record,
)
from kb.errors import MalformedParameter, MissingParameter, NotFound, StoreUnavailable
from kb.fallback import first_available, with_sentinel
from kb.models import LegalReference, RequestContext
from kb.store import KnowledgeStore

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Actions the service answers, by their name on the wire."""
    SEARCH = "search"
    DEFINITIONS = "definitions"
    ARTICLES = "articles"
    LEGAL_ARTICLE = "gdpr"
    DIRECTORY_ENTRY = "dpa"
    VOCABULARY_TERM = "dpv"
    STATUS = "status"


# A word is delimited by commas, semicolons or white space, unless it is
# a phrase between double quotes.
WORD_SPLIT_PATTERN = re.compile(r'[,;\s]*"([^"]+)"[,;\s]*|[,;\s]+')


def split_words(words: str) -> List[str]:
    """'consent, "data breach"' → ['consent', 'data breach']"""
    return [w for w in WORD_SPLIT_PATTERN.split(words) if w]


def fts_any_of(words: List[str]) -> str:
    """['consent', 'data breach'] → '"consent" OR "data breach"'"""
    return " OR ".join('"' + w.replace('"', '""') + '"' for w in words)


# Errors SQLite reports for a MATCH expression it cannot parse, e.g.
# 'data-breach' (syntax) or 'gdpr:art' (column filter on an unknown column).
FTS_QUERY_ERRORS = ("fts5: syntax error", "no such column")


def is_fts_query_error(error: BaseException) -> bool:
    return isinstance(error, sqlite3.OperationalError) and str(error).startswith(FTS_QUERY_ERRORS)


def _required(context: RequestContext, name: str, message: str) -> str:
    value = context.param(name)
    if value is None:
        raise MissingParameter(message, detail=f"Missing '{name}' parameter")
    return value


def _required_words(context: RequestContext) -> str:
    words = context.param("words")
    if words is None or not words.strip():
        raise MissingParameter(messages.MISSING_WORDS, detail="Missing 'words' parameter")
    return words


# --- Lookups shared by several actions ---

def find_definitions(store: KnowledgeStore, languages, term: str) -> List[Record]:
    rows = first_available(languages, lambda lang: store.query(
        """SELECT language, term, definition FROM definitions
        WHERE lower(:t) = lower(term) AND language = :l""",
        {"t": term, "l": lang},
    ))
    return [definition_record(row) for row in rows]


def find_articles(store: KnowledgeStore, languages, fts_query: str) -> List[Record]:
    """
    `fts_query` uses the SQLite FTS5 query syntax; ordering is the store's rank.

    Raises:
        MalformedParameter: if SQLite rejects `fts_query` itself.
    """
    try:
        rows = first_available(languages, lambda lang: store.query(
            """SELECT language, title, abstract, keywords, authors, kind, url
            FROM articles WHERE language = :l AND articles MATCH :w ORDER BY rank""",
            {"w": fts_query, "l": lang},
        ))
    except StoreUnavailable as e:
        if not is_fts_query_error(e.__cause__):
            raise
        raise MalformedParameter(messages.INVALID_WORDS, detail=str(e.__cause__)) from e
    return [article_record(row) for row in rows]


# --- Resolvers ---

def resolve_definitions(store: KnowledgeStore, context: RequestContext) -> Dict[str, Any]:
    term = _required(context, "term", messages.MISSING_TERM)
    return {"definitions": find_definitions(store, context.languages, term)}


def resolve_articles(store: KnowledgeStore, context: RequestContext) -> Dict[str, Any]:
    words = _required_words(context)
    return {"articles": find_articles(store, context.languages, words)}


def resolve_search(store: KnowledgeStore, context: RequestContext) -> Dict[str, Any]:
    """
    Definitions for every word (in word order, not deduplicated), plus the
    articles matching any of the words.
    """
    words = split_words(_required_words(context))

    info = {"definitions": [], "articles": []}
    for word in words:
        info["definitions"].extend(find_definitions(store, context.languages, word))

    if words:
        info["articles"].extend(find_articles(store, context.languages, fts_any_of(words)))

    return info


def resolve_legal_article(store: KnowledgeStore, context: RequestContext) -> List[Record]:
    citation = _required(context, "article", messages.MISSING_ARTICLE)
    try:
        reference = LegalReference.parse(citation)
    except ValueError as e:
        raise MalformedParameter(messages.INVALID_ARTICLE, detail=str(e)) from e

    sql = """SELECT language, article, clause, subclause, eli, text FROM gdpr
        WHERE language = :l AND article = :a"""
    params = {"a": reference.article}
    if reference.clause is not None:
        sql += " AND clause = :c"
        params["c"] = reference.clause
    if reference.subclause is not None:
        sql += " AND subclause = :s"
        params["s"] = reference.subclause
    sql += " ORDER BY clause, subclause"

    rows = first_available(context.languages, lambda lang: store.query(sql, {**params, "l": lang}))
    if not rows:
        raise NotFound(messages.NO_SUCH_ARTICLE, detail=f"No article {reference.citation}")
    return [legal_clause_record(row) for row in rows]


DPA_COLUMNS = "language, country, name, address, tel, fax, email, url, modified"


def resolve_directory_entry(store: KnowledgeStore, context: RequestContext) -> List[Record]:
    """
    Looks a DPA up by country code, else by partial name, else lists every
    DPA in English. The preferred languages are tried with English forced
    in last place.
    """
    country = context.param("country")
    name = context.param("name")

    languages = with_sentinel(context.languages)
    if country is not None:
        sql = f"SELECT {DPA_COLUMNS} FROM dpa WHERE lower(country) = lower(:country) AND language = :l"
        params = {"country": country}
    elif name is not None:
        escaped = name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        sql = (f"SELECT {DPA_COLUMNS} FROM dpa WHERE lower(name) LIKE lower(:pattern) ESCAPE '\\'"
               " AND language = :l")
        params = {"pattern": f"%{escaped}%"}
    else:
        sql = f"SELECT {DPA_COLUMNS} FROM dpa WHERE language = :l"
        params = {}
        languages = with_sentinel([])

    rows = first_available(languages, lambda lang: store.query(sql, {**params, "l": lang}))
    if not rows:
        raise NotFound(messages.NO_SUCH_DPA, detail="No matching DPA")
    return [directory_record(row) for row in rows]


def resolve_vocabulary_term(store: KnowledgeStore, context: RequestContext) -> List[Record]:
    term = _required(context, "term", messages.MISSING_DPV_TERM)
    records = assemble_vocabulary_term(store, context.languages, term)
    if records is None:
        raise NotFound(messages.NO_SUCH_DPV, detail=f"No DPV term '{term}'")
    return records


def resolve_status(store: KnowledgeStore, context: RequestContext) -> Dict[str, Any]:
    return {"status": {"langs": list(context.languages), "cwd": os.getcwd()}}


Resolver = Callable[[KnowledgeStore, RequestContext], Any]

RESOLVERS: Dict[Action, Resolver] = {
    Action.SEARCH: resolve_search,
    Action.DEFINITIONS: resolve_definitions,
    Action.ARTICLES: resolve_articles,
    Action.LEGAL_ARTICLE: resolve_legal_article,
    Action.DIRECTORY_ENTRY: resolve_directory_entry,
    Action.VOCABULARY_TERM: resolve_vocabulary_term,
    Action.STATUS: resolve_status,
}
