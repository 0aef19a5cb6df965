"""
Language Fallback.

The single policy every language-sensitive lookup follows: try the
preferred languages in order and commit to the first one that yields any
row. Rows from two different languages are never mixed.
"""

import logging
from typing import Any, Callable, List, Mapping, Sequence

from kb.config import settings

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
LanguageQuery = Callable[[str], Sequence[Row]]


def first_available(languages: Sequence[str], query: LanguageQuery) -> List[Row]:
    """
    Runs `query(lang)` for each language until one returns rows.

    Args:
        languages: Preference-ordered language tags.
        query: Single-language lookup.

    Returns:
        The rows of the first language with any result, or [] if none has.
    """
    for lang in languages:
        rows = list(query(lang))
        if rows:
            logger.debug(f"Resolved {len(rows)} row(s) in language '{lang}'")
            return rows
    return []


def with_sentinel(languages: Sequence[str], sentinel: str = None) -> List[str]:
    """
    Appends the forced fallback language to a preference list.

    The sentinel is appended even if the list already contains it, so it is
    always the last language tried.
    """
    return list(languages) + [sentinel or settings.DIRECTORY_FALLBACK_LANGUAGE]
