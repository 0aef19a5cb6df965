"""
Language Negotiation.

Turns a raw Accept-Language string ("fr;q=0.5, en;q=0.5, de;q=0.9") into
the ordered list of language tags every resolver tries in turn.
"""

import logging
import re
from typing import List, Optional

from pydantic import ValidationError

from kb.models import WeightedLanguage

logger = logging.getLogger(__name__)

ENTRY_PATTERN = re.compile(r"^\s*([a-z-]+)\s*(?:;\s*q\s*=\s*([0-9.]+))?\s*$", re.IGNORECASE)


def parse_entry(entry: str, order: int) -> Optional[WeightedLanguage]:
    """
    Parses one comma-separated entry ("tag" or "tag;q=0.8").

    Returns None when the entry does not follow the grammar or its
    quality factor is not in (0, 1].
    """
    match = ENTRY_PATTERN.match(entry)
    if not match:
        return None

    tag, quality = match.groups()
    try:
        return WeightedLanguage(
            tag=tag,
            quality=float(quality) if quality is not None else 1.0,
            order=order,
        )
    except (ValueError, ValidationError):
        return None


def parse_languages(header: str) -> List[str]:
    """
    Parses an Accept-Language string into language tags, best first.

    Malformed entries are skipped silently. Entries with equal quality keep
    their relative input order (sorted() is stable). An empty or fully
    invalid string yields an empty list; substituting a default language
    is the caller's job.
    """
    weighted = []
    for order, entry in enumerate((header or "").split(",")):
        language = parse_entry(entry, order)
        if language is None:
            if entry.strip():
                logger.debug(f"Skipping malformed language entry: '{entry}'")
            continue
        weighted.append(language)

    weighted = sorted(weighted, key=lambda lang: -lang.quality)
    return [lang.tag for lang in weighted]
