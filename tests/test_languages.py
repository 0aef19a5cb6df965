"""
Tests for Accept-Language parsing (languages.py).

The parsed order drives every fallback chain in the service, so ties,
malformed entries and missing quality factors are covered explicitly.
"""

import pytest
from kb.languages import parse_entry, parse_languages


# ============================================================
# Ordering
# ============================================================

class TestOrdering:
    """Descending quality, ties kept in input order."""

    def test_sorts_by_quality_and_keeps_ties_in_input_order(self):
        assert parse_languages("fr;q=0.5,en;q=0.5,de;q=0.9") == ["de", "fr", "en"]

    def test_missing_quality_means_one(self):
        assert parse_languages("en;q=0.5, fr") == ["fr", "en"]

    def test_single_language(self):
        assert parse_languages("en") == ["en"]

    def test_duplicates_are_kept(self):
        assert parse_languages("en,en;q=0.2") == ["en", "en"]

    def test_many_ties_never_reorder(self):
        assert parse_languages("nl,fr,de,en") == ["nl", "fr", "de", "en"]

    def test_idempotent_on_canonical_form(self):
        first = parse_languages("fr-be;q=0.3, nl;q=0.8, en")
        assert parse_languages(",".join(first)) == first


# ============================================================
# Leniency
# ============================================================

class TestMalformedEntries:
    """Bad entries are dropped silently; good ones keep their order."""

    def test_drops_malformed_entries(self):
        assert parse_languages("x!!,en;q=0.8,!!!,fr;q=0.9") == ["fr", "en"]

    def test_empty_string_gives_empty_list(self):
        assert parse_languages("") == []

    def test_fully_invalid_gives_empty_list(self):
        assert parse_languages("!!!, 123, *") == []

    def test_none_gives_empty_list(self):
        assert parse_languages(None) == []

    @pytest.mark.parametrize("entry", ["en;q=0", "en;q=1.5", "en;q=1.2.3", "en;q=", "en;x=1"])
    def test_rejects_bad_quality(self, entry):
        assert parse_languages(entry) == []


# ============================================================
# Tag syntax
# ============================================================

class TestTagSyntax:

    def test_lowercases_tags(self):
        assert parse_languages("FR-BE, EN;Q=0.5") == ["fr-be", "en"]

    def test_tolerates_whitespace(self):
        assert parse_languages("  fr ; q = 0.7 ,  en ") == ["en", "fr"]

    def test_parse_entry_keeps_order_and_quality(self):
        language = parse_entry("de;q=0.25", 3)
        assert language.tag == "de"
        assert language.quality == 0.25
        assert language.order == 3

    def test_parse_entry_rejects_region_underscore(self):
        assert parse_entry("en_US", 0) is None
