"""
Shared fixtures: a small but realistic reference dataset, built into a
temporary SQLite database through the real ingestion pipeline.
"""

import copy
import pytest

from kb.ingestion.loader import build_database
from kb.namespaces import DPV
from kb.store import KnowledgeStore


DATASET = {
    "definitions": [
        {"language": "en", "term": "Consent", "definition": "Freely given, specific, informed agreement."},
        {"language": "en", "term": "Data breach", "definition": "A breach of security leading to disclosure."},
        {"language": "en", "term": "Controller", "definition": "The body that determines the purposes."},
        {"language": "fr", "term": "Controller", "definition": "L'organisme qui détermine les finalités."},
    ],
    "articles": [
        {"language": "en", "title": "Consent under the GDPR", "abstract": "When is consent valid?",
         "keywords": "consent", "authors": "A. Author", "kind": "news", "url": "https://example.org/consent"},
        {"language": "en", "title": "Handling a data breach", "abstract": "Notify within 72 hours.",
         "keywords": "breach", "authors": "B. Author", "kind": "guide", "url": "https://example.org/breach"},
        {"language": "fr", "title": "Le registre des traitements", "abstract": "Tenir un registre.",
         "keywords": "registre", "authors": "C. Auteur", "kind": "news", "url": "https://example.org/registre"},
    ],
    "gdpr": [
        {"language": "en", "article": 5, "clause": None, "subclause": None,
         "eli": "http://data.europa.eu/eli/reg/2016/679/art_5/oj", "text": "Principles relating to processing."},
        {"language": "en", "article": 30, "clause": 2, "subclause": None,
         "eli": "http://data.europa.eu/eli/reg/2016/679/art_30/par_2/oj", "text": "Each processor shall maintain a record."},
        {"language": "en", "article": 30, "clause": 1, "subclause": "g",
         "eli": "http://data.europa.eu/eli/reg/2016/679/art_30/par_1/pnt_g/oj", "text": "a general description of the security measures"},
        {"language": "en", "article": 30, "clause": 1, "subclause": "a",
         "eli": "http://data.europa.eu/eli/reg/2016/679/art_30/par_1/pnt_a/oj", "text": "the name and contact details of the controller"},
        {"language": "fr", "article": 30, "clause": 1, "subclause": "g",
         "eli": "http://data.europa.eu/eli/reg/2016/679/art_30/par_1/pnt_g/oj", "text": "une description générale des mesures de sécurité"},
    ],
    "dpa": [
        {"language": "en", "country": "BE", "name": "Data Protection Authority",
         "address": "Rue de la Presse 35, Brussels", "email": "contact@apd-gba.be", "url": "https://www.dataprotectionauthority.be"},
        {"language": "fr", "country": "BE", "name": "Autorité de protection des données",
         "address": "Rue de la Presse 35, Bruxelles", "email": "contact@apd-gba.be", "url": "https://www.autoriteprotectiondonnees.be"},
        {"language": "en", "country": "NL", "name": "Dutch Data Protection Authority",
         "address": "Bezuidenhoutseweg 30, The Hague", "url": "https://autoriteitpersoonsgegevens.nl"},
        {"language": "en", "country": "IE", "name": "Data Protection Commission",
         "address": "21 Fitzwilliam Square South, Dublin", "url": "https://www.dataprotection.ie"},
    ],
    "dpv": [
        {
            "term": "Purpose",
            "created": "2019-04-05",
            "status": "accepted",
            "sub_type_of": DPV + "Concept",
            "sources": ["https://eur-lex.europa.eu/eli/reg/2016/679/oj"],
            "related": ["https://w3id.org/dpv#Processing"],
            "creators": ["Axel Polleres", "Harshvardhan J. Pandit"],
            "definitions": {"en": "Purpose or Goal of processing data", "fr": "Finalité du traitement"},
            "notes": {"en": ["The purpose is the reason data is processed."]},
            "labels": {"en": "Purpose"},
        },
        {
            "term": "Bare",
            "created": "2022-01-19",
            "status": "proposed",
        },
    ],
}


@pytest.fixture
def dataset():
    return copy.deepcopy(DATASET)


@pytest.fixture
def db_path(tmp_path, dataset):
    path = tmp_path / "kb.db"
    build_database(path, dataset)
    return path


@pytest.fixture
def store(db_path):
    with KnowledgeStore(db_path) as s:
        yield s
