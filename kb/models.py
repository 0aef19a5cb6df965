"""
Data Contracts for the privacy knowledge-base service.

These Pydantic models enforce type safety across the whole request path:
Language negotiation → Citation parsing → Lookup → Ingestion.

"""

import re
from pydantic import BaseModel, Field, field_validator, model_validator, computed_field
from typing import Dict, List, Mapping, Optional, Tuple

from kb.namespaces import DPV


# Accepts "30", "30(1)" and "30(1)(g)". The subclause is only reachable
# after a clause.
CITATION_PATTERN = re.compile(r"^\s*(\d+)(?:\((\d+)\)(?:\((\w)\))?)?\s*$")

ABSOLUTE_URI_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def expand_term(term: str) -> str:
    """Prefixes a bare DPV local name with the DPV namespace."""
    if term.startswith(DPV) or ABSOLUTE_URI_PATTERN.match(term):
        return term
    return DPV + term


class WeightedLanguage(BaseModel):
    """One accepted language while an Accept-Language string is being parsed."""
    tag: str = Field(..., pattern=r"^[a-z-]+$", description="Lowercased language tag.")
    quality: float = Field(1.0, gt=0.0, le=1.0)
    order: int = Field(..., ge=0, description="Position in the raw header.")

    @field_validator('tag', mode='before')
    @classmethod
    def lowercase_tag(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class LegalReference(BaseModel):
    """
    A parsed citation into the GDPR, e.g. "30(1)(g)".
    Clause and subclause are progressively optional.
    """
    article: int = Field(..., ge=0)
    clause: Optional[int] = Field(None, ge=0)
    subclause: Optional[str] = None

    @model_validator(mode='after')
    def subclause_requires_clause(self) -> "LegalReference":
        if self.subclause is not None and self.clause is None:
            raise ValueError("A subclause cannot be given without a clause.")
        return self

    @classmethod
    def parse(cls, citation: str) -> "LegalReference":
        """
        Parses a citation string.

        Raises:
            ValueError: if the string does not follow digits[(digits)[(word)]].
        """
        match = CITATION_PATTERN.match(citation or "")
        if not match:
            raise ValueError(f"Malformed citation: '{citation}'")
        article, clause, subclause = match.groups()
        return cls(
            article=int(article),
            clause=int(clause) if clause is not None else None,
            subclause=subclause,
        )

    @computed_field
    def citation(self) -> str:
        """Rebuilds the canonical citation string."""
        n = str(self.article)
        if self.clause is not None:
            n += f"({self.clause})"
        if self.subclause is not None:
            n += f"({self.subclause})"
        return n


class RequestContext(BaseModel):
    """
    Everything a resolver may read about the current request.
    Built once at the boundary and never mutated.
    """
    action: Optional[str] = None
    languages: Tuple[str, ...] = ()
    params: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def param(self, name: str) -> Optional[str]:
        return self.params.get(name)


# --- Ingestion Contracts ---

class _LanguageTagged(BaseModel):
    language: str = Field(..., min_length=1)

    @field_validator('language')
    @classmethod
    def normalize_language(cls, v: str) -> str:
        return v.strip().lower()


class DefinitionEntry(_LanguageTagged):
    """A term and its definition in one language."""
    term: str = Field(..., min_length=1)
    definition: str

    @field_validator('definition')
    @classmethod
    def validate_definition(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Definition is empty.")
        return v


class NewsArticle(_LanguageTagged):
    """An online article or news item indexed for full-text search."""
    title: str = Field(..., min_length=1)
    abstract: str = ""
    keywords: str = ""
    authors: str = ""
    kind: str = ""
    url: Optional[str] = None


class LegalClause(_LanguageTagged):
    """One article, clause or subclause of the GDPR in one language."""
    article: int = Field(..., ge=0)
    clause: Optional[int] = Field(None, ge=0)
    subclause: Optional[str] = None
    eli: Optional[str] = None
    text: str = Field(..., min_length=1)

    @model_validator(mode='after')
    def subclause_requires_clause(self) -> "LegalClause":
        if self.subclause is not None and self.clause is None:
            raise ValueError("A subclause cannot be given without a clause.")
        return self


class DirectoryEntry(_LanguageTagged):
    """Contact details of a Data Protection Authority."""
    country: str = Field(..., min_length=2)
    name: str = Field(..., min_length=1)
    address: Optional[str] = None
    tel: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[str] = None
    url: Optional[str] = None
    modified: Optional[str] = None


class VocabularyEntry(BaseModel):
    """
    A DPV term with all its facets, as given in the dataset.
    Language-keyed facets map a language tag to one or more texts.
    """
    term: str = Field(..., min_length=1)
    created: Optional[str] = None
    status: Optional[str] = None
    sub_type_of: Optional[str] = None
    sources: List[str] = Field(default_factory=list)
    related: List[str] = Field(default_factory=list)
    creators: List[str] = Field(default_factory=list)
    definitions: Dict[str, List[str]] = Field(default_factory=dict)
    notes: Dict[str, List[str]] = Field(default_factory=dict)
    labels: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator('term')
    @classmethod
    def expand_term_uri(cls, v: str) -> str:
        return expand_term(v.strip())

    @field_validator('definitions', 'notes', 'labels', mode='before')
    @classmethod
    def wrap_single_texts(cls, v):
        """Accepts {"en": "text"} as shorthand for {"en": ["text"]}."""
        if isinstance(v, Mapping):
            return {
                lang.lower(): [texts] if isinstance(texts, str) else texts
                for lang, texts in v.items()
            }
        return v
