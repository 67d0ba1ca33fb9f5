"""Query parsing and expansion."""

from .expander import (
    STEM_AFFINITY,
    SYNONYM_AFFINITY,
    Query,
    QueryExpander,
    word_proximity,
)
from .parser import ParsedQuery, QueryParser

__all__ = [
    "ParsedQuery",
    "QueryParser",
    "Query",
    "QueryExpander",
    "word_proximity",
    "STEM_AFFINITY",
    "SYNONYM_AFFINITY",
]
