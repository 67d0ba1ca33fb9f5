"""Static synonym table used during query expansion.

The table maps a term to its related terms. Lookups are symmetric: two
terms are synonyms if either one lists the other.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

import msgspec

logger = logging.getLogger(__name__)

# A handful of common Spanish synonyms, used when no table file is configured
DEFAULT_SYNONYMS: dict[str, list[str]] = {
    "casa": ["hogar", "vivienda", "domicilio"],
    "coche": ["auto", "carro", "automovil"],
    "rapido": ["veloz", "ligero"],
    "grande": ["enorme", "amplio"],
    "pequeño": ["chico", "diminuto"],
    "trabajo": ["empleo", "labor", "oficio"],
    "comienzo": ["inicio", "principio"],
    "final": ["fin", "termino"],
    "bonito": ["lindo", "hermoso", "bello"],
    "hablar": ["conversar", "charlar"],
}


class SynonymTable:
    """Term -> related terms lookup.

    Treated as opaque and side-effect free by the query expander.
    """

    def __init__(self, synonyms: Mapping[str, Iterable[str]] | None = None):
        """Initialize the table.

        Args:
            synonyms: Mapping of term to related terms (default: DEFAULT_SYNONYMS)
        """
        if synonyms is None:
            synonyms = DEFAULT_SYNONYMS
        self.synonyms: dict[str, frozenset[str]] = {
            term.lower(): frozenset(related.lower() for related in terms)
            for term, terms in synonyms.items()
        }

    @classmethod
    def empty(cls) -> "SynonymTable":
        return cls({})

    @classmethod
    def from_file(cls, path: Path) -> "SynonymTable":
        """Load a JSON table of the form {"term": ["related", ...]}.

        A missing or malformed file yields an empty table.
        """
        try:
            data = msgspec.json.decode(Path(path).read_bytes(), type=dict[str, list[str]])
        except (OSError, msgspec.DecodeError, msgspec.ValidationError) as e:
            logger.warning(f"Synonym table {path} not loaded: {e}")
            return cls.empty()
        logger.debug(f"Loaded {len(data)} synonym entries from {path}")
        return cls(data)

    def are_synonyms(self, word1: str, word2: str) -> bool:
        """Check whether two terms are listed as synonyms."""
        return word2 in self.synonyms.get(word1, ()) or word1 in self.synonyms.get(
            word2, ()
        )

    def get_synonyms(self, term: str) -> set[str]:
        """Get all terms related to a term, in both directions."""
        related = set(self.synonyms.get(term, ()))
        related.update(key for key, terms in self.synonyms.items() if term in terms)
        return related

    def __len__(self) -> int:
        return len(self.synonyms)

    __call__ = are_synonyms
