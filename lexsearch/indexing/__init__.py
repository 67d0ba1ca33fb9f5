"""Text analysis subsystem: tokenization, stemming, fuzzy matching, synonyms."""

from .analyzers import Token, analyze, remove_accents, tokenize, trim_punctuation
from .fuzzy import similarity
from .stemmer import StemCache, Stemmer, stem_word
from .synonyms import SynonymTable

__all__ = [
    "Token",
    "analyze",
    "tokenize",
    "trim_punctuation",
    "remove_accents",
    "similarity",
    "StemCache",
    "Stemmer",
    "stem_word",
    "SynonymTable",
]
