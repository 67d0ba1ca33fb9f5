"""Rule-based Spanish stemmer.

A Snowball-style suffix stripper for Spanish. Three regions are computed
once per word and a fixed pipeline of steps is applied in order (it is not
iterated to a fixpoint):

1. enclitic pronoun removal (``cantándole`` -> ``cantando``)
2. verb suffix removal
3. the non-verb suffix cascade (``-amiento``, ``-ación``, ``-logía``, ...)
4. residual vowel suffixes
5. diacritic removal

Every suffix table is matched longest-first. Results are memoized in a
:class:`StemCache` that callers own and may share between queries.
"""

import threading
import unicodedata
from collections.abc import Iterator, Mapping

from .analyzers import remove_accents

VOWELS = frozenset("aeiouáéíóúü")


def _longest_first(*suffixes: str) -> tuple[str, ...]:
    return tuple(sorted(suffixes, key=len, reverse=True))


PRONOUNS = _longest_first(
    "me", "se", "sela", "selo", "selas", "selos",
    "le", "les", "nos", "te", "la", "lo", "las", "los",
)

# Accented ending before the pronoun -> ending restored once it is dropped
PRE_PRONOUNS = (
    ("iéndo", "iendo"),
    ("ándo", "ando"),
    ("ár", "ar"),
    ("ér", "er"),
    ("ír", "ir"),
)

Y_VERB_SUFFIXES = _longest_first(
    "yeron", "yendo", "yamos", "yais", "yáis",
    "yan", "yen", "yas", "yes", "ya", "ye", "yo", "yó",
)

G_VERB_SUFFIXES = _longest_first("emos", "éis", "en", "es")

VERB_SUFFIXES = _longest_first(
    "aríamos", "eríamos", "iríamos", "iéramos", "iésemos",
    "aríais", "aremos", "asteis", "ábamos", "áramos", "ásemos", "eríais",
    "eremos", "iríais", "iremos", "ierais", "ieseis", "isteis",
    "arían", "arías", "abais", "arais", "aseis", "erían", "erías", "eréis",
    "irían", "irías", "iréis", "ieran", "iesen", "ieron", "iendo", "ieras",
    "ieses", "íamos",
    "arán", "arás", "aban", "aran", "asen", "aron", "aste", "ando", "abas",
    "adas", "aras", "ases", "ados", "amos", "erán", "erás", "ería", "irán",
    "irás", "iría", "iera", "iese", "iste", "idas", "íais", "idos", "imos",
    "ará", "aré", "aba", "ada", "ara", "ase", "ado", "áis", "erá", "eré",
    "irá", "iré", "ida", "ían", "ido", "ías",
    "ad", "an", "ar", "as", "ed", "er", "ía", "id", "ió", "ir", "ís",
)

STANDARD_SUFFIXES = _longest_first(
    "amientos", "imientos", "amiento", "imiento",
    "anzas", "ismos", "ables", "ibles", "istas",
    "anza", "icos", "icas", "ismo", "able", "ible", "ista", "osos", "osas",
    "ico", "ica", "oso", "osa",
)

AGENT_SUFFIXES = _longest_first(
    "aciones", "adoras", "adores", "ancias", "idores", "idoras",
    "adora", "ación", "antes", "ancia", "idora", "acion",
    "ador", "ante", "idor",
)

LOGIA_SUFFIXES = _longest_first("logías", "logias", "logía", "logia")

UCION_SUFFIXES = _longest_first("uciones", "ución", "ucion")

CION_SUFFIXES = _longest_first("ccion", "cción", "cion", "ción", "sion", "sión")

ENCIA_SUFFIXES = _longest_first("encias", "encia", "entes", "ente")

IDAD_SUFFIXES = _longest_first("idades", "idad")

IVO_SUFFIXES = _longest_first("ivas", "ivos", "iva", "ivo")

RESIDUAL_SUFFIXES = _longest_first("os", "al", "a", "o", "á", "í", "ó", "i")

RESIDUAL_E_SUFFIXES = ("e", "é")


class StemCache:
    """Append-only term -> stem memo.

    Keys are never removed and values never change once written, so readers
    need no locking; insertions are serialized.
    """

    def __init__(self, stems: Mapping[str, str] | None = None):
        self._stems: dict[str, str] = dict(stems or {})
        self._lock = threading.Lock()

    def get(self, term: str) -> str | None:
        return self._stems.get(term)

    def add(self, term: str, stem: str) -> str:
        """Record a stem, keeping the first value written for a term."""
        with self._lock:
            return self._stems.setdefault(term, stem)

    def to_dict(self) -> dict[str, str]:
        with self._lock:
            return dict(self._stems)

    def __contains__(self, term: object) -> bool:
        return term in self._stems

    def __len__(self) -> int:
        return len(self._stems)

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())


class Stemmer:
    """Memoizing front end for :func:`stem_word`."""

    def __init__(self, cache: StemCache | None = None):
        self.cache = cache if cache is not None else StemCache()

    def stem(self, word: str) -> str:
        cached = self.cache.get(word)
        if cached is not None:
            return cached
        return self.cache.add(word, stem_word(word))

    __call__ = stem


def stem_word(word: str) -> str:
    """Stem a single lowercase word without memoization."""
    word = unicodedata.normalize("NFC", word)
    r1 = _r1(word)
    r2 = _r2(word, r1)
    rv = _rv(word)

    word = _delete_pronoun(word, rv)
    word = _delete_verb_suffix(word, rv)
    word = _delete_non_verb_suffix(word, r1, r2)
    word = _delete_residual_suffix(word, rv)
    return _strip_diacritics(word)


def _is_vowel(char: str) -> bool:
    return char in VOWELS


def _first_consonant_after_vowel(word: str, start: int) -> int:
    for i in range(max(start, 1), len(word)):
        if not _is_vowel(word[i]) and _is_vowel(word[i - 1]):
            return i
    return len(word)


def _r1(word: str) -> int:
    return _first_consonant_after_vowel(word, 1)


def _r2(word: str, r1: int) -> int:
    return _first_consonant_after_vowel(word, r1 + 1)


def _rv(word: str) -> int:
    if len(word) <= 3:
        return len(word)

    if not _is_vowel(word[1]):
        for i in range(2, len(word)):
            if _is_vowel(word[i]):
                return i + 1

    if _is_vowel(word[0]) and _is_vowel(word[1]):
        for i in range(2, len(word)):
            if not _is_vowel(word[i]):
                return i + 1

    return 3


def _drop(word: str, count: int) -> str:
    return word[: len(word) - count]


def _ends_in_region(word: str, suffix: str, region: int) -> bool:
    return word.endswith(suffix) and len(word) - len(suffix) >= region


def _strip_suffix(word: str, region: int, suffixes: tuple[str, ...]) -> str | None:
    """Remove the longest suffix lying inside the region, None if none did."""
    for suffix in suffixes:
        if _ends_in_region(word, suffix, region):
            return _drop(word, len(suffix))
    return None


def _delete_pronoun(word: str, rv: int) -> str:
    for pronoun in PRONOUNS:
        if not _ends_in_region(word, pronoun, rv):
            continue
        base = _drop(word, len(pronoun))

        for accented, plain in PRE_PRONOUNS:
            if len(base) - len(accented) < rv:
                continue
            ending = base[len(base) - len(accented):]
            if ending in (accented, plain):
                return _drop(base, len(accented)) + plain

        if _ends_in_region(base, "yendo", rv) and base[-6] == "u":
            return base

    return word


def _delete_verb_suffix(word: str, rv: int) -> str:
    for suffix in Y_VERB_SUFFIXES:
        if _ends_in_region(word, suffix, rv):
            if word[-len(suffix) - 1] == "u":
                word = _drop(word, len(suffix))
            break

    stripped = _strip_suffix(word, rv, G_VERB_SUFFIXES)
    if stripped is not None:
        word = stripped
        if len(word) - 1 >= rv and word.endswith("gu"):
            word = word[:-1]

    stripped = _strip_suffix(word, rv, VERB_SUFFIXES)
    return word if stripped is None else stripped


def _delete_non_verb_suffix(word: str, r1: int, r2: int) -> str:
    stripped = _strip_suffix(word, r2, STANDARD_SUFFIXES)
    if stripped is not None:
        word = stripped

    stripped = _strip_suffix(word, r2, AGENT_SUFFIXES)
    if stripped is not None:
        word = stripped
        if _ends_in_region(word, "ic", r2):
            word = word[:-2]

    stripped = _strip_suffix(word, r2, LOGIA_SUFFIXES)
    if stripped is not None:
        word = stripped + "log"

    stripped = _strip_suffix(word, r2, UCION_SUFFIXES)
    if stripped is not None:
        word = stripped + "u"

    for suffixes in (CION_SUFFIXES, ENCIA_SUFFIXES):
        stripped = _strip_suffix(word, r2, suffixes)
        if stripped is not None:
            word = stripped

    if _ends_in_region(word, "amente", r1):
        word = word[:-6]
        if _ends_in_region(word, "iv", r2):
            word = word[:-2]
            if _ends_in_region(word, "at", r2):
                word = word[:-2]
        elif word[-2:] in ("os", "ic", "ad") and len(word) - 2 >= r2:
            word = word[:-2]

    if _ends_in_region(word, "mente", r2):
        word = word[:-5]
        if word[-4:] in ("ante", "able", "ible") and len(word) - 4 >= r2:
            word = word[:-4]

    stripped = _strip_suffix(word, r2, IDAD_SUFFIXES)
    if stripped is not None:
        word = stripped
        if _ends_in_region(word, "abil", r2):
            word = word[:-4]
        elif word[-2:] in ("iv", "ic") and len(word) - 2 >= r2:
            word = word[:-2]

    stripped = _strip_suffix(word, r2, IVO_SUFFIXES)
    if stripped is not None:
        word = stripped
        if _ends_in_region(word, "at", r2):
            word = word[:-2]

    return word


def _delete_residual_suffix(word: str, rv: int) -> str:
    stripped = _strip_suffix(word, rv, RESIDUAL_SUFFIXES)
    if stripped is not None:
        word = stripped

    stripped = _strip_suffix(word, rv, RESIDUAL_E_SUFFIXES)
    if stripped is not None:
        word = stripped
        if len(word) - 1 >= rv and word.endswith("gu"):
            word = word[:-1]

    return word


def _strip_diacritics(word: str) -> str:
    return "".join(char for char in remove_accents(word) if char.isalnum())
