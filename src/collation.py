"""Locale-aware name collation for the book's name index."""

import unicodedata
from abc import ABC, abstractmethod
from typing import Any

from unidecode import unidecode

# Vietnamese letters, with the Latin letters Vietnamese lacks (f, j, w, z)
# slotted into their usual places for foreign names.
VIETNAMESE_ALPHABET = "aăâbcdđeêfghijklmnoôơpqrstuưvwxyz"

# Combining marks that turn a base vowel into a distinct letter.
LETTER_MODIFIERS = {
    ("a", "\u0306"): "ă",
    ("a", "\u0302"): "â",
    ("e", "\u0302"): "ê",
    ("o", "\u0302"): "ô",
    ("o", "\u031b"): "ơ",
    ("u", "\u031b"): "ư",
}

# Tone marks, weighted in dictionary order: ngang (none), huyền, hỏi, ngã, sắc, nặng.
TONE_WEIGHTS = {
    "\u0300": 1,  # grave
    "\u0309": 2,  # hook above
    "\u0303": 3,  # tilde
    "\u0301": 4,  # acute
    "\u0323": 5,  # dot below
}

_LETTER_RANK = {ch: i for i, ch in enumerate(VIETNAMESE_ALPHABET)}


class Collator(ABC):
    """Orders strings for a given language."""

    @abstractmethod
    def sort_key(self, text: str) -> Any:
        """Return a key such that sorting by it yields collation order."""

    def compare(self, a: str, b: str) -> int:
        key_a, key_b = self.sort_key(a), self.sort_key(b)
        return (key_a > key_b) - (key_a < key_b)

    def sorted(self, items, key=lambda item: item):
        return sorted(items, key=lambda item: self.sort_key(key(item)))


class FoldingCollator(Collator):
    """
    Generic Latin-script collation.

    Letters are compared with diacritics folded away first, then accents break
    ties, then case.
    """

    def sort_key(self, text: str) -> tuple[str, str, str]:
        decomposed = unicodedata.normalize("NFD", text)
        return (unidecode(text).casefold(), decomposed.casefold(), decomposed.swapcase())


class VietnameseCollator(Collator):
    """
    Vietnamese collation.

    ă, â, đ, ê, ô, ơ and ư are letters of their own and sort after their base
    letter. Tone marks only decide between names that are otherwise equal,
    then lowercase sorts before uppercase.
    """

    def sort_key(self, text: str) -> tuple[tuple, tuple, tuple]:
        primary: list[tuple[int, int]] = []
        tones: list[int] = []
        cases: list[int] = []

        for ch in unicodedata.normalize("NFD", text):
            if unicodedata.combining(ch):
                if not primary:
                    continue
                base = VIETNAMESE_ALPHABET[primary[-1][1]] if primary[-1][0] == 2 else None
                letter = LETTER_MODIFIERS.get((base, ch)) if base else None
                if letter:
                    primary[-1] = (2, _LETTER_RANK[letter])
                elif ch in TONE_WEIGHTS:
                    tones[-1] = TONE_WEIGHTS[ch]
                else:
                    # Marks foreign to Vietnamese still outrank a bare letter
                    tones[-1] = max(tones[-1], 10 + ord(ch))
                continue

            lower = ch.lower()
            primary.append(_primary_weight(lower))
            tones.append(0)
            cases.append(0 if ch == lower else 1)

        return (tuple(primary), tuple(tones), tuple(cases))


def _primary_weight(ch: str) -> tuple[int, int]:
    if ch in _LETTER_RANK:
        return (2, _LETTER_RANK[ch])
    if ch.isdigit():
        return (1, int(ch) if ch.isdecimal() else ord(ch))
    if ch.isalpha():
        return (3, ord(ch))
    # Spaces and punctuation sort before everything else
    return (0, ord(ch))
