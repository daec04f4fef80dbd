"""Tests for name collation."""

import random
import unicodedata

import pytest

from collation import FoldingCollator, VietnameseCollator
from locales import get_locale


@pytest.fixture
def vi():
    return VietnameseCollator()


def shuffled(items, seed=7):
    items = list(items)
    random.Random(seed).shuffle(items)
    return items


class TestVietnameseCollator:
    def test_modified_vowels_follow_their_base_letter(self, vi):
        expected = [
            "An", "Ăn", "Ân", "Bình", "Dũng", "Đức", "Em", "Ê-đê", "Ô", "Ơn", "Uyên", "Ưng", "Vân",
        ]  # fmt: skip
        assert vi.sorted(shuffled(expected)) == expected

    def test_tones_are_secondary(self, vi):
        expected = ["ma", "mà", "mả", "mã", "má", "mạ"]
        assert vi.sorted(shuffled(expected)) == expected

    def test_letters_outweigh_tones(self, vi):
        # "mạ" carries the heaviest tone but "mb" differs in a letter
        assert vi.sorted(["mb", "mạ"]) == ["mạ", "mb"]

    def test_stacked_marks(self, vi):
        # ệ is e + circumflex + dot below, ự is u + horn + dot below
        assert vi.sorted(["Tự", "Tu", "Tư", "Tú"]) == ["Tu", "Tú", "Tư", "Tự"]
        assert vi.sorted(["Hệ", "He", "Hê", "Hẹ"]) == ["He", "Hẹ", "Hê", "Hệ"]

    def test_lowercase_before_uppercase(self, vi):
        assert vi.sorted(["An", "an"]) == ["an", "An"]

    def test_shorter_name_first(self, vi):
        assert vi.sorted(["Hoàng Anh", "Hoàng An"]) == ["Hoàng An", "Hoàng Anh"]
        assert vi.sorted(["Lee", "Le Van"]) == ["Le Van", "Lee"]

    def test_composed_and_decomposed_input_agree(self, vi):
        composed = unicodedata.normalize("NFC", "Nguye\u0302\u0303n")
        decomposed = unicodedata.normalize("NFD", composed)
        assert composed != decomposed
        assert vi.compare(composed, decomposed) == 0

    def test_compare(self, vi):
        assert vi.compare("Ân", "An") == 1
        assert vi.compare("An", "Ân") == -1
        assert vi.compare("An", "An") == 0

    def test_foreign_accents_still_break_ties(self, vi):
        assert vi.sorted(["Zoë", "Zoe"]) == ["Zoe", "Zoë"]


class TestFoldingCollator:
    def test_accents_fold_to_base_letters(self):
        collator = FoldingCollator()
        assert collator.sorted(["Zoë", "Émile", "Eve", "Adam"]) == ["Adam", "Émile", "Eve", "Zoë"]

    def test_accent_breaks_tie(self):
        collator = FoldingCollator()
        assert collator.sorted(["résumé", "resume"]) == ["resume", "résumé"]

    def test_sorted_with_key(self):
        collator = FoldingCollator()
        rows = [{"name": "Ōsaka"}, {"name": "Nara"}]
        assert collator.sorted(rows, key=lambda row: row["name"]) == [
            {"name": "Nara"},
            {"name": "Ōsaka"},
        ]


class TestLocales:
    def test_lookup(self):
        assert get_locale("vi").code == "vi"
        assert get_locale("vi-VN").code == "vi"
        assert get_locale("EN").code == "en"
        assert isinstance(get_locale("vi").collator, VietnameseCollator)

    def test_unknown_locale(self):
        with pytest.raises(ValueError, match="Unsupported locale"):
            get_locale("fr")
