"""Report labels and collation per language."""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from collation import Collator, FoldingCollator, VietnameseCollator

ENGLISH_MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def english_long_date(day: date) -> str:
    return f"{ENGLISH_MONTHS[day.month - 1]} {day.day}, {day.year}"


def vietnamese_long_date(day: date) -> str:
    return f"{day.day} tháng {day.month}, {day.year}"


@dataclass(frozen=True)
class BookLocale:
    """Everything language-specific the book synthesizer needs."""

    code: str
    chapter_prefix: str  # "GENERATION" in "GENERATION II"
    generation_names: dict[int, str]  # honorifics appended to some chapter titles
    present: str  # open end of a living person's lifespan
    out_of_lineage: str  # note on spouses and children outside the bloodline
    format_date: Callable[[date], str]
    collator: Collator = field(default_factory=FoldingCollator)


ENGLISH = BookLocale(
    code="en",
    chapter_prefix="GENERATION",
    generation_names={0: "FOUNDING ANCESTOR"},
    present="present",
    out_of_lineage="Out of lineage",
    format_date=english_long_date,
    collator=FoldingCollator(),
)

VIETNAMESE = BookLocale(
    code="vi",
    chapter_prefix="ĐỜI THỨ",
    generation_names={0: "THỦY TỔ"},
    present="nay",
    out_of_lineage="Ngoại tộc",
    format_date=vietnamese_long_date,
    collator=VietnameseCollator(),
)

LOCALES = {locale.code: locale for locale in (ENGLISH, VIETNAMESE)}


def get_locale(code: str) -> BookLocale:
    """Look up a locale by language code (e.g. "en", "vi-VN")."""
    locale = LOCALES.get(code.split("-")[0].lower())
    if locale is None:
        raise ValueError(f"Unsupported locale: {code} (available: {', '.join(sorted(LOCALES))})")
    return locale
