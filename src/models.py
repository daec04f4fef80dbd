"""Data classes for family register records and the derived book."""

from dataclasses import dataclass, field
from typing import Mapping

GENDER_FEMALE = 0
GENDER_MALE = 1
GENDER_UNKNOWN = 2

# Resolved generation per person handle. Read-only once built.
GenerationMap = Mapping[str, int]


@dataclass
class Person:
    handle: str
    display_name: str
    gender: int = GENDER_UNKNOWN
    birth_year: int | None = None
    death_year: int | None = None
    is_living: bool = False
    is_patrilineal: bool = False
    families: list[str] = field(default_factory=list)  # unions where this person is a parent
    parent_families: list[str] = field(default_factory=list)  # unions where this person is a child
    generation: int | None = None  # 1-based hint from the record store


@dataclass
class FamilyUnion:
    handle: str
    father_handle: str | None = None
    mother_handle: str | None = None
    children: list[str] = field(default_factory=list)  # birth order


@dataclass(frozen=True)
class BookChild:
    name: str
    years: str
    note: str | None = None


@dataclass(frozen=True)
class BookUnion:
    spouse_name: str | None
    spouse_years: str | None
    spouse_note: str | None
    children: tuple[BookChild, ...]


@dataclass(frozen=True)
class BookPerson:
    handle: str
    name: str
    gender: int
    birth_year: int | None
    death_year: int | None
    is_living: bool
    is_patrilineal: bool
    generation: int
    father_name: str | None = None
    mother_name: str | None = None
    spouse_name: str | None = None
    spouse_years: str | None = None
    spouse_note: str | None = None
    children: tuple[BookChild, ...] = ()
    unions: tuple[BookUnion, ...] = ()
    child_index: int | None = None  # 1-based birth order in the first parent union


@dataclass(frozen=True)
class BookChapter:
    generation: int
    title: str
    roman_numeral: str
    members: tuple[BookPerson, ...]


@dataclass(frozen=True)
class NameIndexEntry:
    name: str
    generation: int
    is_patrilineal: bool


@dataclass(frozen=True)
class BookData:
    family_name: str
    export_date: str
    total_generations: int
    total_members: int
    total_patrilineal: int
    chapters: tuple[BookChapter, ...]
    name_index: tuple[NameIndexEntry, ...]
