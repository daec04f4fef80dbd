"""Assemble the generation-chaptered family book from resolved generations."""

import logging
from datetime import datetime

from collation import Collator
from locales import ENGLISH, BookLocale
from models import (
    BookChapter,
    BookChild,
    BookData,
    BookPerson,
    BookUnion,
    FamilyUnion,
    GenerationMap,
    NameIndexEntry,
    Person,
)

logger = logging.getLogger(__name__)

ROMAN = [
    "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X",
    "XI", "XII", "XIII", "XIV", "XV", "XVI", "XVII", "XVIII", "XIX", "XX",
]  # fmt: skip

PLACEHOLDER = "—"


def roman_numeral(generation: int) -> str:
    """Ordinal label for a 0-based generation: roman up to XX, plain digits beyond."""
    if 0 <= generation < len(ROMAN):
        return ROMAN[generation]
    return str(generation + 1)


def chapter_title(generation: int, locale: BookLocale = ENGLISH) -> str:
    title = f"{locale.chapter_prefix} {roman_numeral(generation)}"
    name = locale.generation_names.get(generation)
    return f"{title} — {name}" if name else title


def format_years(
    birth: int | None, death: int | None, is_living: bool, locale: BookLocale = ENGLISH
) -> str:
    """
    Format a lifespan.

    - no birth year: placeholder dash
    - birth and death: "1950–2000"
    - birth, still living: "1950–present"
    - birth only: "1950"
    """
    if birth is None:
        return PLACEHOLDER
    if death is not None:
        return f"{birth}–{death}"
    if is_living:
        return f"{birth}–{locale.present}"
    return str(birth)


def lineage_note(person: Person, locale: BookLocale = ENGLISH) -> str | None:
    return None if person.is_patrilineal else locale.out_of_lineage


def find_parent_names(
    person: Person, person_map: dict[str, Person], union_map: dict[str, FamilyUnion]
) -> tuple[str | None, str | None]:
    """Father and mother names from the first parent union that records either."""
    for family_handle in person.parent_families:
        union = union_map.get(family_handle)
        if union is None or not (union.father_handle or union.mother_handle):
            continue

        father = person_map.get(union.father_handle) if union.father_handle else None
        mother = person_map.get(union.mother_handle) if union.mother_handle else None
        return (
            father.display_name if father else None,
            mother.display_name if mother else None,
        )

    return (None, None)


def find_child_index(person: Person, union_map: dict[str, FamilyUnion]) -> int | None:
    """1-based birth order of a person within their first parent union."""
    if not person.parent_families:
        return None

    union = union_map.get(person.parent_families[0])
    if union is None or person.handle not in union.children:
        return None
    return union.children.index(person.handle) + 1


def build_unions(
    person: Person,
    person_map: dict[str, Person],
    union_map: dict[str, FamilyUnion],
    locale: BookLocale = ENGLISH,
) -> list[BookUnion]:
    """One entry per union in which the person is a parent, in union order."""
    entries: list[BookUnion] = []

    for family_handle in person.families:
        union = union_map.get(family_handle)
        if union is None:
            continue

        spouse_handle = (
            union.mother_handle if union.father_handle == person.handle else union.father_handle
        )
        spouse = person_map.get(spouse_handle) if spouse_handle else None

        children = [
            BookChild(
                name=child.display_name,
                years=format_years(child.birth_year, child.death_year, child.is_living, locale),
                note=lineage_note(child, locale),
            )
            for child in (person_map.get(h) for h in union.children)
            if child is not None
        ]

        entries.append(
            BookUnion(
                spouse_name=spouse.display_name if spouse else None,
                spouse_years=(
                    format_years(spouse.birth_year, spouse.death_year, spouse.is_living, locale)
                    if spouse
                    else None
                ),
                spouse_note=lineage_note(spouse, locale) if spouse else None,
                children=tuple(children),
            )
        )

    return entries


def build_book_person(
    person: Person,
    generation: int,
    person_map: dict[str, Person],
    union_map: dict[str, FamilyUnion],
    locale: BookLocale = ENGLISH,
) -> BookPerson:
    """
    Build the book entry for one lineage member.

    The flat spouse fields describe the last union that has a spouse, while
    `children` merges the children of every union. `unions` keeps each
    marriage separate for renderers that want the full picture.
    """
    father_name, mother_name = find_parent_names(person, person_map, union_map)
    unions = build_unions(person, person_map, union_map, locale)

    spouse_name = spouse_years = spouse_note = None
    children: list[BookChild] = []
    for union in unions:
        if union.spouse_name is not None:
            spouse_name = union.spouse_name
            spouse_years = union.spouse_years
            spouse_note = union.spouse_note
        children.extend(union.children)

    return BookPerson(
        handle=person.handle,
        name=person.display_name,
        gender=person.gender,
        birth_year=person.birth_year,
        death_year=person.death_year,
        is_living=person.is_living,
        is_patrilineal=person.is_patrilineal,
        generation=generation,
        father_name=father_name,
        mother_name=mother_name,
        spouse_name=spouse_name,
        spouse_years=spouse_years,
        spouse_note=spouse_note,
        children=tuple(children),
        unions=tuple(unions),
        child_index=find_child_index(person, union_map),
    )


def build_chapters(
    members: list[BookPerson], max_generation: int, locale: BookLocale = ENGLISH
) -> list[BookChapter]:
    """Group entries by generation, skipping generations with no lineage members."""
    chapters: list[BookChapter] = []

    for gen in range(max_generation + 1):
        in_generation = sorted(
            (m for m in members if m.generation == gen),
            key=lambda m: (m.child_index is None, m.child_index or 0),
        )
        if not in_generation:
            continue

        chapters.append(
            BookChapter(
                generation=gen,
                title=chapter_title(gen, locale),
                roman_numeral=roman_numeral(gen),
                members=tuple(in_generation),
            )
        )

    return chapters


def build_name_index(
    people: list[Person], generations: GenerationMap, collator: Collator
) -> list[NameIndexEntry]:
    """Every person, lineage or not, sorted by name in collation order."""
    entries = [
        NameIndexEntry(
            name=p.display_name,
            generation=generations.get(p.handle, 0),
            is_patrilineal=p.is_patrilineal,
        )
        for p in people
    ]
    return collator.sorted(entries, key=lambda entry: entry.name)


def synthesize(
    people: list[Person],
    unions: list[FamilyUnion],
    generations: GenerationMap,
    family_name: str,
    locale: BookLocale = ENGLISH,
    collator: Collator | None = None,
    now: datetime | None = None,
) -> BookData:
    """
    Build the family book.

    Args:
        people: All person records
        unions: All family unions
        generations: Output of `generations.resolve` for the same records
        family_name: Family label printed on the book
        locale: Labels, date format and default collation
        collator: Overrides the locale's collation for the name index
        now: Export timestamp (defaults to the current time)

    Returns:
        A BookData with one chapter per populated generation
    """
    person_map = {p.handle: p for p in people}
    union_map = {u.handle: u for u in unions}

    members = [
        build_book_person(p, generations.get(p.handle, 0), person_map, union_map, locale)
        for p in people
        if p.is_patrilineal
    ]

    max_generation = max(generations.values(), default=0)
    chapters = build_chapters(members, max_generation, locale)
    name_index = build_name_index(people, generations, collator or locale.collator)

    logger.debug(
        "Built book for %s: %d chapter(s), %d lineage member(s), %d indexed name(s)",
        family_name,
        len(chapters),
        len(members),
        len(name_index),
    )

    return BookData(
        family_name=family_name,
        export_date=locale.format_date((now or datetime.now()).date()),
        total_generations=max_generation + 1,
        total_members=len(people),
        total_patrilineal=len(members),
        chapters=tuple(chapters),
        name_index=tuple(name_index),
    )
