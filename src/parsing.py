"""GEDCOM import into person and family-union records."""

import logging
from pathlib import Path
import re

from ged4py import GedcomReader
from unidecode import unidecode

from models import GENDER_FEMALE, GENDER_MALE, GENDER_UNKNOWN, FamilyUnion, Person

logger = logging.getLogger(__name__)

SEX_CODES = {"M": GENDER_MALE, "F": GENDER_FEMALE}

# A 3 or 4 digit run not embedded in a longer number
YEAR_PATTERN = re.compile(r"(?<!\d)(\d{3,4})(?!\d)")


def normalize_xref(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I_347421849@' into a record handle 'I_347421849'."""
    handle = xref_id.strip().strip("@")
    if not handle:
        raise ValueError(f"Empty GEDCOM reference: {xref_id!r}")
    return handle


def parse_year(date_str: str | None) -> int | None:
    """
    Extract the year from a free-form GEDCOM date string.

    Handles formats like:
    - "25 NOV 1954"
    - "ABOUT 1905"
    - "BETWEEN 1900 AND 1910" (first year wins)
    - "(01-27-1920)"
    - "(02 May1838)"
    - "(About:1746-00-00)"
    - "(1789?)"
    """
    if not date_str:
        return None

    match = YEAR_PATTERN.search(date_str)
    if not match:
        return None
    return int(match.group(1))


def fold_name(name: str) -> str:
    """Case- and diacritic-insensitive form of a name, for surname matching."""
    return unidecode(name).casefold().strip()


def extract_name_parts(indi) -> tuple[str, str | None]:
    """Extract display name and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", None)

    name_value = name_rec.value

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        given, surname, suffix = name_value
        parts = [p for p in [surname, given, suffix] if p]
        return (" ".join(parts) if parts else "Unknown", surname or None)

    # Fallback: string format "Given /Surname/"
    raw = str(name_value)
    match = re.search(r"/([^/]*)/", raw)
    surname = match.group(1).strip() if match else None
    surn = name_rec.sub_tag("SURN")
    if surn is not None and surn.value:
        surname = str(surn.value)
    return (raw.replace("/", "").strip() or "Unknown", surname or None)


def extract_year(indi, tag: str) -> tuple[bool, int | None]:
    """Whether an event tag (BIRT, DEAT) is present, and its year if known."""
    event = indi.sub_tag(tag)
    if event is None:
        return (False, None)

    date_rec = event.sub_tag("DATE")
    # ged4py may return DateValue objects
    date_val = str(date_rec.value) if date_rec is not None and date_rec.value else None
    return (True, parse_year(date_val))


def extract_refs(rec, tag: str) -> list[str]:
    """Handles of the records a pointer tag (FAMS, FAMC, CHIL) refers to, in file order."""
    return [normalize_xref(sub.xref_id) for sub in rec.sub_tags(tag) if sub.xref_id]


def extract_ref(rec, tag: str) -> str | None:
    sub = rec.sub_tag(tag)
    return normalize_xref(sub.xref_id) if sub is not None and sub.xref_id else None


def read_records(filepath: Path, lineage_surname: str) -> tuple[list[Person], list[FamilyUnion]]:
    """
    Read people and family unions from a GEDCOM file.

    Anyone whose surname matches `lineage_surname` (ignoring case and
    diacritics) is treated as a lineage member. People without a DEAT record
    are considered living. Non-standard tags (starting with _) are ignored.

    Args:
        filepath: Path to the GEDCOM file
        lineage_surname: Surname carried by the traced bloodline

    Returns:
        Tuple of (people, unions) in file order
    """
    people: list[Person] = []
    unions: list[FamilyUnion] = []
    lineage = fold_name(lineage_surname)

    with GedcomReader(str(filepath)) as reader:
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue

            display_name, surname = extract_name_parts(rec)
            sex_rec = rec.sub_tag("SEX")
            _, birth_year = extract_year(rec, "BIRT")
            has_death, death_year = extract_year(rec, "DEAT")

            people.append(
                Person(
                    handle=normalize_xref(rec.xref_id),
                    display_name=display_name,
                    gender=SEX_CODES.get(sex_rec.value if sex_rec else None, GENDER_UNKNOWN),
                    birth_year=birth_year,
                    death_year=death_year,
                    is_living=not has_death,
                    is_patrilineal=bool(surname) and fold_name(surname) == lineage,
                    families=extract_refs(rec, "FAMS"),
                    parent_families=extract_refs(rec, "FAMC"),
                )
            )

        for rec in reader.records0("FAM"):
            if rec.xref_id is None:
                continue

            unions.append(
                FamilyUnion(
                    handle=normalize_xref(rec.xref_id),
                    father_handle=extract_ref(rec, "HUSB"),
                    mother_handle=extract_ref(rec, "WIFE"),
                    children=extract_refs(rec, "CHIL"),
                )
            )

    logger.info("Read %d people and %d families from %s", len(people), len(unions), filepath)
    return people, unions
