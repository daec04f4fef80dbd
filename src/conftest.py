"""Shared record fixtures for the test modules."""

import pytest

from models import GENDER_FEMALE, GENDER_MALE, FamilyUnion, Person


def person(handle: str, name: str | None = None, lineage: bool = True, **kwargs) -> Person:
    return Person(
        handle=handle,
        display_name=name or handle,
        is_patrilineal=lineage,
        **kwargs,
    )


@pytest.fixture
def three_generations() -> tuple[list[Person], list[FamilyUnion]]:
    """
    A (founder) married B (married in); children C and D.
    C married E (married in); child G.
    """
    people = [
        person("A", "Hoàng Văn An", gender=GENDER_MALE, birth_year=1900, death_year=1970,
               families=["F1"]),
        person("B", "Nguyễn Thị Bình", lineage=False, gender=GENDER_FEMALE, birth_year=1905,
               death_year=1980, families=["F1"]),
        person("C", "Hoàng Văn Cường", gender=GENDER_MALE, birth_year=1930, death_year=2000,
               families=["F2"], parent_families=["F1"]),
        person("D", "Hoàng Thị Dung", gender=GENDER_FEMALE, birth_year=1932, is_living=True,
               parent_families=["F1"]),
        person("E", "Trần Thị Em", lineage=False, gender=GENDER_FEMALE, birth_year=1935,
               families=["F2"]),
        person("G", "Hoàng Văn Giang", gender=GENDER_MALE, birth_year=1960, is_living=True,
               parent_families=["F2"]),
    ]  # fmt: skip
    unions = [
        FamilyUnion("F1", father_handle="A", mother_handle="B", children=["C", "D"]),
        FamilyUnion("F2", father_handle="C", mother_handle="E", children=["G"]),
    ]
    return people, unions
