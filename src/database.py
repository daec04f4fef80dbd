"""SQLite storage for person and family-union records."""

import json
import logging
from pathlib import Path
import sqlite3
import time

from collation import Collator, FoldingCollator
from models import GENDER_MALE, FamilyUnion, Person

logger = logging.getLogger(__name__)


def create_database(db_path: Path | str) -> sqlite3.Connection:
    """Open (or create) the record store with people and families tables."""
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    # List columns hold JSON arrays, in the order the source recorded them
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS people (
            handle TEXT PRIMARY KEY,
            display_name TEXT NOT NULL,
            gender INTEGER NOT NULL DEFAULT 2,
            birth_year INTEGER,
            death_year INTEGER,
            is_living INTEGER NOT NULL DEFAULT 0,
            is_patrilineal INTEGER NOT NULL DEFAULT 0,
            generation INTEGER,
            families TEXT NOT NULL DEFAULT '[]',
            parent_families TEXT NOT NULL DEFAULT '[]'
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS families (
            handle TEXT PRIMARY KEY,
            father_handle TEXT,
            mother_handle TEXT,
            children TEXT NOT NULL DEFAULT '[]'
        )
    """)

    conn.commit()
    return conn


def store_records(conn: sqlite3.Connection, people: list[Person], unions: list[FamilyUnion]):
    """Insert people and family unions, updating existing handles in place."""
    cursor = conn.cursor()

    cursor.executemany(
        """
        INSERT INTO people
        (handle, display_name, gender, birth_year, death_year, is_living, is_patrilineal,
         generation, families, parent_families)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(handle) DO UPDATE SET
            display_name = excluded.display_name,
            gender = excluded.gender,
            birth_year = excluded.birth_year,
            death_year = excluded.death_year,
            is_living = excluded.is_living,
            is_patrilineal = excluded.is_patrilineal,
            generation = excluded.generation,
            families = excluded.families,
            parent_families = excluded.parent_families
        """,
        [
            (
                p.handle,
                p.display_name,
                p.gender,
                p.birth_year,
                p.death_year,
                int(p.is_living),
                int(p.is_patrilineal),
                p.generation,
                json.dumps(p.families),
                json.dumps(p.parent_families),
            )
            for p in people
        ],
    )

    cursor.executemany(
        """
        INSERT INTO families (handle, father_handle, mother_handle, children)
        VALUES (?, ?, ?, ?)
        ON CONFLICT(handle) DO UPDATE SET
            father_handle = excluded.father_handle,
            mother_handle = excluded.mother_handle,
            children = excluded.children
        """,
        [(u.handle, u.father_handle, u.mother_handle, json.dumps(u.children)) for u in unions],
    )

    conn.commit()
    logger.debug("Stored %d people and %d families", len(people), len(unions))


def _row_to_person(row: sqlite3.Row | tuple) -> Person:
    return Person(
        handle=row[0],
        display_name=row[1],
        gender=row[2],
        birth_year=row[3],
        death_year=row[4],
        is_living=bool(row[5]),
        is_patrilineal=bool(row[6]),
        generation=row[7],
        families=json.loads(row[8]),
        parent_families=json.loads(row[9]),
    )


PERSON_COLUMNS = (
    "handle, display_name, gender, birth_year, death_year, is_living, is_patrilineal, "
    "generation, families, parent_families"
)


def load_records(conn: sqlite3.Connection) -> tuple[list[Person], list[FamilyUnion]]:
    """Load all people and family unions in insertion order."""
    cursor = conn.cursor()

    cursor.execute(f"SELECT {PERSON_COLUMNS} FROM people ORDER BY rowid")
    people = [_row_to_person(row) for row in cursor.fetchall()]

    cursor.execute(
        "SELECT handle, father_handle, mother_handle, children FROM families ORDER BY rowid"
    )
    unions = [
        FamilyUnion(
            handle=row[0],
            father_handle=row[1],
            mother_handle=row[2],
            children=json.loads(row[3]),
        )
        for row in cursor.fetchall()
    ]

    return people, unions


def list_people(
    conn: sqlite3.Connection,
    search: str | None = None,
    gender: int | None = None,
    living: bool | None = None,
    collator: Collator | None = None,
) -> list[Person]:
    """
    List people ordered by name, optionally filtered.

    Args:
        conn: Open record store
        search: Case-insensitive substring of the display name
        gender: Only people with this gender code
        living: Only living (True) or deceased (False) people
        collator: Name ordering, accent-folding by default

    Returns:
        Matching people
    """
    cursor = conn.cursor()
    cursor.execute(f"SELECT {PERSON_COLUMNS} FROM people ORDER BY rowid")
    rows = [_row_to_person(row) for row in cursor.fetchall()]
    # SQLite's default collation orders by code point
    people = (collator or FoldingCollator()).sorted(rows, key=lambda p: p.display_name)

    # SQLite's LIKE only folds ASCII, so match in Python
    if search:
        needle = search.lower()
        people = [p for p in people if needle in p.display_name.lower()]
    if gender is not None:
        people = [p for p in people if p.gender == gender]
    if living is not None:
        people = [p for p in people if p.is_living == living]

    return people


def add_person(
    conn: sqlite3.Connection,
    name: str,
    gender: int = GENDER_MALE,
    generation: int = 1,
    is_living: bool = True,
) -> Person:
    """Add a new lineage member with a generated handle."""
    if not name.strip():
        raise ValueError("Person name must not be empty")

    cursor = conn.cursor()

    # Handles are P<epoch ms>; step past any millisecond already taken
    stamp = int(time.time() * 1000)
    while cursor.execute("SELECT 1 FROM people WHERE handle = ?", (f"P{stamp}",)).fetchone():
        stamp += 1

    person = Person(
        handle=f"P{stamp}",
        display_name=name.strip(),
        gender=gender,
        is_living=is_living,
        is_patrilineal=True,
        generation=generation,
    )
    # Plain insert: a clash raises IntegrityError rather than overwriting
    cursor.execute(
        """
        INSERT INTO people
        (handle, display_name, gender, is_living, is_patrilineal, generation)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (person.handle, person.display_name, gender, int(is_living), 1, generation),
    )
    conn.commit()
    logger.debug("Added %s as %s", person.display_name, person.handle)
    return person
