"""
Family register book tools.

1) Import a GEDCOM file into the SQLite record store.
2) Resolve a generation for every person from the lineage roots.
3) Build the generation-chaptered family book and its name index.
4) Check the records for structural problems.
5) Chart the family graph ranked by generation.
"""

from dataclasses import asdict
import json
import logging
from pathlib import Path

import typer

from book import synthesize
from config import settings
from database import add_person, create_database, list_people, load_records, store_records
from generations import resolve
from graph import build_family_graph, get_branch_subgraph
from locales import get_locale
from models import GENDER_FEMALE, GENDER_MALE
from parsing import read_records
from plotting import write_generation_chart
from validation import validate_records

app = typer.Typer(
    name="giapha",
    help="Build a generation-chaptered family book from genealogical records",
    add_completion=False,
)

GENDER_NAMES = {"male": GENDER_MALE, "female": GENDER_FEMALE}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def print_warnings(warnings: list[str], limit: int = 10):
    if not warnings:
        print("  No structural issues found")
        return

    print(f"  Found {len(warnings)} warnings:")
    for w in warnings[:limit]:
        print(f"    - {w}")
    if len(warnings) > limit:
        print(f"    ... and {len(warnings) - limit} more")


@app.command("import-gedcom")
def import_gedcom(
    gedcom_path: Path = typer.Argument(..., exists=True, help="GEDCOM file to import"),
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
    lineage_surname: str = typer.Option(
        settings.get_lineage_surname(), "--surname", help="Surname of the traced bloodline"
    ),
):
    """Import people and families from a GEDCOM file."""
    print(f"Parsing GEDCOM file: {gedcom_path}")
    people, unions = read_records(gedcom_path, lineage_surname)
    lineage = sum(1 for p in people if p.is_patrilineal)
    print(f"  Found {len(people)} people ({lineage} in lineage) and {len(unions)} families")

    print(f"Storing records in SQLite: {db_path}")
    conn = create_database(db_path)
    try:
        store_records(conn, people, unions)
    finally:
        conn.close()
    print("Done!")


@app.command()
def book(
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
    output: Path = typer.Option(
        settings.output_dir / "book.json", "--output", "-o", help="Where to write the book JSON"
    ),
    family_name: str = typer.Option(settings.family_name, "--family", help="Family label"),
    locale_code: str = typer.Option(settings.locale, "--locale", help="Report language (en, vi)"),
):
    """Build the family book and write it as JSON."""
    try:
        locale = get_locale(locale_code)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--locale") from e

    conn = create_database(db_path)
    try:
        people, unions = load_records(conn)
    finally:
        conn.close()
    print(f"Loaded {len(people)} people and {len(unions)} families from {db_path}")

    print("Resolving generations...")
    generations = resolve(people, unions)

    print("Building book...")
    data = synthesize(people, unions, generations, family_name, locale=locale)
    for chapter in data.chapters:
        print(f"  {chapter.title}: {len(chapter.members)} member(s)")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(asdict(data), ensure_ascii=False, indent=2), encoding="utf-8")
    print(
        f"Book saved to {output} ({data.total_generations} generations, "
        f"{data.total_patrilineal}/{data.total_members} in lineage)"
    )


@app.command()
def chart(
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
    output: Path = typer.Option(
        settings.output_dir / "family_tree.png", "--output", "-o", help="png, svg, pdf or dot"
    ),
    root: str | None = typer.Option(None, "--root", help="Only chart this person's branch"),
    depth: int | None = typer.Option(None, "--depth", help="Generations below --root"),
):
    """Chart the family graph with one row per generation."""
    conn = create_database(db_path)
    try:
        people, unions = load_records(conn)
    finally:
        conn.close()

    generations = resolve(people, unions)
    G = build_family_graph(people, unions)
    if root:
        try:
            G = get_branch_subgraph(G, root, depth)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--root") from e

    output.parent.mkdir(parents=True, exist_ok=True)
    print(f"Plotting graph to: {output}")
    write_generation_chart(G, generations, output)
    print(f"Graph saved to {output}")


@app.command()
def validate(
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
):
    """Check the records for structural problems."""
    conn = create_database(db_path)
    try:
        people, unions = load_records(conn)
    finally:
        conn.close()

    print("Validating records...")
    warnings = validate_records(people, unions)
    print_warnings(warnings)
    if warnings:
        raise typer.Exit(1)


@app.command("people")
def people_command(
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
    search: str | None = typer.Option(None, "--search", "-s", help="Name contains"),
    gender: str | None = typer.Option(None, "--gender", help="male or female"),
    living: bool | None = typer.Option(None, "--living/--deceased", help="Filter by living"),
):
    """List people in the record store."""
    gender_code = None
    if gender is not None:
        if gender.lower() not in GENDER_NAMES:
            raise typer.BadParameter("Use male or female", param_hint="--gender")
        gender_code = GENDER_NAMES[gender.lower()]

    conn = create_database(db_path)
    try:
        found = list_people(
            conn,
            search=search,
            gender=gender_code,
            living=living,
            collator=get_locale(settings.locale).collator,
        )
    finally:
        conn.close()

    for p in found:
        death = "" if p.death_year is None else p.death_year
        years = "" if p.birth_year is None else f"{p.birth_year}-{death}"
        print(f"{p.handle}\t{p.display_name}\t{years}")
    print(f"{len(found)} people")


@app.command("add-person")
def add_person_command(
    name: str = typer.Argument(..., help="Full name"),
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
    gender: str = typer.Option("male", "--gender", help="male or female"),
    generation: int = typer.Option(1, "--generation", help="1-based generation hint"),
    living: bool = typer.Option(True, "--living/--deceased"),
):
    """Add a lineage member to the record store."""
    if gender.lower() not in GENDER_NAMES:
        raise typer.BadParameter("Use male or female", param_hint="--gender")

    conn = create_database(db_path)
    try:
        person = add_person(
            conn, name, gender=GENDER_NAMES[gender.lower()], generation=generation, is_living=living
        )
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="NAME") from e
    finally:
        conn.close()
    print(f"Added {person.display_name} as {person.handle}")


if __name__ == "__main__":
    app()
