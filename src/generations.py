"""Generation resolution by breadth-first traversal from lineage roots."""

import logging
from collections import deque
from types import MappingProxyType
from typing import Iterable

from models import FamilyUnion, GenerationMap, Person

logger = logging.getLogger(__name__)


def child_handles(unions: Iterable[FamilyUnion]) -> set[str]:
    """Collect every handle listed as a child in any union."""
    return {child for union in unions for child in union.children}


def find_roots(people: list[Person], unions: list[FamilyUnion]) -> list[Person]:
    """
    Return the persons that seed generation 0, in input order.

    A root must belong to the lineage and must not be a child in any union.
    Married-in spouses are never children either, so the lineage flag is what
    keeps them from being treated as founders.
    """
    children = child_handles(unions)
    return [p for p in people if p.is_patrilineal and p.handle not in children]


def resolve(people: list[Person], unions: list[FamilyUnion]) -> GenerationMap:
    """
    Assign a generation number to every person.

    Roots start at generation 0. Walking outward in FIFO order, a spouse shares
    the generation of the partner it was reached from and children get one more.
    The first assignment a person receives is kept. Anyone the walk never
    reaches falls back to their stored 1-based hint minus one, or 0.

    Args:
        people: Person records, in the order the store returned them
        unions: Family unions, in the order the store returned them

    Returns:
        A read-only mapping from person handle to generation
    """
    person_map = {p.handle: p for p in people}
    union_map = {u.handle: u for u in unions}
    generations: dict[str, int] = {}

    queue = deque((root.handle, 0) for root in find_roots(people, unions))
    logger.debug("Seeding generation walk with %d root(s)", len(queue))

    while queue:
        handle, gen = queue.popleft()
        if handle in generations:
            continue

        generations[handle] = gen
        person = person_map.get(handle)
        if person is None:
            continue

        for family_handle in person.families:
            union = union_map.get(family_handle)
            if union is None:
                continue

            # Spouses sit on the same generation
            for parent in (union.father_handle, union.mother_handle):
                if parent and parent not in generations:
                    queue.append((parent, gen))

            for child in union.children:
                if child not in generations:
                    queue.append((child, gen + 1))

    reached = len(generations)
    for person in people:
        if person.handle not in generations:
            generations[person.handle] = fallback_generation(person)

    logger.debug(
        "Resolved %d people (%d by traversal, %d by fallback)",
        len(people),
        reached,
        len(generations) - reached,
    )
    return MappingProxyType(generations)


def fallback_generation(person: Person) -> int:
    """Generation for a person the traversal never reached."""
    if person.generation and person.generation > 0:
        return person.generation - 1
    return 0
