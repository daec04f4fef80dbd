"""Structural checks for family register records."""

from collections import Counter

import networkx as nx

from graph import build_family_graph, parent_child_graph
from models import FamilyUnion, Person


def validate_records(people: list[Person], unions: list[FamilyUnion]) -> list[str]:
    """
    Check the records for structural problems:
    - Duplicate person or union handles
    - References to people or unions that do not exist
    - People listed as a child in more than one union
    - Cycles in parent-child relationships

    The book can still be built when warnings are found; these are the
    inconsistencies it resolves by first/last-wins rules instead of failing.

    Returns a list of warning messages.
    """
    warnings: list[str] = []

    person_counts = Counter(p.handle for p in people)
    union_counts = Counter(u.handle for u in unions)
    for handle, count in person_counts.items():
        if count > 1:
            warnings.append(f"Duplicate person handle {handle} ({count} records)")
    for handle, count in union_counts.items():
        if count > 1:
            warnings.append(f"Duplicate family handle {handle} ({count} records)")

    # Dangling references
    for union in unions:
        for role, handle in (("father", union.father_handle), ("mother", union.mother_handle)):
            if handle and handle not in person_counts:
                warnings.append(f"Family {union.handle} names unknown {role} {handle}")
        for child in union.children:
            if child not in person_counts:
                warnings.append(f"Family {union.handle} names unknown child {child}")

    for person in people:
        for family_handle in person.families + person.parent_families:
            if family_handle not in union_counts:
                warnings.append(
                    f"{person.display_name} ({person.handle}) refers to unknown family "
                    f"{family_handle}"
                )

    # Children of several unions only get parents from the first one
    child_of: dict[str, list[str]] = {}
    for union in unions:
        for child in union.children:
            child_of.setdefault(child, []).append(union.handle)
    for child, family_handles in child_of.items():
        if len(family_handles) > 1:
            warnings.append(
                f"{child} is a child in {len(family_handles)} families: "
                f"{', '.join(family_handles)}"
            )

    # Check for cycles
    try:
        cycle = nx.find_cycle(parent_child_graph(build_family_graph(people, unions)))
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    return warnings
