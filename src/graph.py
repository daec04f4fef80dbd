"""NetworkX family graph built from person and family-union records."""

import networkx as nx

from models import FamilyUnion, Person

PERSON_NODE = "person"
FAMILY_NODE = "family"


def family_node_id(union_handle: str) -> str:
    # Union handles and person handles may share a namespace in the source data
    return f"FAM_{union_handle}"


def build_family_graph(people: list[Person], unions: list[FamilyUnion]) -> nx.DiGraph:
    """
    Build a graph using the union-node model.

    Every family union becomes a small "family node" that both parents point
    to and that points to each child:
    - Spouses meet at the family node and naturally sit on the same rank
    - All children hang from the family node, in birth order

    Parents or children the person list does not know about still get a node,
    so dangling references stay visible.

    Args:
        people: Person records
        unions: Family unions

    Returns:
        A DiGraph with person and family nodes
    """
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for p in people:
        G.add_node(
            p.handle,
            node_type=PERSON_NODE,
            person_name=p.display_name,
            gender=p.gender,
            birth_year=p.birth_year,
            death_year=p.death_year,
            is_patrilineal=p.is_patrilineal,
        )

    for union in unions:
        fam_id = family_node_id(union.handle)
        spouses = tuple(h for h in (union.father_handle, union.mother_handle) if h)
        G.add_node(fam_id, node_type=FAMILY_NODE, union=union.handle, spouses=spouses)

        for parent in spouses:
            if parent not in G:
                G.add_node(parent, node_type=PERSON_NODE)
            G.add_edge(parent, fam_id, edge_type="spouse_to_family")

        for order, child in enumerate(union.children, start=1):
            if child not in G:
                G.add_node(child, node_type=PERSON_NODE)
            G.add_edge(fam_id, child, edge_type="family_to_child", order=order)

    return G


def person_nodes(G: nx.DiGraph) -> list[str]:
    return [n for n, data in G.nodes(data=True) if data.get("node_type") == PERSON_NODE]


def parent_child_graph(G: nx.DiGraph) -> nx.DiGraph:
    """Collapse family nodes into direct parent -> child edges."""
    H = nx.DiGraph()
    H.add_nodes_from(person_nodes(G))
    for fam_id, data in G.nodes(data=True):
        if data.get("node_type") != FAMILY_NODE:
            continue
        for parent in G.predecessors(fam_id):
            for child in G.successors(fam_id):
                H.add_edge(parent, child)
    return H


def get_branch_subgraph(G: nx.DiGraph, handle: str, depth: int | None = None) -> nx.DiGraph:
    """
    Extract the branch descending from one person.

    The branch includes the person's spouses, their descendants through every
    union, and those descendants' spouses.

    Args:
        G: The full family graph
        handle: Person at the top of the branch
        depth: Maximum number of generations below the person (default: all)

    Returns:
        The induced subgraph of the branch
    """
    if handle not in G:
        raise ValueError(f"Person {handle} not found in graph")

    # Each generation step is person -> family -> child, so two edges
    limit = None if depth is None else depth * 2 + 1
    reached = set(nx.bfs_tree(G, handle, depth_limit=limit).nodes())

    # Pull in the spouses who meet the branch at its family nodes
    for node in list(reached):
        if G.nodes[node].get("node_type") == FAMILY_NODE:
            reached.update(G.predecessors(node))

    return G.subgraph(reached).copy()
