"""Graphviz chart of the family graph, ranked by resolved generation."""

from pathlib import Path

import networkx as nx
import pydot

from graph import FAMILY_NODE
from models import GENDER_FEMALE, GENDER_MALE, GenerationMap


def person_label(data: dict) -> str:
    """Name and lifespan, one per line."""
    name = data.get("person_name") or "?"
    birth = data.get("birth_year")
    death = data.get("death_year")
    if birth is None and death is None:
        years = ""
    else:
        years = f"{'' if birth is None else birth}-{'' if death is None else death}"
    return f"{name}\n{years}" if years else name


def build_generation_chart(G: nx.DiGraph, generations: GenerationMap) -> pydot.Dot:
    """
    Build a hierarchical chart where each resolved generation is one rank.

    Args:
        G: Family graph from `graph.build_family_graph`
        generations: Resolved generation per person handle

    Returns:
        A pydot graph ready to write
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("splines", "ortho")
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")

    ranks: dict[int, list[str]] = {}

    for node, data in G.nodes(data=True):
        if data.get("node_type") == FAMILY_NODE:
            P.add_node(pydot.Node(str(node), shape="point", width="0.1", height="0.1", label=""))
            continue

        gender = data.get("gender")
        if gender == GENDER_MALE:
            fillcolor = "lightblue"
        elif gender == GENDER_FEMALE:
            fillcolor = "lightpink"
        else:
            fillcolor = "lightgray"

        P.add_node(
            pydot.Node(
                str(node),
                label=person_label(data),
                shape="box",
                style="rounded,filled" if data.get("is_patrilineal") else "rounded,dashed,filled",
                fillcolor=fillcolor,
                fontsize="10",
            )
        )
        if node in generations:
            ranks.setdefault(generations[node], []).append(str(node))

    for u, v, data in G.edges(data=True):
        if data.get("edge_type") == "spouse_to_family":
            P.add_edge(pydot.Edge(str(u), str(v), dir="none", color="darkgray"))
        else:
            P.add_edge(pydot.Edge(str(u), str(v), color="darkgray"))

    # One rank=same subgraph per generation keeps each generation on a row
    for gen in sorted(ranks):
        sg = pydot.Subgraph(f"generation_{gen}", rank="same")
        for node in ranks[gen]:
            sg.add_node(pydot.Node(node))
        P.add_subgraph(sg)

    return P


def write_generation_chart(
    G: nx.DiGraph, generations: GenerationMap, output_path: Path
) -> Path:
    """Render the chart to png, svg, pdf or dot depending on the file extension."""
    P = build_generation_chart(G, generations)

    ext = output_path.suffix.lower().lstrip(".")
    if ext == "dot":
        P.write_raw(str(output_path), encoding="utf-8")
    else:
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        P.write(str(output_path), format=ext)

    return output_path
