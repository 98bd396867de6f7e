"""
Build an undirected networkx graph from pair relations.
"""

import logging
from collections.abc import Iterable, Sequence

import networkx as nx

from egdb.errors import InvalidInputError
from egdb.graph.relations import PairRelation, pair_key, validate_entities

logger = logging.getLogger(__name__)


def build_graph(
    entities: Sequence[str],
    relations: Iterable[PairRelation],
    separator: str | None = None,
) -> nx.Graph:
    """
    Build the relation graph.

    Every entity becomes a vertex (in input order), including entities that
    take part in no relation. Connected relations become edges, one per
    pair key, so (a, b) and (b, a) collapse to a single edge.

    Args:
        entities: Unique entity identifiers (the full vertex set)
        relations: Pair relations, usually from compute_pairwise_relations
        separator: Pair-key separator the relations were built with

    Returns:
        networkx.Graph; edges carry ``weight`` (relation value) and ``pair_key``

    Raises:
        InvalidInputError: Duplicate entities, or a relation naming an entity
            outside the vertex set, or a pair key that does not match its pair
    """
    items = validate_entities(entities, separator)
    vertices = set(items)

    graph = nx.Graph()
    graph.add_nodes_from(items)

    seen_keys: set[str] = set()
    for rel in relations:
        missing = [e for e in rel.pair if e not in vertices]
        if missing:
            raise InvalidInputError(
                f"Relation {rel.pair_key!r} references unknown entities: {', '.join(missing)}"
            )
        key = pair_key(rel.entity_a, rel.entity_b, separator)
        if rel.pair_key != key:
            raise InvalidInputError(
                f"Relation {rel.entity_a!r} / {rel.entity_b!r} has key {rel.pair_key!r}, expected {key!r}"
            )
        if not rel.connected or rel.entity_a == rel.entity_b:
            continue
        if key in seen_keys:
            continue
        seen_keys.add(key)
        graph.add_edge(rel.entity_a, rel.entity_b, weight=int(rel.value), pair_key=key)

    logger.debug(
        "Built graph: %d vertices, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph
