"""
Relation-graph grouping.

Pairwise relation → undirected graph → connected groups, ranked by size.
Pure functions over in-memory inputs; no network I/O.
"""

from egdb.graph.builder import build_graph
from egdb.graph.groups import (
    Group,
    GroupingResult,
    connected_groups,
    group_entities,
    groups_frame,
)
from egdb.graph.relations import (
    InteractionRelation,
    PairRelation,
    RelationFn,
    RelationStatus,
    SharedAttributeRelation,
    compute_pairwise_relations,
    interaction_relation,
    pair_key,
    relations_frame,
    shared_attribute_relation,
    validate_entities,
)

__all__ = [
    # Relations
    "InteractionRelation",
    "PairRelation",
    "RelationFn",
    "RelationStatus",
    "SharedAttributeRelation",
    "compute_pairwise_relations",
    "interaction_relation",
    "pair_key",
    "relations_frame",
    "shared_attribute_relation",
    "validate_entities",
    # Graph
    "build_graph",
    # Groups
    "Group",
    "GroupingResult",
    "connected_groups",
    "group_entities",
    "groups_frame",
]
