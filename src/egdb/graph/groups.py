"""
Connected groups of a relation graph.

A group of one is an entity unconnected to the rest (potential horizontal
pleiotropy); larger groups share pathways or interactions (potential
vertical pleiotropy).
"""

from collections.abc import Collection, Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import networkx as nx
import polars as pl

from egdb.graph.builder import build_graph
from egdb.graph.relations import PairRelation, RelationFn, compute_pairwise_relations


@dataclass(frozen=True)
class Group:
    """A connected component of the relation graph."""

    members: frozenset[str]

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_singleton(self) -> bool:
        return self.size == 1

    @property
    def sorted_members(self) -> tuple[str, ...]:
        return tuple(sorted(self.members))

    @property
    def pleiotropy(self) -> str:
        """'horizontal' for isolated entities, 'vertical' for shared groups."""
        return "horizontal" if self.is_singleton else "vertical"

    def __len__(self) -> int:
        return self.size

    def __contains__(self, entity: object) -> bool:
        return entity in self.members

    def __iter__(self) -> Iterator[str]:
        return iter(self.sorted_members)


def _group_order(group: Group) -> tuple[int, str]:
    return (-group.size, group.sorted_members[0])


def connected_groups(graph: nx.Graph) -> list[Group]:
    """
    Partition the graph's vertices into connected groups.

    Returns:
        Groups sorted by size descending, ties broken by smallest member
    """
    groups = [Group(frozenset(component)) for component in nx.connected_components(graph)]
    return sorted(groups, key=_group_order)


@dataclass
class GroupingResult:
    """Relations, graph and groups produced for one entity set."""

    entities: list[str]
    relations: list[PairRelation] = field(default_factory=list)
    graph: nx.Graph = field(default_factory=nx.Graph)
    groups: list[Group] = field(default_factory=list)
    # Entities with relation data; None when every entity has data
    known: frozenset[str] | None = None

    @property
    def unknown(self) -> list[str]:
        """Entities with no relation data, in input order."""
        if self.known is None:
            return []
        return [e for e in self.entities if e not in self.known]

    def groups_frame(self) -> pl.DataFrame:
        return groups_frame(self.groups)


def group_entities(
    entities: Sequence[str],
    relation_fn: RelationFn,
    separator: str | None = None,
    known: Collection[str] | None = None,
) -> GroupingResult:
    """
    Run relations → graph → groups for one entity set.

    Args:
        entities: Unique entity identifiers
        relation_fn: Relation evaluated for every ordered pair
        separator: Pair-key separator
        known: Entities that have relation data. Defaults to the relation's
            own ``known`` attribute when it has one (see SharedAttributeRelation).
    """
    items = list(entities)
    if known is None:
        known = getattr(relation_fn, "known", None)
    relations = compute_pairwise_relations(items, relation_fn, separator)
    graph = build_graph(items, relations, separator)
    return GroupingResult(
        entities=items,
        relations=relations,
        graph=graph,
        groups=connected_groups(graph),
        known=frozenset(known) if known is not None else None,
    )


def groups_frame(groups: Iterable[Group]) -> pl.DataFrame:
    """Groups as a table: group_id (1-based, in rank order), size, members, pleiotropy."""
    rows = list(groups)
    return pl.DataFrame(
        {
            "group_id": list(range(1, len(rows) + 1)),
            "size": [g.size for g in rows],
            "members": [list(g.sorted_members) for g in rows],
            "pleiotropy": [g.pleiotropy for g in rows],
        },
        schema={
            "group_id": pl.Int64,
            "size": pl.Int64,
            "members": pl.List(pl.Utf8),
            "pleiotropy": pl.Utf8,
        },
    )
