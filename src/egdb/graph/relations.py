"""
Pairwise relations between entities.

A relation function answers "do these two entities share something?" for an
ordered pair. Values are:

- bool: connected / not connected
- int: a count (shared pathways); connected when > 0
- None: unknown (no data for one of the entities)

Unknown is kept distinct from a real negative so callers can report which
entities were never assessed.
"""

import logging
from collections.abc import Callable, Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from numbers import Integral

import polars as pl

from egdb.config import settings
from egdb.errors import InvalidInputError, RelationComputationError

logger = logging.getLogger(__name__)

RelationValue = bool | int | None
RelationFn = Callable[[str, str], RelationValue]


class RelationStatus(str, Enum):
    """Outcome of evaluating a relation for one pair."""

    CONNECTED = "connected"
    NOT_CONNECTED = "not_connected"
    UNKNOWN = "unknown"


def pair_key(entity_a: str, entity_b: str, separator: str | None = None) -> str:
    """Order-independent key for a pair: sorted identifiers joined by the separator."""
    sep = separator or settings.pair_separator
    first, second = sorted((entity_a, entity_b))
    return f"{first}{sep}{second}"


@dataclass(frozen=True)
class PairRelation:
    """Relation value for one ordered pair of entities."""

    entity_a: str
    entity_b: str
    pair_key: str
    value: RelationValue

    @property
    def status(self) -> RelationStatus:
        if self.value is None:
            return RelationStatus.UNKNOWN
        if self.value > 0:
            return RelationStatus.CONNECTED
        return RelationStatus.NOT_CONNECTED

    @property
    def connected(self) -> bool:
        return self.status is RelationStatus.CONNECTED

    @property
    def pair(self) -> tuple[str, str]:
        return (self.entity_a, self.entity_b)


def validate_entities(entities: Iterable[str], separator: str | None = None) -> list[str]:
    """
    Check that entity identifiers are usable as graph vertices.

    Args:
        entities: Entity identifiers, in the order they should appear
        separator: Pair-key separator; identifiers may not contain it

    Returns:
        The entities as a list (order preserved)

    Raises:
        InvalidInputError: On duplicates or identifiers containing the separator
    """
    sep = separator or settings.pair_separator
    items = list(entities)

    seen: set[str] = set()
    duplicates: list[str] = []
    for entity in items:
        if entity in seen and entity not in duplicates:
            duplicates.append(entity)
        seen.add(entity)
    if duplicates:
        raise InvalidInputError(f"Duplicate entities: {', '.join(map(str, duplicates))}")

    clashing = [e for e in items if sep in str(e)]
    if clashing:
        raise InvalidInputError(
            f"Entities contain the pair separator {sep!r}: {', '.join(map(str, clashing))}"
        )
    return items


def _check_value(pair: tuple[str, str], value: object) -> RelationValue:
    if value is None or isinstance(value, bool):
        return value
    # numpy integer scalars register as Integral
    if isinstance(value, Integral):
        count = int(value)
        if count < 0:
            raise RelationComputationError(pair, f"negative count {count}")
        return count
    raise RelationComputationError(
        pair, f"expected bool, int or None, got {type(value).__name__}"
    )


def compute_pairwise_relations(
    entities: Sequence[str],
    relation_fn: RelationFn,
    separator: str | None = None,
) -> list[PairRelation]:
    """
    Evaluate a relation for every ordered pair of distinct entities.

    Args:
        entities: Unique entity identifiers
        relation_fn: Called as relation_fn(a, b) for each ordered pair
        separator: Pair-key separator (defaults to settings.pair_separator)

    Returns:
        n·(n−1) PairRelation records in input order; empty when n < 2

    Raises:
        InvalidInputError: Duplicate entities
        RelationComputationError: relation_fn raised or returned a bad value
    """
    items = validate_entities(entities, separator)
    relations: list[PairRelation] = []

    for entity_a in items:
        for entity_b in items:
            if entity_a == entity_b:
                continue
            pair = (entity_a, entity_b)
            try:
                raw = relation_fn(entity_a, entity_b)
            except RelationComputationError:
                raise
            except Exception as exc:
                raise RelationComputationError(pair, str(exc) or type(exc).__name__) from exc
            relations.append(
                PairRelation(
                    entity_a=entity_a,
                    entity_b=entity_b,
                    pair_key=pair_key(entity_a, entity_b, separator),
                    value=_check_value(pair, raw),
                )
            )

    logger.debug(
        "Computed %d pair relations for %d entities (%d connected)",
        len(relations),
        len(items),
        sum(r.connected for r in relations),
    )
    return relations


class SharedAttributeRelation:
    """
    Relation counting attributes two entities have in common.

    Entities missing from the attribute mapping have no data; ``known`` holds
    the entities that do.
    """

    def __init__(self, attributes: Mapping[str, Iterable[str]]):
        self.attributes = {entity: frozenset(values) for entity, values in attributes.items()}
        self.known: frozenset[str] | None = frozenset(self.attributes)

    def __call__(self, entity_a: str, entity_b: str) -> int | None:
        if entity_a not in self.attributes or entity_b not in self.attributes:
            return None
        return len(self.attributes[entity_a] & self.attributes[entity_b])


class InteractionRelation:
    """
    Relation that is true when two entities interact directly (in either direction).

    ``known`` is the set of entities whose interactions were queried, or None
    when every entity was.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]], known: Collection[str] | None = None):
        self.edges = {frozenset(pair) for pair in pairs if pair[0] != pair[1]}
        self.known: frozenset[str] | None = frozenset(known) if known is not None else None

    def __call__(self, entity_a: str, entity_b: str) -> bool | None:
        if self.known is not None and (entity_a not in self.known or entity_b not in self.known):
            return None
        return frozenset((entity_a, entity_b)) in self.edges


def shared_attribute_relation(attributes: Mapping[str, Iterable[str]]) -> SharedAttributeRelation:
    """
    Build a shared-attribute relation.

    Args:
        attributes: Entity → attribute identifiers (e.g. Reactome pathway IDs).
            Entities missing from the mapping have no data.

    Returns:
        Relation returning the intersection size, or None when either entity
        has no entry
    """
    return SharedAttributeRelation(attributes)


def interaction_relation(
    pairs: Iterable[tuple[str, str]],
    known: Collection[str] | None = None,
) -> InteractionRelation:
    """
    Build an interaction relation.

    Args:
        pairs: Interacting entity pairs
        known: Entities whose interactions were actually queried; others are
            reported as unknown. None means every entity was queried.

    Returns:
        Relation returning True/False, or None for unqueried entities
    """
    return InteractionRelation(pairs, known)


def relations_frame(relations: Iterable[PairRelation]) -> pl.DataFrame:
    """Relations as a table (one row per ordered pair)."""
    rows = list(relations)
    return pl.DataFrame(
        {
            "entity_a": [r.entity_a for r in rows],
            "entity_b": [r.entity_b for r in rows],
            "pair_key": [r.pair_key for r in rows],
            "value": [None if r.value is None else int(r.value) for r in rows],
            "status": [r.status.value for r in rows],
            "connected": [r.connected for r in rows],
        },
        schema={
            "entity_a": pl.Utf8,
            "entity_b": pl.Utf8,
            "pair_key": pl.Utf8,
            "value": pl.Int64,
            "status": pl.Utf8,
            "connected": pl.Boolean,
        },
    )
