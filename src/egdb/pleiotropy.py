"""
Pleiotropy case study: group the proteins behind a set of genes.

Proteins that share Reactome pathways (or interact) end up in the same group,
suggesting a shared mechanism (vertical pleiotropy). Proteins left on their
own suggest independent mechanisms (horizontal pleiotropy).

    genes → proteins → pathways / PPI → relation graph → groups
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import networkx as nx
import polars as pl

from egdb.api import (
    EpiGraphDBClient,
    client_scope,
    gene_to_protein,
    protein_in_pathway,
    protein_ppi_pairwise,
)
from egdb.graph import (
    Group,
    GroupingResult,
    PairRelation,
    group_entities,
    groups_frame,
    interaction_relation,
    shared_attribute_relation,
)

logger = logging.getLogger(__name__)


@dataclass
class PleiotropyResult:
    """Proteins looked up for the genes and how they group."""

    proteins: pl.DataFrame
    grouping: GroupingResult

    @property
    def groups(self) -> list[Group]:
        return self.grouping.groups

    @property
    def graph(self) -> nx.Graph:
        return self.grouping.graph

    @property
    def unknown(self) -> list[str]:
        """Proteins for which the relation data was unavailable."""
        return self.grouping.unknown

    @property
    def relations(self) -> list[PairRelation]:
        return self.grouping.relations

    def groups_frame(self) -> pl.DataFrame:
        """Ranked groups with the gene names behind each member protein."""
        genes_by_protein: dict[str, list[str]] = {}
        for row in self.proteins.iter_rows(named=True):
            names = genes_by_protein.setdefault(row["uniprot_id"], [])
            if row["gene_name"] and row["gene_name"] not in names:
                names.append(row["gene_name"])

        df = groups_frame(self.groups)
        genes = [
            [name for member in g.sorted_members for name in genes_by_protein.get(member, [])]
            for g in self.groups
        ]
        return df.with_columns(pl.Series("genes", genes, dtype=pl.List(pl.Utf8)))


def _proteins_for(genes: Sequence[str], client: EpiGraphDBClient) -> tuple[pl.DataFrame, list[str]]:
    proteins = gene_to_protein(genes, client=client)
    uniprot_ids = proteins["uniprot_id"].unique(maintain_order=True).to_list()
    mapped = set(proteins["gene_name"].drop_nulls().to_list())
    missing = [g for g in genes if g not in mapped]
    if missing:
        logger.warning("No protein found for genes: %s", ", ".join(missing))
    return proteins, uniprot_ids


def pathway_groups(
    genes: Sequence[str],
    client: EpiGraphDBClient | None = None,
) -> PleiotropyResult:
    """
    Group proteins by shared Reactome pathways.

    Proteins with no pathway data are reported in ``unknown`` and stay
    isolated, rather than counting as sharing nothing.
    """
    with client_scope(client) as c:
        proteins, uniprot_ids = _proteins_for(genes, c)
        if not uniprot_ids:
            return PleiotropyResult(proteins=proteins, grouping=GroupingResult(entities=[]))
        pathways = protein_in_pathway(uniprot_ids, client=c)

    attributes = {
        row["uniprot_id"]: row["pathway_ids"] for row in pathways.iter_rows(named=True)
    }
    grouping = group_entities(uniprot_ids, shared_attribute_relation(attributes))
    if grouping.unknown:
        logger.warning("No pathway data for proteins: %s", ", ".join(grouping.unknown))

    logger.info(
        "Pathway grouping: %d proteins, %d edges, %d groups",
        len(uniprot_ids),
        grouping.graph.number_of_edges(),
        len(grouping.groups),
    )
    return PleiotropyResult(proteins=proteins, grouping=grouping)


def ppi_groups(
    genes: Sequence[str],
    n_intermediate_proteins: int = 0,
    client: EpiGraphDBClient | None = None,
) -> PleiotropyResult:
    """
    Group proteins by protein-protein interactions.

    Args:
        genes: Gene symbols
        n_intermediate_proteins: 0 for direct interactions only
    """
    with client_scope(client) as c:
        proteins, uniprot_ids = _proteins_for(genes, c)
        if not uniprot_ids:
            return PleiotropyResult(proteins=proteins, grouping=GroupingResult(entities=[]))
        ppi = protein_ppi_pairwise(uniprot_ids, n_intermediate_proteins, client=c)

    wanted = set(uniprot_ids)
    pairs = [
        (a, b)
        for a, b in zip(ppi["protein"].to_list(), ppi["assoc_protein"].to_list())
        if a in wanted and b in wanted
    ]
    grouping = group_entities(uniprot_ids, interaction_relation(pairs))

    logger.info(
        "PPI grouping (n_intermediate=%d): %d proteins, %d edges, %d groups",
        n_intermediate_proteins,
        len(uniprot_ids),
        grouping.graph.number_of_edges(),
        len(grouping.groups),
    )
    return PleiotropyResult(proteins=proteins, grouping=grouping)
