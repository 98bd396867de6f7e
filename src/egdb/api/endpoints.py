"""
Tabular query functions for the EpiGraphDB endpoints used by egdb.

Each function takes an optional client; when omitted a client is created from
settings for the duration of the call.
"""

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, TypeVar

import polars as pl

from egdb.api.client import EpiGraphDBClient, results_frame
from egdb.errors import APIResponseError, InvalidInputError

T = TypeVar("T")

GENE_PROTEIN_SCHEMA = {"gene_name": pl.Utf8, "gene_id": pl.Utf8, "uniprot_id": pl.Utf8}
PROTEIN_PATHWAY_SCHEMA = {
    "uniprot_id": pl.Utf8,
    "pathway_count": pl.Int64,
    "pathway_ids": pl.List(pl.Utf8),
}
PPI_SCHEMA = {"protein": pl.Utf8, "assoc_protein": pl.Utf8, "path_size": pl.Int64}


@contextmanager
def client_scope(client: EpiGraphDBClient | None) -> Iterator[EpiGraphDBClient]:
    if client is not None:
        yield client
        return
    with EpiGraphDBClient() as owned:
        yield owned


def _field(row: dict, *path: str) -> Any:
    """
    Read a possibly nested field.

    Accepts both {"gene": {"name": ...}} and the flattened {"gene.name": ...}.
    """
    flat = ".".join(path)
    if flat in row:
        return row[flat]
    value: Any = row
    for key in path:
        if not isinstance(value, dict) or key not in value:
            return None
        value = value[key]
    return value


def _rows(endpoint: str, rows: list[dict], build: Callable[[dict], T]) -> list[T]:
    try:
        return [build(row) for row in rows]
    except (TypeError, ValueError, AttributeError) as exc:
        raise APIResponseError(f"{endpoint}: unexpected row format ({exc})") from exc


def _unique(values: Sequence[str], what: str) -> list[str]:
    items = list(dict.fromkeys(values))
    if not items:
        raise InvalidInputError(f"At least one {what} is required")
    return items


def ping(client: EpiGraphDBClient | None = None) -> bool:
    """Check that the API is reachable."""
    with client_scope(client) as c:
        return bool(c.get("/ping"))


def gene_to_protein(
    genes: Sequence[str],
    by_gene_id: bool = False,
    client: EpiGraphDBClient | None = None,
) -> pl.DataFrame:
    """
    Map genes to the proteins they encode.

    Args:
        genes: Gene symbols (or Ensembl gene IDs when by_gene_id is True)
        by_gene_id: Interpret genes as Ensembl IDs

    Returns:
        DataFrame with columns gene_name, gene_id, uniprot_id
    """
    endpoint = "/mappings/gene-to-protein"
    items = _unique(genes, "gene")
    payload: dict[str, Any] = {"by_gene_id": by_gene_id}
    payload["gene_id_list" if by_gene_id else "gene_name_list"] = items

    with client_scope(client) as c:
        rows = c.post_results(endpoint, payload)

    records = _rows(
        endpoint,
        rows,
        lambda r: {
            "gene_name": _field(r, "gene", "name"),
            "gene_id": _field(r, "gene", "ensembl_id"),
            "uniprot_id": _field(r, "protein", "uniprot_id"),
        },
    )
    return pl.DataFrame(records, schema=GENE_PROTEIN_SCHEMA).filter(
        pl.col("uniprot_id").is_not_null()
    )


def protein_in_pathway(
    uniprot_ids: Sequence[str],
    client: EpiGraphDBClient | None = None,
) -> pl.DataFrame:
    """
    Reactome pathway membership for proteins.

    Proteins without pathway data are absent from the result.

    Returns:
        DataFrame with columns uniprot_id, pathway_count, pathway_ids
    """
    endpoint = "/protein/in-pathway"
    items = _unique(uniprot_ids, "protein")

    with client_scope(client) as c:
        rows = c.post_results(endpoint, {"uniprot_id_list": items})

    def build(row: dict) -> dict:
        pathway_ids = [str(p) for p in (_field(row, "pathway_reactome_id") or [])]
        count = _field(row, "pathway_count")
        return {
            "uniprot_id": _field(row, "uniprot_id"),
            "pathway_count": int(count) if count is not None else len(pathway_ids),
            "pathway_ids": pathway_ids,
        }

    return pl.DataFrame(_rows(endpoint, rows, build), schema=PROTEIN_PATHWAY_SCHEMA)


def protein_ppi_pairwise(
    uniprot_ids: Sequence[str],
    n_intermediate_proteins: int = 0,
    client: EpiGraphDBClient | None = None,
) -> pl.DataFrame:
    """
    Protein-protein interactions among a set of proteins.

    Args:
        uniprot_ids: Proteins to test pairwise
        n_intermediate_proteins: Maximum intermediate proteins on a path (0 = direct)

    Returns:
        DataFrame with columns protein, assoc_protein, path_size
    """
    endpoint = "/protein/ppi/pairwise"
    if n_intermediate_proteins < 0:
        raise InvalidInputError("n_intermediate_proteins must be >= 0")
    items = _unique(uniprot_ids, "protein")

    with client_scope(client) as c:
        rows = c.post_results(
            endpoint,
            {"uniprot_id_list": items, "n_intermediate_proteins": n_intermediate_proteins},
        )

    def build(row: dict) -> dict:
        protein = _field(row, "protein", "uniprot_id") or _field(row, "protein")
        assoc = _field(row, "assoc_protein", "uniprot_id") or _field(row, "assoc_protein")
        path_size = _field(row, "path_size")
        return {
            "protein": protein,
            "assoc_protein": assoc,
            "path_size": int(path_size) if path_size is not None else None,
        }

    return pl.DataFrame(_rows(endpoint, rows, build), schema=PPI_SCHEMA)


def mr(
    exposure_trait: str | None = None,
    outcome_trait: str | None = None,
    pval_threshold: float = 1e-5,
    client: EpiGraphDBClient | None = None,
) -> pl.DataFrame:
    """
    Mendelian randomization results between traits.

    Returns:
        Flattened results (exposure.*, outcome.*, mr.* columns)
    """
    if exposure_trait is None and outcome_trait is None:
        raise InvalidInputError("Specify exposure_trait, outcome_trait or both")

    with client_scope(client) as c:
        rows = c.get_results(
            "/mr",
            {
                "exposure_trait": exposure_trait,
                "outcome_trait": outcome_trait,
                "pval_threshold": pval_threshold,
            },
        )
    return results_frame(rows)
