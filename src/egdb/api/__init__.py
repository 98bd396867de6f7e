"""
EpiGraphDB API access.

Thin HTTP binding returning polars DataFrames; no analysis happens here.
"""

from egdb.api.client import EpiGraphDBClient, extract_results, results_frame
from egdb.api.endpoints import (
    client_scope,
    gene_to_protein,
    mr,
    ping,
    protein_in_pathway,
    protein_ppi_pairwise,
)

__all__ = [
    "EpiGraphDBClient",
    "client_scope",
    "extract_results",
    "results_frame",
    "gene_to_protein",
    "mr",
    "ping",
    "protein_in_pathway",
    "protein_ppi_pairwise",
]
