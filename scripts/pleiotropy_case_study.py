#!/usr/bin/env python
"""
Pleiotropy case study.

Takes genes near a variant, maps them to proteins, and groups the proteins
two ways: by shared Reactome pathways and by protein-protein interactions.
Groups of one point to horizontal pleiotropy, larger groups to vertical.

Usage:
    uv run python scripts/pleiotropy_case_study.py
    uv run python scripts/pleiotropy_case_study.py TYK2 ICAM1 ICAM3 --intermediate 1
"""

from __future__ import annotations

from dotenv import load_dotenv
load_dotenv(override=True)

import argparse

import polars as pl
from rich.console import Console
from rich.table import Table

from egdb.api import EpiGraphDBClient
from egdb.graph import relations_frame
from egdb.log import configure_logging
from egdb.pleiotropy import PleiotropyResult, pathway_groups, ppi_groups

console = Console()

# Genes in the neighbourhood of rs12720356 (chr19)
DEFAULT_GENES = [
    "TYK2", "ICAM1", "ICAM3", "ICAM4", "ICAM5",
    "S1PR2", "S1PR5", "DNMT1", "CDC37", "ATG4D", "KRI1",
]


def show(result: PleiotropyResult, title: str) -> None:
    table = Table(title=title)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Genes")
    table.add_column("Pleiotropy", style="magenta")
    for row in result.groups_frame().iter_rows(named=True):
        table.add_row(
            str(row["group_id"]), str(row["size"]), ", ".join(row["genes"]), row["pleiotropy"]
        )
    console.print(table)
    if result.unknown:
        console.print(f"  [yellow]no data:[/] {', '.join(result.unknown)}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("genes", nargs="*", default=DEFAULT_GENES)
    parser.add_argument("--intermediate", type=int, default=0, help="PPI path intermediates")
    parser.add_argument("--relations", action="store_true", help="Also print pathway relations")
    args = parser.parse_args()

    configure_logging()

    with EpiGraphDBClient() as client:
        pathways = pathway_groups(args.genes, client=client)
        ppi = ppi_groups(args.genes, n_intermediate_proteins=args.intermediate, client=client)

    show(pathways, "Shared pathway groups")
    if args.relations:
        console.print(relations_frame(pathways.relations).filter(pl.col("connected")))
    show(ppi, f"PPI groups (≤{args.intermediate} intermediates)")


if __name__ == "__main__":
    main()
