"""
Command-line interface for egdb.

Commands:
- ping: Check the EpiGraphDB API is reachable
- pathway-groups: Group the proteins of some genes by shared pathways
- ppi-groups: Group the proteins of some genes by protein-protein interactions
"""

from enum import Enum
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from egdb.errors import EgdbError
from egdb.log import configure_logging

app = typer.Typer(
    name="egdb",
    help="EpiGraphDB client and relation-graph grouping CLI",
    no_args_is_help=True,
)
console = Console()

GenesOption = Annotated[list[str], typer.Option("--gene", "-g", help="Gene symbols to group")]


class LogLevel(str, Enum):
    """Levels accepted by --log-level (same as Settings.log_level)."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@app.callback()
def main(
    log_level: LogLevel | None = typer.Option(
        None, "--log-level", "-l", case_sensitive=False, help="Logging level"
    ),
):
    """EpiGraphDB client and relation-graph grouping."""
    configure_logging(log_level.value if log_level else None)


def _print_groups(result, title: str) -> None:
    df = result.groups_frame()

    table = Table(title=title, show_header=True)
    table.add_column("Group", justify="right", style="cyan")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Proteins")
    table.add_column("Genes", style="dim")
    table.add_column("Pleiotropy")

    for row in df.iter_rows(named=True):
        style = "yellow" if row["pleiotropy"] == "horizontal" else "magenta"
        table.add_row(
            str(row["group_id"]),
            str(row["size"]),
            ", ".join(row["members"]),
            ", ".join(row["genes"]),
            f"[{style}]{row['pleiotropy']}[/]",
        )
    console.print(table)

    if result.unknown:
        console.print(f"[yellow]No data for: {', '.join(result.unknown)}[/]")


@app.command()
def ping():
    """Check the EpiGraphDB API is reachable."""
    from egdb.api import ping as api_ping
    from egdb.config import settings

    try:
        ok = api_ping()
    except EgdbError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if not ok:
        console.print(f"[bold red]{settings.api_url} did not respond to ping[/]")
        raise typer.Exit(code=1)
    console.print(f"[bold green]{settings.api_url} is up[/]")


@app.command("pathway-groups")
def pathway_groups(genes: GenesOption):
    """Group the proteins of the given genes by shared Reactome pathways."""
    from egdb import pleiotropy

    console.print(f"[bold blue]Pathway grouping for: {', '.join(genes)}[/]")
    try:
        result = pleiotropy.pathway_groups(genes)
    except EgdbError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(code=1) from exc
    _print_groups(result, "Shared-pathway groups")


@app.command("ppi-groups")
def ppi_groups(
    genes: GenesOption,
    intermediate: int = typer.Option(
        0, "--intermediate", "-n", min=0, help="Intermediate proteins allowed on a path"
    ),
):
    """Group the proteins of the given genes by protein-protein interactions."""
    from egdb import pleiotropy

    console.print(f"[bold blue]PPI grouping for: {', '.join(genes)}[/]")
    try:
        result = pleiotropy.ppi_groups(genes, n_intermediate_proteins=intermediate)
    except EgdbError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(code=1) from exc
    _print_groups(result, "PPI groups")


if __name__ == "__main__":
    app()
