"""Product maintenance CLI commands."""

import typer
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from src.catalog.cli.database import cli_session
from src.catalog.core.exceptions import CatalogError
from src.catalog.core.services import ProductLedgerService, ProductListQuery
from src.catalog.runtime.context import get_config

console = Console()

products_app = typer.Typer(help="Inspect and maintain catalog products")


@products_app.command("seed")
def seed_products(
    count: int = typer.Option(30, "--count", "-n", min=1, max=500, help="Products to create"),
    actor: str = typer.Option("cli", "--actor", "-a", help="Identity recorded as creator"),
) -> None:
    """Insert random products."""
    try:
        with cli_session() as session:
            created = ProductLedgerService(session).generate_samples(count, actor=actor)
    except CatalogError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ {created} random products created successfully[/green]")


@products_app.command("clear")
def clear_products(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete every product."""
    if not force and not Confirm.ask("Remove ALL products?"):
        console.print("[yellow]Aborted[/yellow]")
        raise typer.Exit(code=0)

    try:
        with cli_session() as session:
            deleted = ProductLedgerService(session).clear()
    except CatalogError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Removed {deleted} products[/green]")


@products_app.command("list")
def list_products(
    name: str | None = typer.Option(None, "--name", help="Case-insensitive name filter"),
    sort_by: str = typer.Option("createdAt", "--sort-by", help="name, price, createdAt or description"),
    sort_order: str = typer.Option("desc", "--sort-order", help="asc or desc"),
    page: int = typer.Option(1, "--page"),
    limit: int = typer.Option(10, "--limit", "-l"),
) -> None:
    """Show one page of products."""
    try:
        query = ProductListQuery.from_params(
            {
                "name": name,
                "sortBy": sort_by,
                "sortOrder": sort_order,
                "page": str(page),
                "limit": str(limit),
            },
            get_config().pagination,
        )
        with cli_session() as session:
            result = ProductLedgerService(session).list(query)
    except CatalogError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title=f"Products (page {result.page} of {result.total_pages})")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Price", style="yellow", justify="right")
    table.add_column("Price changes", justify="right")
    table.add_column("Updated by", style="magenta")

    for product in result.products:
        table.add_row(
            product.id,
            product.name,
            f"{product.price:.2f}",
            str(len(product.price_history)),
            product.updated_by,
        )

    console.print(table)
    console.print(f"\n[green]{result.total} products match[/green]")
