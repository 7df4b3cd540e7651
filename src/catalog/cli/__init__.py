"""Main CLI application module."""

import typer
import uvicorn

from src.catalog.runtime.context import get_config
from src.catalog.runtime.init_db import init_db

from .product_commands import products_app
from .user_commands import users_app

# Create the main CLI application
app = typer.Typer(
    help="🛒 Product Catalog CLI - serve the API and manage its data",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(users_app, name="users")
app.add_typer(products_app, name="products")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (config app.host)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (config app.port)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
) -> None:
    """Run the API with uvicorn."""
    config = get_config()
    uvicorn.run(
        "src.catalog.api.http.app:create_default_app",
        factory=True,
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        access_log=False,  # We handle access logging in middleware
    )


@app.command("init-db")
def init_db_command() -> None:
    """Create all database tables."""
    init_db()
    typer.echo("Database initialized")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
