"""User management CLI commands."""

import typer
from rich.console import Console

from src.catalog.cli.database import cli_session
from src.catalog.core.exceptions import CatalogError
from src.catalog.core.services import (
    JwtGeneratorService,
    PasswordService,
    UserManagementService,
)
from src.catalog.runtime.context import get_config

console = Console()

users_app = typer.Typer(help="Manage catalog user accounts")


def _user_service(session) -> UserManagementService:
    config = get_config()
    return UserManagementService(
        session,
        PasswordService(config.security),
        JwtGeneratorService(config.jwt, config.app.environment),
    )


@users_app.command("add")
def add_user(
    username: str = typer.Argument(..., help="Username for the new user"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
    show_token: bool = typer.Option(
        False, "--show-token", help="Print an access token for the new user"
    ),
) -> None:
    """Register a new user."""
    if len(username.strip()) < 6:
        console.print("[red]❌ Username must be at least 6 characters[/red]")
        raise typer.Exit(code=1)
    if len(password) < 8:
        console.print("[red]❌ Password must be at least 8 characters[/red]")
        raise typer.Exit(code=1)

    try:
        with cli_session() as session:
            user, token = _user_service(session).register(username.strip(), password)
    except CatalogError as e:
        console.print(f"[red]❌ Failed to create user: {e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created user '{user.username}' ({user.id})[/green]")
    if show_token:
        console.print(token)


@users_app.command("deactivate")
def deactivate_user(
    username: str = typer.Argument(..., help="Username to deactivate"),
) -> None:
    """Disable an account. Its tokens stop working immediately."""
    try:
        with cli_session() as session:
            _user_service(session).deactivate(username)
    except CatalogError as e:
        console.print(f"[red]❌ Failed to deactivate user: {e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Deactivated user '{username}'[/green]")
