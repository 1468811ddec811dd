"""Account management CLI commands."""

import typer
from rich.table import Table

from src.app.entities.user import User, UserRepository

from . import utils

# Create the users subcommand app
users_app = typer.Typer(help="Manage user accounts")


@users_app.command("list")
def list_users() -> None:
    """List all accounts."""
    with utils.get_database_service().session_scope() as db:
        users = UserRepository(db).list_all()

    if not users:
        utils.console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Email", style="blue")
    table.add_column("First Name", style="magenta")
    table.add_column("Last Name", style="magenta")
    table.add_column("Admin", style="yellow")

    for user in users:
        table.add_row(
            user.id,
            user.email,
            user.first_name,
            user.last_name,
            "✅" if user.admin else "❌",
        )

    utils.console.print(table)
    utils.console.print(f"\n[green]Found {len(users)} users[/green]")


@users_app.command("create")
def create_user(
    email: str = typer.Argument(..., help="Email address used to sign in"),
    first_name: str = typer.Option("", "--first-name", "-f", help="First name"),
    last_name: str = typer.Option("", "--last-name", "-l", help="Last name"),
    admin: bool = typer.Option(False, "--admin", help="Grant administrator role"),
) -> None:
    """Create a new account."""
    with utils.get_database_service().session_scope() as db:
        repository = UserRepository(db)
        user = None
        if repository.get_by_email(email) is None:
            user = repository.create(
                User(first_name=first_name, last_name=last_name, email=email, admin=admin)
            )

    if user is None:
        utils.console.print(f"[red]❌ User '{email}' already exists[/red]")
        raise typer.Exit(code=1)

    role = "administrator" if user.admin else "user"
    utils.console.print(f"[green]✅ Created {role} '{user.email}' ({user.id})[/green]")
