"""Database management CLI commands."""

import typer

from src.app.core.services.database.db_manage import create_all

from . import utils

db_app = typer.Typer(help="Manage the contacts database")


@db_app.command("init")
def init() -> None:
    """Create all database tables."""
    database_service = utils.get_database_service()
    try:
        create_all(database_service.engine)
    except Exception as e:
        utils.console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e

    utils.console.print("[green]✅ Database initialized[/green]")
