"""Contact inspection CLI commands."""

import typer
from rich.table import Table

from src.app.core.services import ContactService

from . import utils

contacts_app = typer.Typer(help="Inspect contacts")


@contacts_app.command("list")
def list_contacts(
    letter: str | None = typer.Option(
        None, "--letter", help="Only last names starting with this letter"
    ),
) -> None:
    """List contacts in display order."""
    with utils.get_database_service().session_scope() as db:
        contacts = ContactService(db).list_contacts(letter=letter)

    if not contacts:
        utils.console.print("[yellow]No contacts found[/yellow]")
        return

    table = Table(title="Contacts")
    table.add_column("Name", style="green")
    table.add_column("Email", style="blue")
    table.add_column("Phones", style="magenta")

    for contact in contacts:
        phones = ", ".join(
            f"{phone.phone_type.value}: {phone.phone_number}" for phone in contact.phones
        )
        table.add_row(contact.name, contact.email, phones)

    utils.console.print(table)
    utils.console.print(f"\n[green]Found {len(contacts)} contacts[/green]")
