"""Shared helpers for CLI commands."""

from rich.console import Console

from src.app.core.services import DbSessionService

console = Console()


def get_database_service() -> DbSessionService:
    """Database service for the configured database."""
    return DbSessionService()
