"""Schema management for the application database."""

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel


def create_all(engine: Engine) -> None:
    """Create all database tables."""
    # Register table models with the metadata
    from src.app.entities.contact import ContactTable, PhoneTable  # noqa: F401
    from src.app.entities.user import UserTable  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database initialized with tables.")
