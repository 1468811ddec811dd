"""User database table model."""

from sqlmodel import Field

from src.app.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for user accounts."""

    __tablename__ = "users"

    first_name: str
    last_name: str
    email: str = Field(unique=True, index=True)
    admin: bool = Field(default=False)
