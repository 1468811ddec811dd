"""User domain entity."""

from typing import Any

from pydantic import Field

from src.app.entities._base import Entity


class User(Entity):
    """Account that a session resolves to.

    ``admin`` marks administrators; every other account is a plain user.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str = Field(description="User's email address")
    admin: bool = Field(default=False, description="Administrator flag")

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
            and self.admin == other.admin
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.first_name,
            self.last_name,
            self.email,
            self.admin,
        ))
