"""Entity: Contact and its nested Phone records."""

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from src.app.entities._base import Entity


class PhoneType(str, Enum):
    """Category of a phone number."""

    HOME = "home"
    WORK = "work"
    MOBILE = "mobile"


class Phone(Entity):
    """A single phone number owned by a contact."""

    model_config = ConfigDict(str_strip_whitespace=True, from_attributes=True)

    contact_id: str | None = Field(default=None, description="Owning contact")
    phone_number: str = Field(min_length=1, description="Phone number")
    phone_type: PhoneType = Field(default=PhoneType.HOME, description="Phone category")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Phone):
            return False

        return (
            self.id == other.id
            and self.phone_number == other.phone_number
            and self.phone_type == other.phone_type
        )

    def __hash__(self) -> int:
        return hash((self.id, self.phone_number, self.phone_type))


class Contact(Entity):
    """Contact entity representing a person in the address book.

    Construction runs the presence rules: ``firstname``, ``lastname`` and
    ``email`` must be non-blank once surrounding whitespace is stripped, and
    phone numbers must be unique within the contact. Email uniqueness across
    contacts needs the database and is checked by the contact service.
    """

    model_config = ConfigDict(str_strip_whitespace=True, from_attributes=True)

    firstname: str = Field(min_length=1, description="Contact's first name")
    lastname: str = Field(min_length=1, description="Contact's last name")
    email: str = Field(min_length=1, description="Contact's email address")
    phones: list[Phone] = Field(default_factory=list, description="Phone numbers")

    @field_validator("phones")
    @classmethod
    def _unique_phone_numbers(cls, phones: list[Phone]) -> list[Phone]:
        seen: set[str] = set()
        for phone in phones:
            if phone.phone_number in seen:
                raise ValueError(f"duplicate phone number {phone.phone_number}")
            seen.add(phone.phone_number)
        return phones

    @property
    def name(self) -> str:
        """Full name, first name then last name."""
        return f"{self.firstname} {self.lastname}"

    def __eq__(self, other: Any) -> bool:
        """Compare contacts by business attributes, ignoring timestamps."""
        if not isinstance(other, Contact):
            return False

        return (
            self.id == other.id
            and self.firstname == other.firstname
            and self.lastname == other.lastname
            and self.email == other.email
            and self.phones == other.phones
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.firstname,
            self.lastname,
            self.email,
            tuple(self.phones),
        ))
