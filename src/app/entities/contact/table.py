"""Contact and phone database table models."""

from sqlmodel import Field, Relationship

from src.app.entities._base import EntityTable


class ContactTable(EntityTable, table=True):
    """Database persistence model for contacts."""

    __tablename__ = "contacts"

    firstname: str
    lastname: str = Field(index=True)
    email: str = Field(unique=True, index=True)

    phones: list["PhoneTable"] = Relationship(
        back_populates="contact",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "PhoneTable.position",
        },
    )


class PhoneTable(EntityTable, table=True):
    """Database persistence model for a contact's phone numbers.

    Rows are owned by their contact and removed with it.
    """

    __tablename__ = "phones"

    contact_id: str = Field(foreign_key="contacts.id", index=True)
    phone_number: str
    phone_type: str
    position: int = Field(default=0)

    contact: ContactTable | None = Relationship(back_populates="phones")
