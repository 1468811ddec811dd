"""Contact repository: data access for contacts and their phones."""

from datetime import UTC, datetime

from sqlalchemy import func
from sqlmodel import Session, select

from src.app.entities.contact.entity import Contact, Phone
from src.app.entities.contact.table import ContactTable, PhoneTable


class ContactRepository:
    """Data-access layer for contacts.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, contact_id: str) -> Contact | None:
        row = self._session.get(ContactTable, contact_id)
        if row is None:
            return None
        return self._to_entity(row)

    def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        """Whether another contact already uses ``email``."""
        statement = select(ContactTable.id).where(ContactTable.email == email)
        if exclude_id is not None:
            statement = statement.where(ContactTable.id != exclude_id)
        return self._session.exec(statement).first() is not None

    def list_all(self, letter: str | None = None) -> list[Contact]:
        """Contacts ordered by last name then first name.

        ``letter`` keeps only last names starting with it. The comparison is
        case-sensitive on every backend, so ``LIKE`` is not used.
        """
        statement = select(ContactTable)
        if letter:
            statement = statement.where(
                func.substr(ContactTable.lastname, 1, len(letter)) == letter
            )
        statement = statement.order_by(
            ContactTable.lastname, ContactTable.firstname, ContactTable.id
        )
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def count(self) -> int:
        statement = select(func.count()).select_from(ContactTable)
        return self._session.exec(statement).one()

    def create(self, contact: Contact) -> Contact:
        row = ContactTable(
            id=contact.id,
            firstname=contact.firstname,
            lastname=contact.lastname,
            email=contact.email,
            created_at=contact.created_at,
            updated_at=contact.updated_at,
        )
        row.phones = [
            self._phone_row(phone, row.id, position)
            for position, phone in enumerate(contact.phones)
        ]
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def update(self, contact: Contact) -> Contact:
        """Store ``contact`` over its existing row.

        The stored phones are made to match ``contact.phones`` exactly:
        matching ids are updated in place, new ids inserted, and phones no
        longer listed are deleted.
        """
        row = self._session.get(ContactTable, contact.id)
        if row is None:
            raise ValueError(f"Contact with id {contact.id} not found")

        row.firstname = contact.firstname
        row.lastname = contact.lastname
        row.email = contact.email
        row.updated_at = datetime.now(UTC)

        existing = {phone.id: phone for phone in row.phones}
        phones = []
        for position, phone in enumerate(contact.phones):
            phone_row = existing.get(phone.id)
            if phone_row is None:
                phone_row = self._phone_row(phone, row.id, position)
            else:
                phone_row.phone_number = phone.phone_number
                phone_row.phone_type = phone.phone_type.value
                phone_row.position = position
            phones.append(phone_row)
        row.phones = phones

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, contact_id: str) -> bool:
        row = self._session.get(ContactTable, contact_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    @staticmethod
    def _phone_row(phone: Phone, contact_id: str, position: int) -> PhoneTable:
        return PhoneTable(
            id=phone.id,
            contact_id=contact_id,
            phone_number=phone.phone_number,
            phone_type=phone.phone_type.value,
            position=position,
        )

    @staticmethod
    def _to_entity(row: ContactTable) -> Contact:
        return Contact.model_validate(row, from_attributes=True)
