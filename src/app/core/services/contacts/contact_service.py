"""Contact operations behind the contacts request handler."""

from typing import Any

from loguru import logger
from pydantic import ValidationError
from sqlmodel import Session

from src.app.core.errors import (
    ContactNotFoundError,
    ContactValidationError,
    field_errors,
)
from src.app.entities.contact import (
    Contact,
    ContactAttributes,
    ContactRepository,
    Phone,
    PhoneAttributes,
    PhoneType,
)

EMAIL_TAKEN_MESSAGE = "has already been taken"
UNKNOWN_PHONE_MESSAGE = "references an unknown phone"


class ContactService:
    """Validates and persists contacts with their nested phones.

    Validation always completes before the repository is touched, so a
    rejected payload leaves the database unchanged. The caller commits.
    """

    def __init__(self, session: Session) -> None:
        self._repository = ContactRepository(session)

    def list_contacts(self, letter: str | None = None) -> list[Contact]:
        return self._repository.list_all(letter=letter or None)

    def count(self) -> int:
        return self._repository.count()

    def get_contact(self, contact_id: str) -> Contact:
        contact = self._repository.get(contact_id)
        if contact is None:
            raise ContactNotFoundError(contact_id)
        return contact

    def create_contact(self, attributes: ContactAttributes) -> Contact:
        candidate = {
            "firstname": attributes.firstname or "",
            "lastname": attributes.lastname or "",
            "email": attributes.email or "",
            "phones": [
                self._new_phone(phone)
                for phone in attributes.phones or []
                if not phone.is_blank
            ],
        }
        contact = self._validate(candidate, errors={})

        created = self._repository.create(contact)
        logger.bind(contact_id=created.id, phones=len(created.phones)).info(
            "contact.created"
        )
        return created

    def update_contact(self, contact_id: str, attributes: ContactAttributes) -> Contact:
        existing = self.get_contact(contact_id)

        errors: dict[str, list[str]] = {}
        candidate = existing.model_dump(exclude={"phones", "updated_at"})
        candidate.update(attributes.scalars())
        candidate["phones"] = self._merge_phones(existing.phones, attributes.phones, errors)

        contact = self._validate(candidate, errors, exclude_id=existing.id)

        updated = self._repository.update(contact)
        logger.bind(contact_id=updated.id, phones=len(updated.phones)).info(
            "contact.updated"
        )
        return updated

    def destroy_contact(self, contact_id: str) -> None:
        if not self._repository.delete(contact_id):
            raise ContactNotFoundError(contact_id)
        logger.bind(contact_id=contact_id).info("contact.destroyed")

    def _validate(
        self,
        candidate: dict[str, Any],
        errors: dict[str, list[str]],
        exclude_id: str | None = None,
    ) -> Contact:
        contact = None
        try:
            contact = Contact.model_validate(candidate)
        except ValidationError as exc:
            for field, messages in field_errors(exc).items():
                errors.setdefault(field, []).extend(messages)

        email = str(candidate.get("email", "")).strip()
        if email and self._repository.email_taken(email, exclude_id=exclude_id):
            errors.setdefault("email", []).append(EMAIL_TAKEN_MESSAGE)

        if errors or contact is None:
            logger.bind(contact_id=exclude_id, errors=errors).info("contact.invalid")
            raise ContactValidationError(errors)
        return contact

    @staticmethod
    def _merge_phones(
        current: list[Phone],
        entries: list[PhoneAttributes] | None,
        errors: dict[str, list[str]],
    ) -> list[dict[str, Any]]:
        """Upsert phone entries onto the contact's current phones.

        Entries with an ``id`` update only the fields they carry, or remove
        the phone when they carry a blank number. Entries without an ``id``
        are appended unless blank. Phones not mentioned are kept.
        """
        phones = {phone.id: phone.model_dump() for phone in current}
        added: list[dict[str, Any]] = []

        for entry in entries or []:
            supplied = entry.supplied()
            if entry.id is None:
                if not entry.is_blank:
                    added.append(ContactService._new_phone(entry))
            elif entry.id not in phones:
                errors.setdefault("phones", []).append(UNKNOWN_PHONE_MESSAGE)
            elif "phone_number" in supplied and entry.is_blank:
                del phones[entry.id]
            else:
                phones[entry.id].update(supplied)

        return [*phones.values(), *added]

    @staticmethod
    def _new_phone(entry: PhoneAttributes) -> dict[str, Any]:
        return {
            "phone_number": entry.phone_number,
            "phone_type": entry.phone_type or PhoneType.HOME.value,
        }
