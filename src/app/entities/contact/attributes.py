"""Request payloads for creating and updating contacts.

These models are deliberately lenient: they accept blank or missing values
so a rejected submission can be rendered back into the form unchanged. The
strict rules live on :class:`Contact`.
"""

import re
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from src.app.entities.contact.entity import Contact

_PHONE_KEY = re.compile(r"^phones\[(\d+)\]\[(\w+)\]$")
_SCALAR_FIELDS = ("firstname", "lastname", "email")


class PhoneAttributes(BaseModel):
    """Nested phone entry of a contact payload."""

    id: str | None = None
    phone_number: str | None = None
    phone_type: str | None = None

    @property
    def is_blank(self) -> bool:
        return not (self.phone_number or "").strip()

    def supplied(self) -> dict[str, str]:
        """Phone fields present in the payload, for a partial update."""
        return {
            name: value
            for name in ("phone_number", "phone_type")
            if name in self.model_fields_set and (value := getattr(self, name)) is not None
        }


class ContactAttributes(BaseModel):
    """Attribute payload for create and update.

    ``None`` means "not supplied", which an update leaves untouched.
    """

    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None
    phones: list[PhoneAttributes] | None = Field(default=None)

    def scalars(self) -> dict[str, str]:
        """Supplied scalar attributes only."""
        return {
            name: value
            for name in _SCALAR_FIELDS
            if (value := getattr(self, name)) is not None
        }

    @classmethod
    def blank(cls, phone_types: Sequence[str]) -> "ContactAttributes":
        """Empty form values with one blank phone per type."""
        return cls(
            firstname="",
            lastname="",
            email="",
            phones=[PhoneAttributes(phone_type=kind) for kind in phone_types],
        )

    @classmethod
    def from_contact(
        cls, contact: Contact, phone_types: Sequence[str] = ()
    ) -> "ContactAttributes":
        """Form values for an existing contact.

        A blank entry is appended for each phone type the contact lacks so
        the edit form can add numbers.
        """
        phones = [
            PhoneAttributes(
                id=phone.id,
                phone_number=phone.phone_number,
                phone_type=phone.phone_type.value,
            )
            for phone in contact.phones
        ]
        present = {phone.phone_type for phone in phones}
        phones.extend(
            PhoneAttributes(phone_type=kind) for kind in phone_types if kind not in present
        )
        return cls(
            firstname=contact.firstname,
            lastname=contact.lastname,
            email=contact.email,
            phones=phones,
        )

    @classmethod
    def from_form(cls, items: Iterable[tuple[str, str]]) -> "ContactAttributes":
        """Build from HTML form fields.

        Phones use indexed keys such as ``phones[0][phone_number]``; entries
        are kept in index order. Unknown keys are ignored.
        """
        data: dict[str, object] = {}
        phones: dict[int, dict[str, str]] = {}

        for key, value in items:
            if key in _SCALAR_FIELDS:
                data[key] = value
                continue
            match = _PHONE_KEY.match(key)
            if match is None:
                continue
            index, field = int(match.group(1)), match.group(2)
            if field in PhoneAttributes.model_fields:
                phones.setdefault(index, {})[field] = value

        if phones:
            data["phones"] = [
                {k: v for k, v in phones[i].items() if not (k == "id" and not v)}
                for i in sorted(phones)
            ]
        return cls.model_validate(data)
