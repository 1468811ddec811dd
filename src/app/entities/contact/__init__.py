"""Entity package: Contact with nested Phone records."""

from .attributes import ContactAttributes, PhoneAttributes
from .entity import Contact, Phone, PhoneType
from .repository import ContactRepository
from .table import ContactTable, PhoneTable

__all__ = [
    "Contact",
    "ContactAttributes",
    "ContactRepository",
    "ContactTable",
    "Phone",
    "PhoneAttributes",
    "PhoneTable",
    "PhoneType",
]
