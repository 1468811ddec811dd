"""Entities organized by business concept.

Each entity package colocates:
- entity.py: Domain model with validation
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .contact import (
    Contact,
    ContactAttributes,
    ContactRepository,
    ContactTable,
    Phone,
    PhoneAttributes,
    PhoneTable,
    PhoneType,
)
from .user import User, UserRepository, UserTable

__all__ = [
    "Contact",
    "ContactAttributes",
    "ContactRepository",
    "ContactTable",
    "Phone",
    "PhoneAttributes",
    "PhoneTable",
    "PhoneType",
    "User",
    "UserRepository",
    "UserTable",
]
