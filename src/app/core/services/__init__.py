"""Core services exports."""

from .contacts import ContactService
from .database.db_session import DbSessionService
from .session.user_session import UserSessionService

__all__ = [
    "ContactService",
    "DbSessionService",
    "UserSessionService",
]
