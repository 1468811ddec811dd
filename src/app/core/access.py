"""Role-based access control for the contacts handler.

The access matrix below is the single source of truth for which role may
perform which operation.
"""

from enum import Enum

from loguru import logger

from src.app.core.errors import LoginRequiredError
from src.app.entities.user import User


class Role(str, Enum):
    GUEST = "guest"
    USER = "user"
    ADMINISTRATOR = "administrator"


class Operation(str, Enum):
    LIST = "list"
    SHOW = "show"
    NEW = "new"
    EDIT = "edit"
    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"


_EVERYONE = frozenset(Role)
_SIGNED_IN = frozenset({Role.USER, Role.ADMINISTRATOR})

PERMISSIONS: dict[Operation, frozenset[Role]] = {
    Operation.LIST: _EVERYONE,
    Operation.SHOW: _EVERYONE,
    Operation.NEW: _SIGNED_IN,
    Operation.EDIT: _SIGNED_IN,
    Operation.CREATE: _SIGNED_IN,
    Operation.UPDATE: _SIGNED_IN,
    Operation.DESTROY: _SIGNED_IN,
}


def role_for(user: User | None) -> Role:
    """Classify the account behind a request."""
    if user is None:
        return Role.GUEST
    if user.admin:
        return Role.ADMINISTRATOR
    return Role.USER


def is_permitted(role: Role, operation: Operation) -> bool:
    return role in PERMISSIONS[operation]


def authorize(role: Role, operation: Operation) -> None:
    """Raise :class:`LoginRequiredError` unless ``role`` may run ``operation``."""
    if not is_permitted(role, operation):
        logger.bind(role=role.value, operation=operation.value).info("access.denied")
        raise LoginRequiredError(operation.value)
