"""Errors raised by the contact services and the authorization layer."""

from pydantic import ValidationError

BLANK_MESSAGE = "can't be blank"


class ContactNotFoundError(Exception):
    """The requested contact does not exist."""

    def __init__(self, contact_id: str):
        super().__init__(f"Contact {contact_id} not found")
        self.contact_id = contact_id


class ContactValidationError(Exception):
    """A contact payload failed validation.

    ``errors`` maps a field name to its messages.
    """

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(
            "; ".join(f"{field} {', '.join(msgs)}" for field, msgs in errors.items())
        )
        self.errors = errors


class LoginRequiredError(Exception):
    """The caller must sign in before performing the operation."""

    def __init__(self, operation: str):
        super().__init__("Login required")
        self.operation = operation


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by top-level field.

    Presence failures read ``can't be blank``; nested phone errors are
    reported under ``phones``.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "base"
        if error["type"] in ("missing", "string_too_short"):
            message = BLANK_MESSAGE
        else:
            message = error["msg"].removeprefix("Value error, ")
        if len(error["loc"]) > 1:
            message = f"{error['loc'][-1]} {message}"
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors
