"""Contacts router: list, show, new, edit, create, update and destroy.

``list`` and ``show`` are public. Every other operation is authorized by a
dependency before the handler body touches any contact data.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlmodel import Session
from starlette.responses import Response

from src.app.api.http.deps import (
    get_contact_service,
    get_current_role,
    get_db_session,
    require_permission,
)
from src.app.api.http.responder import Redirect, Render, respond
from src.app.core.access import Operation
from src.app.core.errors import ContactValidationError
from src.app.core.services import ContactService
from src.app.entities.contact import Contact, ContactAttributes
from src.app.runtime.context import get_config

router = APIRouter(prefix="/contacts", tags=["contacts"])


async def read_contact_attributes(request: Request) -> ContactAttributes:
    """Parse a JSON or HTML form contact payload."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            return ContactAttributes.model_validate(await request.json())
        form = await request.form()
        return ContactAttributes.from_form(
            (key, value) for key, value in form.multi_items() if isinstance(value, str)
        )
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    except ValueError as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": str(exc), "input": None}]
        ) from exc


def _phone_types() -> list[str]:
    return list(get_config().contacts.phone_types)


def _form_view(
    template: str,
    form: ContactAttributes,
    contact: Contact | None = None,
    errors: dict[str, list[str]] | None = None,
) -> Render:
    return Render(
        template,
        {"contact": contact, "form": form, "errors": errors or {}},
        status_code=422 if errors else 200,
    )


@router.get("", dependencies=[Depends(get_current_role)])
def list_contacts(
    request: Request,
    letter: str | None = None,
    service: ContactService = Depends(get_contact_service),
) -> Response:
    """List contacts, optionally only those whose last name starts with ``letter``."""
    contacts = service.list_contacts(letter=letter)
    return respond(
        request, Render("contacts/index.html", {"contacts": contacts, "letter": letter})
    )


@router.get("/new", dependencies=[Depends(require_permission(Operation.NEW))])
def new_contact(request: Request) -> Response:
    form = ContactAttributes.blank(_phone_types())
    return respond(request, _form_view("contacts/new.html", form))


@router.get("/{contact_id}", dependencies=[Depends(get_current_role)])
def show_contact(
    request: Request,
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
) -> Response:
    contact = service.get_contact(contact_id)
    return respond(request, Render("contacts/show.html", {"contact": contact}))


@router.get("/{contact_id}/edit", dependencies=[Depends(require_permission(Operation.EDIT))])
def edit_contact(
    request: Request,
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
) -> Response:
    contact = service.get_contact(contact_id)
    form = ContactAttributes.from_contact(contact, _phone_types())
    return respond(request, _form_view("contacts/edit.html", form, contact=contact))


@router.post("", dependencies=[Depends(require_permission(Operation.CREATE))])
async def create_contact(
    request: Request,
    db: Session = Depends(get_db_session),
    service: ContactService = Depends(get_contact_service),
) -> Response:
    attributes = await read_contact_attributes(request)
    try:
        contact = service.create_contact(attributes)
    except ContactValidationError as exc:
        return respond(
            request, _form_view("contacts/new.html", attributes, errors=exc.errors)
        )

    db.commit()
    return respond(request, Redirect(f"/contacts/{contact.id}"))


@router.api_route(
    "/{contact_id}",
    methods=["PUT", "PATCH"],
    dependencies=[Depends(require_permission(Operation.UPDATE))],
)
async def update_contact(
    request: Request,
    contact_id: str,
    db: Session = Depends(get_db_session),
    service: ContactService = Depends(get_contact_service),
) -> Response:
    attributes = await read_contact_attributes(request)
    try:
        contact = service.update_contact(contact_id, attributes)
    except ContactValidationError as exc:
        db.rollback()
        current = service.get_contact(contact_id)
        submitted = {
            name: getattr(attributes, name)
            for name in attributes.model_fields_set
            if getattr(attributes, name) is not None
        }
        form = ContactAttributes.from_contact(current, _phone_types()).model_copy(
            update=submitted
        )
        return respond(
            request,
            _form_view("contacts/edit.html", form, contact=current, errors=exc.errors),
        )

    db.commit()
    return respond(request, Redirect(f"/contacts/{contact.id}"))


@router.delete("/{contact_id}", dependencies=[Depends(require_permission(Operation.DESTROY))])
def destroy_contact(
    contact_id: str,
    request: Request,
    db: Session = Depends(get_db_session),
    service: ContactService = Depends(get_contact_service),
) -> Response:
    service.destroy_contact(contact_id)
    db.commit()
    return respond(request, Redirect("/contacts"))
