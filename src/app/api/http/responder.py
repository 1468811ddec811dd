"""Turn handler outcomes into HTTP responses.

An outcome is either a :class:`Render` of a named template with its context,
or a :class:`Redirect` to a target path.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import RedirectResponse, Response

from src.app.core.access import Operation, Role, is_permitted

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@dataclass(frozen=True)
class Render:
    template: str
    context: dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class Redirect:
    target: str
    status_code: int = 303


Outcome = Render | Redirect


def respond(request: Request, outcome: Outcome) -> Response:
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.target, status_code=outcome.status_code)

    role: Role = getattr(request.state, "role", Role.GUEST)
    context = {
        "current_role": role,
        "can": lambda operation: is_permitted(role, Operation(operation)),
        **outcome.context,
    }
    return templates.TemplateResponse(
        request, outcome.template, context, status_code=outcome.status_code
    )
