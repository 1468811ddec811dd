"""Sign-in and sign-out endpoints.

Passwords are not handled here: sign-in by email alone is only available
while ``email_login_enabled`` is on (the default outside production).
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from sqlmodel import Session
from starlette.responses import RedirectResponse, Response

from src.app.api.http.deps import get_db_session, get_user_session_service
from src.app.api.http.responder import Render, respond
from src.app.core.services import UserSessionService
from src.app.entities.user import UserRepository
from src.app.runtime.context import get_config

router = APIRouter(prefix="/auth", tags=["auth"])


def _require_email_login() -> None:
    if not get_config().email_login_enabled:
        raise HTTPException(status_code=404, detail="Not Found")


@router.get("/login", dependencies=[Depends(_require_email_login)])
def login_form(request: Request) -> Response:
    return respond(request, Render("auth/login.html", {"email": "", "error": None}))


@router.post("/login", dependencies=[Depends(_require_email_login)])
async def login(
    request: Request,
    db: Session = Depends(get_db_session),
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> Response:
    form = await request.form()
    email = str(form.get("email", "")).strip()

    user = UserRepository(db).get_by_email(email) if email else None
    if user is None:
        logger.bind(email=email).info("login.rejected")
        return respond(
            request,
            Render(
                "auth/login.html",
                {"email": email, "error": "No account with that email address"},
                status_code=401,
            ),
        )

    config = get_config()
    session_id = await user_session_service.create_user_session(user.id)
    response = RedirectResponse("/contacts", status_code=303)
    response.set_cookie(
        config.security.session_cookie_name,
        session_id,
        max_age=config.app.session_max_age,
        httponly=True,
        secure=config.security.secure_cookies,
        samesite=config.security.cookie_samesite,
    )
    return response


@router.post("/logout")
async def logout(
    request: Request,
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> Response:
    cookie_name = get_config().security.session_cookie_name
    session_id = request.cookies.get(cookie_name)
    if session_id:
        await user_session_service.delete_user_session(session_id)

    response = RedirectResponse("/contacts", status_code=303)
    response.delete_cookie(cookie_name)
    return response
