"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.app.api.http.app_data import ApplicationDependencies
from src.app.core.access import Operation, Role, authorize, role_for
from src.app.core.services import ContactService, UserSessionService
from src.app.entities.user import User, UserRepository
from src.app.runtime.context import get_config


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session tied to the current request lifecycle.

    Handlers commit explicitly; anything left uncommitted is rolled back.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    db = app_deps.database_service.get_session()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_user_session_service(request: Request) -> UserSessionService:
    """Get the User Session service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.user_session_service


def get_contact_service(db: Session = Depends(get_db_session)) -> ContactService:
    return ContactService(db)


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db_session),
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> User | None:
    """Resolve the signed-in user from the session cookie.

    A missing cookie, an unknown or expired session, or a session whose
    user no longer exists all mean "not signed in".
    """
    session_id = request.cookies.get(get_config().security.session_cookie_name)
    if not session_id:
        return None

    user_session = await user_session_service.get_user_session(session_id)
    if user_session is None:
        return None

    user = UserRepository(db).get(user_session.user_id)
    if user is None:
        return None

    request.state.session_id = session_id
    return user


async def get_current_role(
    request: Request, user: User | None = Depends(get_current_user)
) -> Role:
    """Classify the caller as guest, user or administrator."""
    role = role_for(user)
    request.state.role = role
    request.state.user = user
    return role


def require_permission(operation: Operation):
    """Create a dependency that rejects callers not allowed to run ``operation``."""

    async def dep(role: Role = Depends(get_current_role)) -> Role:
        authorize(role, operation)
        return role

    return dep
