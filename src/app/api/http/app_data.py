from dataclasses import dataclass

from src.app.core.services import DbSessionService, UserSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    user_session_service: UserSessionService
