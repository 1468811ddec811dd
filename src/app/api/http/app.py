"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, RedirectResponse

from src.app.api.http.app_data import ApplicationDependencies
from src.app.api.http.middleware import MethodOverrideMiddleware
from src.app.api.http.responder import Render, respond
from src.app.api.http.routers.auth import router as auth_router
from src.app.api.http.routers.contacts import router as contacts_router
from src.app.api.http.routers.health import router as health_router
from src.app.api.utils.app_startup import configure_logging
from src.app.core.errors import ContactNotFoundError, LoginRequiredError
from src.app.core.services import DbSessionService, UserSessionService
from src.app.core.services.database.db_manage import create_all
from src.app.core.storage import create_session_storage
from src.app.runtime.context import get_config

# Initialize logging
configure_logging()


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return response


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    # Tests install their own dependencies before the app starts
    if getattr(app.state, "app_dependencies", None) is None:
        database_service = DbSessionService()
        session_storage = await create_session_storage()
        app.state.app_dependencies = ApplicationDependencies(
            database_service=database_service,
            user_session_service=UserSessionService(session_storage),
        )

    create_all(app.state.app_dependencies.database_service.engine)


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    await app_dependencies.user_session_service.purge_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


app = FastAPI(
    title="Contacts",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

# expose lifecycle hooks for tests
__all__ = ["app", "startup", "shutdown"]

app.add_middleware(SecurityHeadersMiddleware)

# --- CORS configuration ---
if get_config().app.environment == "production" and (
    "*" in get_config().app.cors.origins
):
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().app.cors.origins,
    allow_credentials=get_config().app.cors.allow_credentials,
    allow_methods=get_config().app.cors.allow_methods,
    allow_headers=get_config().app.cors.allow_headers,
)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    # Correlation / tracing
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")

        # Attach correlation id
        response.headers.setdefault("X-Request-ID", request_id)
        return response


# Outermost, so routing and request logs see the overridden method
app.add_middleware(MethodOverrideMiddleware)


# --- Exception handlers ---
@app.exception_handler(LoginRequiredError)
async def login_required_handler(request: Request, exc: LoginRequiredError):
    return RedirectResponse(get_config().security.login_path, status_code=303)


@app.exception_handler(ContactNotFoundError)
async def contact_not_found_handler(request: Request, exc: ContactNotFoundError):
    return respond(
        request,
        Render("not_found.html", {"contact_id": exc.contact_id}, status_code=404),
    )


# --- Router registration ---
app.include_router(contacts_router)
app.include_router(auth_router)
app.include_router(health_router)


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse("/contacts", status_code=303)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
