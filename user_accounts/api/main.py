"""
Name: User Accounts API (ASGI entry point)

Responsibilities:
  - Build the FastAPI app: /api/users router, RFC 7807 handlers, CORS and
    request-context middleware, /healthz
  - Lifespan: open the psycopg pool (skipped with APP_ENV=test, which runs on
    the in-memory repository), seed the dev admin, close the pool on exit

Run:
  uvicorn user_accounts.api.main:app --host 0.0.0.0 --port 8080
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .. import __version__
from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_password_hasher, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from .exception_handlers import register_exception_handlers
from .routers import users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    uses_postgres = not settings.is_test()

    if uses_postgres:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )
    try:
        seeded = ensure_dev_admin(
            settings,
            user_repo=get_user_repository(),
            password_hasher=get_password_hasher(),
        )
        logger.info(
            "User Accounts API lista",
            extra={
                "app_env": settings.app_env,
                "store": "postgres" if uses_postgres else "in-memory",
                "dev_admin": seeded.username if seeded else None,
            },
        )
        yield
    finally:
        if uses_postgres:
            close_pool()
        logger.info("User Accounts API detenida")


def _cors_options() -> dict:
    # El import del módulo no debe fallar sin DATABASE_URL (p.ej. generar OpenAPI).
    try:
        settings = get_settings()
        origins = settings.get_allowed_origins_list() or ["*"]
        credentials = settings.cors_allow_credentials
    except ValidationError:
        origins, credentials = ["*"], False
    return {
        "allow_origins": origins,
        "allow_credentials": credentials,
        "allow_methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization", REQUEST_ID_HEADER],
        "expose_headers": [REQUEST_ID_HEADER],
    }


def healthz(request: Request) -> dict:
    """ok/db según ping() del repositorio de usuarios."""
    db_ok = get_user_repository().ping()
    return {
        "ok": db_ok,
        "db": "connected" if db_ok else "disconnected",
        "request_id": getattr(request.state, "request_id", None),
    }


def create_app() -> FastAPI:
    app = FastAPI(
        title="User Accounts API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "users",
                "description": "Cuentas de usuario; rutas ADMIN exigen Bearer JWT",
            }
        ],
    )
    # add_middleware apila: CORS (último agregado) corre primero.
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(CORSMiddleware, **_cors_options())

    app.include_router(users_router)
    app.add_api_route("/healthz", healthz, methods=["GET"], include_in_schema=False)
    register_exception_handlers(app)
    return app


app = create_app()
