# fitness_api/main.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request

from fitness_api.api.v1.router import api_router
from fitness_api.core.config import Settings, get_settings
from fitness_api.core.errors import AppError
from fitness_api.core.logging import setup_logging
from fitness_api.core.security_password import PasswordHasher, build_password_context
from fitness_api.core.tokens import TokenService
from fitness_api.db.bootstrap import run_migrations_and_seed
from fitness_api.db.session import Database

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    # fail closed before anything is served
    settings.validate_secrets()
    setup_logging(settings.LOG_LEVEL)

    api = FastAPI(
        title="Fitness Membership API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
    )
    api.state.settings = settings
    api.state.db = Database(settings.DATABASE_URL)
    api.state.tokens = TokenService(settings)
    api.state.passwords = PasswordHasher(build_password_context(
        time_cost=settings.PASSWORD_HASH_TIME_COST,
        memory_cost=settings.PASSWORD_HASH_MEMORY_COST,
    ))

    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # /metrics (Prometheus)
    if settings.ENABLE_METRICS:
        Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

    api.include_router(api_router, prefix="/api/v1")

    @api.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    @api.on_event("startup")
    def startup():
        run_migrations_and_seed(api.state.db, settings)

    @api.on_event("shutdown")
    def shutdown():
        api.state.db.dispose()

    @api.exception_handler(AppError)
    def handle_app_error(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": exc.message})

    @api.exception_handler(IntegrityError)
    def handle_integrity_error(request: Request, exc: IntegrityError):
        logger.warning("integrity error on %s %s: %s", request.method, request.url.path, getattr(exc, "orig", exc))
        return JSONResponse(
            status_code=409,
            content={"code": "UNIQUE_VIOLATION", "message": "Duplicate record."},
        )

    @api.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"code": "INTERNAL_ERROR", "message": "Internal error."},
        )

    return api


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("fitness_api.main:create_app", factory=True, host="0.0.0.0", port=8000)
