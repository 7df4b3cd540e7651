"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.routers.auth import router as auth_router
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.http.routers.service.product import (
    dev_router as product_dev_router,
)
from src.catalog.api.http.routers.service.product import router as product_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.exceptions import CatalogError, ValidationError
from src.catalog.core.security import AuthorizationGate, default_extractors
from src.catalog.core.services import (
    DbManageService,
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
    PasswordService,
)
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, environment: str = "development"):
        super().__init__(app)
        self._environment = environment

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if self._environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    # Query strings are left out on purpose, filters may carry user input
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

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"message": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- Error mapping ---
def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.bind(error_type=type(exc).__name__).error(
            "request.failed: {}", exc.message
        )
    else:
        logger.bind(status_code=exc.status_code, code=exc.code).info(
            "request.rejected: {}", exc.message
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.to_dict(), "request_id": _request_id(request)},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return await catalog_error_handler(
        request, ValidationError.from_pydantic(exc.errors())
    )


def build_dependencies(config: ConfigData) -> ApplicationDependencies:
    """Create the application-wide services for ``config``."""
    environment = config.app.environment
    jwt_verify_service = JwtVerificationService(config.jwt, environment)
    return ApplicationDependencies(
        config=config,
        database_service=DbSessionService(config.database, environment),
        password_service=PasswordService(config.security),
        jwt_generation_service=JwtGeneratorService(config.jwt, environment),
        jwt_verify_service=jwt_verify_service,
        authorization_gate=AuthorizationGate(
            default_extractors(config.security.token_cookie_name),
            jwt_verify_service,
        ),
    )


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the API for ``config`` (the active context configuration by default)."""
    config = config or get_config()
    config.validate_runtime()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up application in {} environment", config.app.environment)
        deps = build_dependencies(config)
        if config.database.create_tables:
            DbManageService(deps.database_service.engine).create_all()
        app.state.app_dependencies = deps
        try:
            yield
        finally:
            logger.info("Shutting down application")
            deps.database_service.dispose()

    is_production = config.app.environment == "production"
    app = FastAPI(
        title=config.app.name,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.add_middleware(SecurityHeadersMiddleware, environment=config.app.environment)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    # Added last so it wraps every other middleware
    app.middleware("http")(log_requests)

    app.include_router(health_router)
    app.include_router(auth_router)
    if config.app.dev_routes_enabled:
        app.include_router(product_dev_router)
    app.include_router(product_router)

    return app


def create_default_app() -> FastAPI:
    """Entrypoint for ``uvicorn --factory``: configure logging, then build the app."""
    configure_logging()
    return create_app()


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        create_default_app(),
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
