"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import (
    JwtGeneratorService,
    PasswordService,
    ProductLedgerService,
    UserManagementService,
)
from src.catalog.entities.core.user import User
from src.catalog.runtime.config.config_data import ConfigData


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_app_config(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> ConfigData:
    """Get the configuration the application was created with."""
    return app_deps.config


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield a request-scoped database session."""
    session = app_deps.database_service.get_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_password_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> PasswordService:
    return app_deps.password_service


def get_jwt_generation_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> JwtGeneratorService:
    return app_deps.jwt_generation_service


def get_user_management_service(
    db_session: Session = Depends(get_db_session),
    password_service: PasswordService = Depends(get_password_service),
    token_service: JwtGeneratorService = Depends(get_jwt_generation_service),
) -> UserManagementService:
    """Get the User Management service instance."""
    return UserManagementService(db_session, password_service, token_service)


def get_product_ledger(
    db_session: Session = Depends(get_db_session),
) -> ProductLedgerService:
    """Get a product ledger bound to the request session."""
    return ProductLedgerService(db_session)


def get_current_user(
    request: Request,
    db_session: Session = Depends(get_db_session),
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> User:
    """Authenticate the request with a Bearer header or the token cookie."""
    return app_deps.authorization_gate.authorize(request, db_session)
