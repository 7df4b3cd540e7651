"""Database access for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlmodel import Session

from src.catalog.core.services.database import DbManageService, DbSessionService
from src.catalog.runtime.context import get_config


@contextmanager
def cli_session() -> Iterator[Session]:
    """Session against the configured database, creating tables first if needed."""
    config = get_config()
    database_service = DbSessionService(config.database, config.app.environment)
    try:
        if config.database.create_tables:
            DbManageService(database_service.engine).create_all()
        with database_service.session_scope() as session:
            yield session
    finally:
        database_service.dispose()
