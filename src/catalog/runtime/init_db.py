"""Database initialization script."""

from src.catalog.core.services.database import DbManageService, DbSessionService
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config


def init_db(config: ConfigData | None = None) -> None:
    """Create all database tables."""
    config = config or get_config()
    database_service = DbSessionService(config.database, config.app.environment)
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
