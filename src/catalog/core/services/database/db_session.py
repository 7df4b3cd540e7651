"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import Engine, StaticPool, text
from sqlmodel import Session, create_engine

from src.catalog.core.exceptions import CatalogError, StorageError
from src.catalog.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig, environment: str = "development"):
        """Initialize the shared database engine and session factory."""

        logger.info("Configuring database engine for environment: {}", environment)
        self._config = db_config
        self._engine = create_engine(
            db_config.url, **self._get_engine_kwargs(db_config, environment)
        )

    @staticmethod
    def _get_engine_kwargs(db_config: DatabaseConfig, environment: str) -> dict:
        """Pool and driver arguments appropriate for the configured backend."""
        engine_kwargs: dict = {"echo": db_config.echo}

        if db_config.is_sqlite:
            engine_kwargs["connect_args"] = {
                "check_same_thread": False,  # sessions cross threadpool workers
                "timeout": 20,  # lock timeout
            }
            if db_config.is_memory:
                # One shared connection, otherwise every checkout sees an empty database
                engine_kwargs["poolclass"] = StaticPool
            if environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
            return engine_kwargs

        engine_kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
                "pool_pre_ping": True,
            }
        )
        if "postgresql" in db_config.url:
            engine_kwargs["connect_args"] = {
                "application_name": f"{environment}_catalog",
                "connect_timeout": 30,
            }
        return engine_kwargs

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # entities are built from rows after commit
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Context manager style helper for CLI commands and tests."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def dispose(self) -> None:
        """Release every pooled connection."""
        logger.info("Disposing database engine")
        self._engine.dispose()


@contextmanager
def storage_guard(
    session: Session, operation: str, message: str | None = None
) -> Iterator[None]:
    """Roll back on failure and hide driver errors behind ``StorageError``.

    Domain errors raised inside the block pass through unchanged.
    """
    try:
        yield
    except CatalogError:
        session.rollback()
        raise
    except Exception as exc:
        session.rollback()
        logger.exception("{} failed", operation)
        raise StorageError(message) from exc
