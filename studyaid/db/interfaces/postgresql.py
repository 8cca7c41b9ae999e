import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class PostgreSQLDatabase:
    """Engine and session factory for the study-aid database."""

    def __init__(self, database_url: str, pool_size: int = 10, max_overflow: int = 20, echo: bool = False):
        self.database_url = database_url
        self.engine: Engine = create_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            echo=echo,
        )
        self.session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    @classmethod
    def from_engine(cls, engine: Engine) -> "PostgreSQLDatabase":
        """Wrap an existing engine (used for SQLite in tests)."""
        database = cls.__new__(cls)
        database.database_url = str(engine.url)
        database.engine = engine
        database.session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        return database

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        session = self.session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> Optional[str]:
        """Return None when the database answers, else the error text."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return None
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return str(e)

    def teardown(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")
