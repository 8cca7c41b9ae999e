from studyaid.config import get_settings
from studyaid.db.interfaces.postgresql import PostgreSQLDatabase


def make_database() -> PostgreSQLDatabase:
    """
    Create the database wrapper from settings.

    Returns:
        PostgreSQLDatabase: engine + session factory
    """
    settings = get_settings()
    return PostgreSQLDatabase(
        database_url=settings.postgres_database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        echo=settings.db_echo,
    )
