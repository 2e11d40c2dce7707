from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from freelance_api.core.config import settings

# Global engine instance
_engine = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY constraints unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(db_url: str, **kwargs) -> Engine:
    """Create an engine for db_url, applying the SQLite specific settings when needed."""
    if db_url.startswith("sqlite"):
        # SQLite fix for multithreading
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        new_engine = create_engine(db_url, **kwargs)
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
        return new_engine

    return create_engine(db_url, pool_pre_ping=True, **kwargs)


def get_engine() -> Engine:
    global _engine

    if _engine is None:
        _engine = create_db_engine(settings.database_url)
    return _engine


engine = get_engine()


def init_db(target_engine: Engine = None) -> None:
    """Create any missing tables."""
    # Import models so every table is registered on the metadata
    import freelance_api.models  # noqa: F401

    SQLModel.metadata.create_all(target_engine or engine)


def get_db():
    with Session(engine) as session:
        yield session
