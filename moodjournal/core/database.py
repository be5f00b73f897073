"""
Database engine construction for the embedded SQLite backend.
"""
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from moodjournal.core.exceptions import InitializationError


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ships with foreign key enforcement off; cascades depend on it.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the process-wide engine.

    A ``StaticPool`` keeps exactly one DBAPI connection open until the engine
    is disposed, which also lets ``sqlite://`` in-memory databases survive
    across sessions.
    """
    if not database_url.startswith("sqlite"):
        raise InitializationError(f"Unsupported database URL for the embedded backend: {database_url}")

    engine = create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine
