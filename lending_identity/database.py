"""SQLModel database engine and session management."""

import logging

from sqlalchemy import inspect
from sqlmodel import SQLModel, create_engine, Session

from lending_identity.config import settings

logger = logging.getLogger(__name__)

# SQLite needs check_same_thread=False; PostgreSQL does not
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)


def create_db_and_tables():
    """Create all tables. Called on startup."""
    import lending_identity.models  # noqa: F401  registers table metadata

    SQLModel.metadata.create_all(engine)
    tables = ", ".join(sorted(inspect(engine).get_table_names()))
    logger.info(f"Database ready: {tables}")


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(engine) as session:
        yield session
