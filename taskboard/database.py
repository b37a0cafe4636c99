from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task  # noqa: F401


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # A single shared connection keeps the in-memory database alive across threads
            return create_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    # Postgres and friends: disable pooling for serverless and enable pre-ping
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        poolclass=NullPool,
    )


@contextmanager
def get_session(engine: Engine):
    """Get a database session bound to ``engine`` (context manager style).

    Usage:
        with get_session(engine) as session:
            # do something with session
    """
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()


def create_tables(engine: Engine) -> None:
    """Create all database tables."""
    SQLModel.metadata.create_all(bind=engine)
