from .base import TaskStore
from .memory import MemoryTaskStore
from .sql import SqlTaskStore

MEMORY_URL_SCHEME = "memory://"


def build_store(database_url: str) -> TaskStore:
    """Open the backend named by ``database_url``.

    ``memory://`` selects the document store; any other URL is handed to SQLAlchemy.
    """
    if database_url.startswith(MEMORY_URL_SCHEME):
        return MemoryTaskStore()
    return SqlTaskStore(database_url)


__all__ = ["TaskStore", "MemoryTaskStore", "SqlTaskStore", "build_store"]
