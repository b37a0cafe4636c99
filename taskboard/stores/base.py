"""Storage contract shared by every task backend."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class TaskStore(ABC):
    """Collection-style access to the ``tasks`` collection/table.

    Records are returned in the backend's native shape (its own primary-key
    field and type). Malformed ids raise ``InvalidTaskIdError``; missing
    records are reported through ``None`` / ``False`` return values. Driver
    failures surface as ``TaskStoreError``.
    """

    @abstractmethod
    def list_tasks(self, complete: Optional[bool] = None) -> List[Record]:
        """Return all tasks, optionally only those whose ``complete`` equals the given value."""

    @abstractmethod
    def get_task(self, task_id: str) -> Optional[Record]:
        """Return a task by id, or None when no record exists."""

    @abstractmethod
    def insert_task(self, fields: Record) -> Record:
        """Persist a new task and return the stored record, id and timestamps included."""

    @abstractmethod
    def update_task(self, task_id: str, fields: Record) -> Optional[Record]:
        """Overwrite the given fields and return the stored record, or None when missing."""

    @abstractmethod
    def delete_task(self, task_id: str) -> bool:
        """Delete a task. Returns True if deleted, False if not found."""

    def close(self) -> None:
        """Release the underlying connection resources."""
