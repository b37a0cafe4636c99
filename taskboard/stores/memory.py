"""In-process document store.

Documents carry their key in ``_id`` (24 lowercase hex characters, generated
here), the way document databases do. Useful for development and tests, and
as the second backend behind the same interface as the SQL store.
"""
import copy
import logging
import re
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from ..errors import InvalidTaskIdError, TaskStoreError
from .base import Record, TaskStore

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")
_NOT_NULL_FIELDS = ("title", "complete")


def _check_id(task_id: str) -> str:
    if not isinstance(task_id, str) or not _ID_PATTERN.match(task_id):
        raise InvalidTaskIdError(task_id)
    return task_id


def _check_not_null(document: Record) -> None:
    for name in _NOT_NULL_FIELDS:
        if document.get(name) is None:
            raise TaskStoreError(f"Field '{name}' of collection 'tasks' cannot be null")


class MemoryTaskStore(TaskStore):
    """Simple in-memory document storage."""

    def __init__(self) -> None:
        self._documents: Dict[str, Record] = {}
        self._lock = threading.Lock()
        logger.info("Opened in-memory task store")

    def list_tasks(self, complete: Optional[bool] = None) -> List[Record]:
        with self._lock:
            return [
                copy.deepcopy(document)
                for document in self._documents.values()
                if complete is None or document.get("complete") == complete
            ]

    def get_task(self, task_id: str) -> Optional[Record]:
        key = _check_id(task_id)
        with self._lock:
            document = self._documents.get(key)
            return copy.deepcopy(document) if document is not None else None

    def insert_task(self, fields: Record) -> Record:
        now = datetime.now(timezone.utc)
        document = {"description": "", "complete": False}
        document.update(copy.deepcopy(fields))
        _check_not_null(document)
        document.update({"_id": uuid4().hex[:24], "created_at": now, "updated_at": now})

        with self._lock:
            self._documents[document["_id"]] = document
            return copy.deepcopy(document)

    def update_task(self, task_id: str, fields: Record) -> Optional[Record]:
        key = _check_id(task_id)
        with self._lock:
            document = self._documents.get(key)
            if document is None:
                return None

            updated = dict(document)
            updated.update(copy.deepcopy(fields))
            _check_not_null(updated)
            updated["updated_at"] = datetime.now(timezone.utc)
            self._documents[key] = updated
            return copy.deepcopy(updated)

    def delete_task(self, task_id: str) -> bool:
        key = _check_id(task_id)
        with self._lock:
            return self._documents.pop(key, None) is not None

    def close(self) -> None:
        with self._lock:
            self._documents.clear()
        logger.info("Closed in-memory task store")
