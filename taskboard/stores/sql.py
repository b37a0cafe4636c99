import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from ..database import create_db_engine, create_tables, get_session
from ..errors import InvalidTaskIdError, TaskStoreError
from ..models import Task
from .base import Record, TaskStore

logger = logging.getLogger(__name__)


_MAX_ID_DIGITS = 18  # stays inside a signed 64-bit INTEGER


def _parse_id(task_id: str) -> int:
    raw = str(task_id)
    if not (raw.isascii() and raw.isdigit()) or len(raw) > _MAX_ID_DIGITS:
        raise InvalidTaskIdError(task_id)
    return int(raw)


@contextmanager
def _store_errors():
    try:
        yield
    except SQLAlchemyError as exc:
        raise TaskStoreError(str(exc.orig) if getattr(exc, "orig", None) else str(exc)) from exc


class SqlTaskStore(TaskStore):
    """Relational backend on top of SQLModel; integer primary keys."""

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = create_db_engine(database_url, echo=echo)
        with _store_errors():
            create_tables(self.engine)
        logger.info("Opened SQL task store (%s)", self.engine.url.get_backend_name())

    def list_tasks(self, complete: Optional[bool] = None) -> List[Record]:
        query = select(Task)
        if complete is not None:
            query = query.where(Task.complete == complete)
        query = query.order_by(Task.id)

        with _store_errors(), get_session(self.engine) as session:
            return [task.model_dump() for task in session.exec(query).all()]

    def get_task(self, task_id: str) -> Optional[Record]:
        pk = _parse_id(task_id)
        with _store_errors(), get_session(self.engine) as session:
            task = session.get(Task, pk)
            return task.model_dump() if task else None

    def insert_task(self, fields: Record) -> Record:
        with _store_errors(), get_session(self.engine) as session:
            task = Task(**fields)
            session.add(task)
            session.commit()
            session.refresh(task)
            return task.model_dump()

    def update_task(self, task_id: str, fields: Record) -> Optional[Record]:
        pk = _parse_id(task_id)
        with _store_errors(), get_session(self.engine) as session:
            task = session.get(Task, pk)
            if not task:
                return None

            for field, value in fields.items():
                setattr(task, field, value)
            task.updated_at = datetime.now(timezone.utc)

            session.add(task)
            session.commit()
            session.refresh(task)
            return task.model_dump()

    def delete_task(self, task_id: str) -> bool:
        pk = _parse_id(task_id)
        with _store_errors(), get_session(self.engine) as session:
            task = session.get(Task, pk)
            if not task:
                return False

            session.delete(task)
            session.commit()
            return True

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Closed SQL task store")
