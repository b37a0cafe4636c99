import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..errors import InvalidTaskIdError, TaskStoreError
from ..normalizer import to_client_shape, to_store_shape
from ..schemas.task import ErrorResponse, Message, Task as TaskSchema, TaskCreate, TaskReplace
from ..stores import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_store(request: Request) -> TaskStore:
    """Dependency returning the store opened by the application lifespan."""
    return request.app.state.store


def parse_complete_filter(complete: Optional[str]) -> Optional[bool]:
    """Coerce the ``complete`` query value.

    Only the literal ``"true"`` selects completed tasks; any other value,
    ``"false"`` and garbage alike, selects incomplete ones. Existing clients
    rely on this, so unrecognised values are logged rather than rejected.
    """
    if complete is None:
        return None
    if complete not in ("true", "false"):
        logger.warning("Unrecognised complete filter %r, treating it as false", complete)
    return complete == "true"


def _not_found(task_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Task with ID {task_id} not found",
    )


def _store_failure(exc: TaskStoreError) -> HTTPException:
    logger.error("Task store error: %s", exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/tasks", response_model=List[TaskSchema], responses=_ERROR_RESPONSES)
def list_tasks(
    complete: Optional[str] = None,
    store: TaskStore = Depends(get_store),
):
    """Get all tasks, optionally filtered on completion."""
    try:
        records = store.list_tasks(complete=parse_complete_filter(complete))
    except TaskStoreError as exc:
        raise _store_failure(exc)
    return [to_client_shape(record) for record in records]


@router.get("/tasks/{task_id}", response_model=TaskSchema, responses=_ERROR_RESPONSES)
def get_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Get a specific task by ID."""
    try:
        record = store.get_task(task_id)
    except InvalidTaskIdError:
        raise _not_found(task_id)
    except TaskStoreError as exc:
        raise _store_failure(exc)

    if record is None:
        raise _not_found(task_id)
    return to_client_shape(record)


@router.post(
    "/tasks",
    response_model=TaskSchema,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
def create_task(task: Optional[TaskCreate] = None, store: TaskStore = Depends(get_store)):
    """Create a new task."""
    if task is None or not task.title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")

    fields = to_store_shape({
        "title": task.title,
        "description": task.description if task.description is not None else "",
        "complete": task.complete or False,
    })
    try:
        record = store.insert_task(fields)
    except TaskStoreError as exc:
        raise _store_failure(exc)
    return to_client_shape(record)


@router.put(
    "/tasks/{task_id}",
    response_model=TaskSchema,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
def update_task(task_id: str, task: TaskReplace, store: TaskStore = Depends(get_store)):
    """Replace the title, description and completion of a task."""
    if task.title is not None and not task.title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")

    fields = to_store_shape(task.model_dump())
    try:
        record = store.update_task(task_id, fields)
    except InvalidTaskIdError:
        raise _not_found(task_id)
    except TaskStoreError as exc:
        raise _store_failure(exc)

    if record is None:
        raise _not_found(task_id)
    return to_client_shape(record)


@router.delete("/tasks/{task_id}", response_model=Message, responses=_ERROR_RESPONSES)
def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Delete a specific task."""
    try:
        deleted = store.delete_task(task_id)
    except InvalidTaskIdError:
        raise _not_found(task_id)
    except TaskStoreError as exc:
        raise _store_failure(exc)

    if not deleted:
        raise _not_found(task_id)
    return {"message": "Task deleted successfully"}
