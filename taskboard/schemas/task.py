from pydantic import BaseModel
from typing import Optional

class TaskCreate(BaseModel):
    """Schema for creating new tasks.

    ``title`` is optional here so that a missing title is reported by the
    handler as a 400 with a readable message.
    """
    title: Optional[str] = None
    description: Optional[str] = ""
    complete: Optional[bool] = False

class TaskReplace(BaseModel):
    """Schema for PUT: every field is overwritten, absent ones with null."""
    title: Optional[str] = None
    description: Optional[str] = None
    complete: Optional[bool] = None

class Task(BaseModel):
    """Task as returned to clients."""
    id: str
    title: str
    description: Optional[str] = None
    complete: bool
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

class Message(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: str
