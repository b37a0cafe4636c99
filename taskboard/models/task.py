from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional

class Task(SQLModel, table=True):
    """Task row for the relational backend.

    The primary key is an auto-increment integer; it is exposed to clients
    as a string by the normalizer.
    """
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = Field(default="")
    complete: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
