"""Mapping between stored task records and the client-facing task shape."""
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

# Backends name their primary key differently; documents use "_id", tables "id".
_KEY_FIELDS = ("_id", "id")
_TIMESTAMP_FIELDS = {"created_at": "createdAt", "updated_at": "updatedAt"}


def _store_key(record: Mapping[str, Any]) -> Any:
    for name in _KEY_FIELDS:
        if record.get(name) is not None:
            return record[name]
    raise KeyError("record has no primary key")


def _timestamp(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def to_client_shape(record: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Build the client view of a stored record.

    The result always has exactly one ``id`` field, a string derived from
    the store's primary key. ``None`` passes through. ``record`` is left
    untouched.
    """
    if record is None:
        return None

    task = {
        "id": str(_store_key(record)),
        "title": record.get("title"),
        "description": record.get("description"),
        "complete": record.get("complete"),
    }
    for stored_name, client_name in _TIMESTAMP_FIELDS.items():
        if stored_name in record:
            task[client_name] = _timestamp(record[stored_name])
    return task


def to_store_shape(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Task fields are stored as sent."""
    return dict(fields)
