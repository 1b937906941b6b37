"""Interface to the record-access layer.

objectql never stores or queries records itself. Every object carries a
``RecordAccess`` implementation; resolvers call it with the per-request access
context and pass its results (or failures) through unchanged.
"""
from __future__ import annotations

import inspect
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

__all__ = ['RecordAccess', 'get_access_context', 'resolve_awaitable', 'record_value']


@runtime_checkable
class RecordAccess(Protocol):
    """Per-object record operations.

    Implementations may be sync or async; results are awaited when awaitable.
    ``query`` for ``find`` holds any of ``fields``, ``filters``, ``top``,
    ``skip`` and ``sort``.
    """

    def find(self, query: Dict[str, Any], access_context: Any = None) -> List[Any]: ...

    def find_one(self, record_id: Any, options: Dict[str, Any], access_context: Any = None) -> Optional[Any]: ...

    def insert(self, data: Dict[str, Any], access_context: Any = None) -> Any: ...

    def update(self, record_id: Any, data: Dict[str, Any], access_context: Any = None) -> Any: ...

    def delete(self, record_id: Any, access_context: Any = None) -> Optional[Any]: ...


def get_access_context(context: Any) -> Any:
    """Return the caller identity from a request context (``user``), or None."""
    if context is None:
        return None
    if isinstance(context, Mapping):
        return context.get('user')
    return getattr(context, 'user', None)


async def resolve_awaitable(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def record_value(record: Any, key: str) -> Any:
    """Read ``key`` from a mapping record or an attribute-style record."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)
