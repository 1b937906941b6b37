"""Filter values handed to ``RecordAccess.find``.

Two forms are produced, matching what record-access drivers accept:
OData-style filter strings (``(_id eq 'a') or (_id eq 'b')``) and lists of
``[field, operator, value]`` triples combined with AND.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

OWNER_TYPE_KEY = 'o'
OWNER_IDS_KEY = 'ids'


def _quote(value: Any) -> str:
    return "'" + str(value).replace("'", "''") + "'"


def any_of_ids(ids: Iterable[Any], id_field: str = '_id') -> Optional[str]:
    """OR-combine one equality predicate per id; None when there are no ids."""
    parts = [f"({id_field} eq {_quote(v)})" for v in ids if v is not None and v != '']
    if not parts:
        return None
    return ' or '.join(parts)


def foreign_key_filters(field_name: str, record_id: Any) -> List[List[Any]]:
    return [[field_name, '=', record_id]]


def owner_filters(field_name: str, owner_type: str, record_id: Any) -> List[List[Any]]:
    """Match records whose polymorphic ``field_name`` pair points at ``(owner_type, record_id)``."""
    return [
        [f"{field_name}.{OWNER_TYPE_KEY}", '=', owner_type],
        [f"{field_name}.{OWNER_IDS_KEY}", '=', record_id],
    ]
