"""Naming helpers shared by the collector, the type mapper and the assembler.

Generated names are derived only from normalized object names so that two
builds over identical metadata produce identical schemas.
"""
from __future__ import annotations

import keyword
import re
from typing import Any, List, Optional

__all__ = [
    'normalize_name',
    'related_field_name',
    'mutation_field_names',
    'is_graphql_name',
    'python_attr_name',
    'ensure_list',
    'INSERT_ONE',
    'UPDATE_ONE',
    'DELETE_ONE',
]

INSERT_ONE = '_INSERT_ONE'
UPDATE_ONE = '_UPDATE_ONE'
DELETE_ONE = '_DELETE_ONE'

_graphql_name_pattern = re.compile(r'^[_A-Za-z][_0-9A-Za-z]*$')


def normalize_name(name: str) -> str:
    """Replace dots with underscores so object names are schema-safe."""
    if not name:
        return name
    return str(name).replace('.', '_')


def related_field_name(prefix: str, referrer: str) -> str:
    return f"{prefix}{normalize_name(referrer)}"


def mutation_field_names(object_name: str) -> List[str]:
    """Return the INSERT/UPDATE/DELETE root field names for an object, in that order."""
    base = normalize_name(object_name)
    return [base + INSERT_ONE, base + UPDATE_ONE, base + DELETE_ONE]


def is_graphql_name(name: Any) -> bool:
    """True for names GraphQL accepts for types, fields and arguments.

    Names starting with ``__`` are reserved for introspection.
    """
    if not isinstance(name, str) or not name:
        return False
    if name.startswith('__'):
        return False
    return bool(_graphql_name_pattern.match(name))


def python_attr_name(name: str) -> str:
    """Python attribute used for a GraphQL field; keywords get a trailing underscore."""
    if keyword.iskeyword(name):
        return name + '_'
    return name


def ensure_list(value: Any) -> Optional[List[Any]]:
    """Wrap scalars into a list, preserving list inputs."""
    if value is None:
        return None
    if isinstance(value, list):
        return value
    if isinstance(value, (tuple, set)):
        return list(value)
    return [value]
