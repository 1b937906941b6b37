"""In-memory record access and registry fixtures for objectql tests (shared)."""

import copy
import re

import pytest

from objectql import MetadataRegistry

from .models import ALL_OBJECTS, ROWS

_ID_PATTERN = re.compile(r"_id eq '((?:[^']|'')*)'")


def _path_value(row, path):
    value = row
    for part in path.split('.'):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _matches(row, filters):
    """Understands the two filter forms objectql emits; other forms match everything."""
    if isinstance(filters, str):
        ids = [m.replace("''", "'") for m in _ID_PATTERN.findall(filters)]
        return row.get('_id') in ids
    if isinstance(filters, list):
        for fname, _op, expected in filters:
            actual = _path_value(row, fname)
            if isinstance(actual, list):
                if expected not in actual:
                    return False
            elif actual != expected:
                return False
        return True
    return True


class MemoryRecords:
    """Async RecordAccess over a list of dicts that records every call."""

    def __init__(self, object_name, rows=None):
        self.object_name = object_name
        self.rows = [dict(r) for r in rows or []]
        self.calls = []

    def calls_to(self, method):
        return [c for c in self.calls if c[0] == method]

    async def find(self, query, access_context=None):
        self.calls.append(('find', copy.deepcopy(query), access_context))
        rows = [r for r in self.rows if _matches(r, query.get('filters'))]
        skip = query.get('skip') or 0
        top = query.get('top')
        rows = rows[skip:]
        if top is not None:
            rows = rows[:top]
        return rows

    async def find_one(self, record_id, options, access_context=None):
        self.calls.append(('find_one', record_id, access_context))
        for r in self.rows:
            if r.get('_id') == record_id:
                return r
        return None

    async def insert(self, data, access_context=None):
        self.calls.append(('insert', dict(data), access_context))
        self.rows.append(dict(data))
        return data

    async def update(self, record_id, data, access_context=None):
        self.calls.append(('update', (record_id, dict(data)), access_context))
        for r in self.rows:
            if r.get('_id') == record_id:
                r.update(data)
                return r
        return None

    async def delete(self, record_id, access_context=None):
        self.calls.append(('delete', record_id, access_context))
        for i, r in enumerate(self.rows):
            if r.get('_id') == record_id:
                return self.rows.pop(i)
        return None


def make_registry(objects=None, rows=None):
    """Registry with one 'default' datasource whose driver serves ``rows``."""
    rows = ROWS if rows is None else rows
    registry = MetadataRegistry()
    registry.datasource('default', driver=lambda obj: MemoryRecords(obj.name, rows.get(obj.name, [])))
    for cfg in copy.deepcopy(ALL_OBJECTS if objects is None else objects):
        registry.add_object(cfg)
    return registry


def graphql_type(schema, name):
    """graphql-core type of a Strawberry schema, for shape assertions."""
    return schema._schema.get_type(name)


def records_of(registry, object_name):
    return registry.get_object(object_name).records


@pytest.fixture(scope="function")
def registry():
    return make_registry()
