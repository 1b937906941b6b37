"""Resolver factories bound into the generated Strawberry types.

Every factory returns a plain function whose annotations are filled in
afterwards, because argument and return types are only known at build time.
Resolvers look their object up in the registry when called and forward the
caller's access context to its record access.
"""
from __future__ import annotations

import logging
import uuid
from typing import Annotated, Any, Callable, Dict, List, Mapping, Optional

import strawberry
from strawberry.scalars import JSON
from strawberry.types import Info

from .config import SchemaSettings
from .errors import MutationInputError, RecordAccessError
from .filters import OWNER_IDS_KEY, OWNER_TYPE_KEY, any_of_ids, foreign_key_filters, owner_filters
from .metadata import ObjectMetadata, ReverseFieldEntry
from .naming import ensure_list, normalize_name
from .records import RecordAccess, get_access_context, record_value, resolve_awaitable
from .registry import MetadataRegistry

logger = logging.getLogger(__name__)

FIND_ARGUMENTS = ('fields', 'filters', 'top', 'skip', 'sort')

RecordId = Annotated[str, strawberry.argument(name='_id')]


def new_record_id() -> str:
    return uuid.uuid4().hex


def _records_for(registry: MetadataRegistry, object_name: str) -> RecordAccess:
    obj: Optional[ObjectMetadata] = registry.get_object(object_name)
    if obj is None:
        raise RecordAccessError(object_name, f"Object '{object_name}' is not registered")
    if obj.records is None:
        raise RecordAccessError(object_name)
    return obj.records


def _annotate(fn: Callable[..., Any], annotations: Dict[str, Any]) -> Callable[..., Any]:
    fn.__annotations__ = annotations
    return fn


# --- object fields ----------------------------------------------------------

def value_resolver(field_name: str, python_type: Any):
    def resolve(root, info):
        return record_value(root, field_name)
    return _annotate(resolve, {'info': Info, 'return': Optional[python_type]})


def lookup_resolver(registry: MetadataRegistry, reference_to: str, field_name: str, target_type: Any, settings: SchemaSettings):
    """Fetch the single record referenced by ``root[field_name]``."""
    def _context(info):
        obj = registry.get_object(reference_to)
        if obj is not None and normalize_name(obj.name) == settings.users_object:
            return None
        return get_access_context(info.context)

    async def resolve(root, info):
        value = record_value(root, field_name)
        if value is None or value == '':
            return None
        records = _records_for(registry, reference_to)
        return await resolve_awaitable(records.find_one(value, {}, _context(info)))
    return _annotate(resolve, {'info': Info, 'return': Optional[target_type]})


def lookup_many_resolver(registry: MetadataRegistry, reference_to: str, field_name: str, target_type: Any, settings: SchemaSettings):
    """Fetch every record whose id is listed in ``root[field_name]``."""
    async def resolve(root, info):
        ids = ensure_list(record_value(root, field_name)) or []
        filters = any_of_ids(ids, settings.id_field)
        if filters is None:
            return []
        records = _records_for(registry, reference_to)
        logger.debug("lookup %s -> %s: %d ids", field_name, reference_to, len(ids))
        return await resolve_awaitable(records.find({'filters': filters}, get_access_context(info.context)))
    return _annotate(resolve, {'info': Info, 'return': Optional[List[Optional[target_type]]]})


def related_resolver(registry: MetadataRegistry, entry: ReverseFieldEntry, target_type: Any, settings: SchemaSettings):
    """List the records of ``entry.object_name`` related to ``root``."""
    async def resolve(root, info):
        records = _records_for(registry, entry.object_name)
        access_context = get_access_context(info.context)
        if entry.inverse:
            pair = record_value(root, entry.name)
            if record_value(pair, OWNER_TYPE_KEY) != entry.object_name:
                return []
            filters = any_of_ids(ensure_list(record_value(pair, OWNER_IDS_KEY)) or [], settings.id_field)
            if filters is None:
                return []
            return await resolve_awaitable(records.find({'filters': filters}, access_context))
        record_id = record_value(root, settings.id_field)
        if entry.by_enabled:
            filters = owner_filters(entry.name, entry.reference_to, record_id)
        else:
            filters = foreign_key_filters(entry.name, record_id)
        return await resolve_awaitable(records.find({'filters': filters}, access_context))
    return _annotate(resolve, {'info': Info, 'return': Optional[List[Optional[target_type]]]})


# --- root query -------------------------------------------------------------

def find_resolver(registry: MetadataRegistry, object_name: str, target_type: Any):
    """Root list field; the provided arguments go to ``find`` as they are."""
    async def resolve(info, fields=None, filters=None, top=None, skip=None, sort=None):
        passed = zip(FIND_ARGUMENTS, (fields, filters, top, skip, sort))
        query = {k: v for k, v in passed if v is not None}
        records = _records_for(registry, object_name)
        return await resolve_awaitable(records.find(query, get_access_context(info.context)))
    return _annotate(resolve, {
        'info': Info,
        'fields': Optional[List[Optional[str]]],
        'filters': Optional[JSON],
        'top': Optional[int],
        'skip': Optional[int],
        'sort': Optional[str],
        'return': Optional[List[Optional[target_type]]],
    })


# --- root mutations ---------------------------------------------------------

def _payload(object_name: str, data: Any) -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        raise MutationInputError(f"{object_name}: data must be a JSON object, got {type(data).__name__}")
    return dict(data)


def insert_resolver(registry: MetadataRegistry, object_name: str, settings: SchemaSettings):
    async def resolve(info, data):
        logger.debug("%s insert args: %r", object_name, data)
        payload = _payload(object_name, data)
        if not payload.get(settings.id_field):
            payload[settings.id_field] = new_record_id()
        records = _records_for(registry, object_name)
        return await resolve_awaitable(records.insert(payload, get_access_context(info.context)))
    return _annotate(resolve, {'info': Info, 'data': JSON, 'return': Optional[JSON]})


def update_resolver(registry: MetadataRegistry, object_name: str):
    async def resolve(info, *, record_id, selector=None, data):
        logger.debug("%s update %s args: %r", object_name, record_id, data)
        payload = _payload(object_name, data)
        records = _records_for(registry, object_name)
        return await resolve_awaitable(records.update(record_id, payload, get_access_context(info.context)))
    return _annotate(resolve, {
        'info': Info,
        'record_id': RecordId,
        'data': JSON,
        'selector': Optional[JSON],
        'return': Optional[JSON],
    })


def delete_resolver(registry: MetadataRegistry, object_name: str):
    async def resolve(info, *, record_id, selector=None):
        logger.debug("%s delete %s", object_name, record_id)
        records = _records_for(registry, object_name)
        return await resolve_awaitable(records.delete(record_id, get_access_context(info.context)))
    return _annotate(resolve, {
        'info': Info,
        'record_id': RecordId,
        'selector': Optional[JSON],
        'return': Optional[JSON],
    })
