"""Type cache and field type mapper.

Object types reference each other freely (A -> B -> A). ``TypeCache``
reserves a class for an object *before* its fields are mapped, so a
reference back to an object under construction gets the reserved class
instead of recursing. Strawberry resolves field types only when the schema
is converted, by which time every reserved class has been turned into a
Strawberry type.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, Mapping, Optional, Union

import strawberry
from strawberry.scalars import JSON

from .config import SchemaSettings
from .fields import PassthroughKind, ReferenceKind, RelatedKind, ScalarKind, SkipKind, classify
from .metadata import FieldDefinition, ObjectMetadata, ReverseFieldEntry
from .naming import is_graphql_name
from .resolvers import lookup_many_resolver, lookup_resolver, related_resolver, value_resolver

if TYPE_CHECKING:  # pragma: no cover
    from .registry import MetadataRegistry

logger = logging.getLogger(__name__)

FieldSource = Union[FieldDefinition, ReverseFieldEntry]


class TypeCache:
    """Normalized object name -> Strawberry object type, for one schema build."""

    def __init__(self):
        self._types: Dict[str, type] = {}

    def get(self, name: str) -> Optional[type]:
        return self._types.get(name)

    def get_or_build(
        self,
        name: str,
        populate: Callable[[type], None],
        *,
        description: Optional[str] = None,
    ) -> type:
        """Return the type for ``name``, building it on first request.

        ``populate`` receives the reserved class and attaches its fields; it
        may call back into ``get_or_build`` for other (or the same) names.
        """
        existing = self._types.get(name)
        if existing is not None:
            return existing
        cls = type(name, (), {'__module__': __name__, '__doc__': description, '__annotations__': {}})
        self._types[name] = cls
        populate(cls)
        st_cls = strawberry.type(cls, name=name, description=description)
        self._types[name] = st_cls
        return st_cls

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


class FieldTypeMapper:
    """Convert a field map into Strawberry fields.

    ``object_type`` returns the (possibly still reserved) type of a referenced
    object, or None when that object cannot be exposed. Problems with single
    fields are logged and the field is dropped; conversion itself never fails.
    """

    def __init__(
        self,
        registry: 'MetadataRegistry',
        settings: SchemaSettings,
        object_type: Callable[[ObjectMetadata], Optional[type]],
    ):
        self.registry = registry
        self.settings = settings
        self.object_type = object_type

    def convert(self, fields: Mapping[str, FieldSource], *, owner: str = '?') -> Dict[str, Any]:
        id_field = self.settings.id_field
        out: Dict[str, Any] = {id_field: strawberry.field(resolver=value_resolver(id_field, str), name=id_field)}
        for name, definition in fields.items():
            mapped = self.convert_field(name, definition, owner=owner)
            if mapped is not None:
                out[name] = mapped
        return out

    def convert_field(self, name: str, definition: FieldSource, *, owner: str = '?') -> Optional[Any]:
        kind = classify(name, definition)
        if isinstance(kind, SkipKind):
            if kind.reason == 'dotted':
                logger.debug("%s.%s: nested path, not exposed", owner, name)
            else:
                logger.warning("The field %s of %s has no type property.", name, owner)
            return None
        if not is_graphql_name(name):
            logger.warning("%s.%s: not a valid GraphQL field name, skipped", owner, name)
            return None
        description = definition.help_text if isinstance(definition, FieldDefinition) else None

        if isinstance(kind, ScalarKind):
            return strawberry.field(resolver=value_resolver(name, kind.python_type), name=name, description=description)

        if isinstance(kind, ReferenceKind):
            target = self.registry.get_object(kind.reference_to)
            target_type = self.object_type(target) if target is not None else None
            if target_type is None:
                logger.warning("%s.%s: reference_to %r cannot be resolved, field omitted", owner, name, kind.reference_to)
                return None
            if kind.multiple:
                resolver = lookup_many_resolver(self.registry, kind.reference_to, name, target_type, self.settings)
            else:
                resolver = lookup_resolver(self.registry, kind.reference_to, name, target_type, self.settings)
            return strawberry.field(resolver=resolver, name=name, description=description)

        if isinstance(kind, RelatedKind):
            entry = kind.entry
            target = self.registry.get_object(entry.object_name)
            target_type = self.object_type(target) if target is not None else None
            if target_type is None:
                logger.debug("%s.%s: related object %r not registered, field omitted", owner, name, entry.object_name)
                return None
            return strawberry.field(resolver=related_resolver(self.registry, entry, target_type, self.settings), name=name)

        if isinstance(kind, PassthroughKind):
            return strawberry.field(resolver=value_resolver(name, JSON), name=name, description=description)

        raise TypeError(f"unhandled field kind {kind!r}")  # pragma: no cover
