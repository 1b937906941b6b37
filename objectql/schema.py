"""Schema assembler: metadata registry -> Strawberry schema.

One ``SchemaBuilder.build()`` call runs a ``SchemaBuild``, which:

1. collects reverse fields for every object (``relations``),
2. builds one object type per object through the type cache,
3. adds a root list field per object with ``fields/filters/top/skip/sort``
   arguments handed to ``find``,
4. adds ``<object>_INSERT_ONE``, ``<object>_UPDATE_ONE`` and
   ``<object>_DELETE_ONE`` mutations per root field.

The reverse index, the type cache and the root field names live on the
``SchemaBuild`` of one call; rebuilding starts from scratch and sees the
registry as it is at that time. ``SchemaBuilder.last_build`` keeps the most
recent finished build for inspection.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import strawberry
from strawberry.schema.config import StrawberryConfig

from .config import SchemaSettings
from .metadata import ObjectMetadata
from .naming import DELETE_ONE, INSERT_ONE, UPDATE_ONE, is_graphql_name, normalize_name, python_attr_name
from .registry import MetadataRegistry
from .relations import ReverseIndex, collect_related_objects
from .resolvers import delete_resolver, find_resolver, insert_resolver, update_resolver
from .types import FieldTypeMapper, TypeCache

logger = logging.getLogger(__name__)


class SchemaBuild:
    """State of a single schema build: reverse index, type cache, root fields."""

    def __init__(self, registry: MetadataRegistry, settings: SchemaSettings):
        self.registry = registry
        self.settings = settings
        self.related: ReverseIndex = collect_related_objects(registry.get_datasources(), settings)
        self.types = TypeCache()
        self.mapper = FieldTypeMapper(registry, settings, self.object_type)
        self.root_fields: Dict[str, str] = {}

    # ---------- object types ----------
    def object_type(self, obj: ObjectMetadata) -> Optional[type]:
        """Type for ``obj`` in this build (None if its name is unusable)."""
        if obj is None or not obj.name:
            return None
        name = normalize_name(obj.name)
        if not is_graphql_name(name):
            logger.warning("object %r: %r is not a valid GraphQL type name, skipped", obj.name, name)
            return None

        def populate(cls: type) -> None:
            fields: Dict[str, Any] = dict(obj.fields or {})
            fields.update(self.related.fields_for(name))
            for gql_name, st_field in self.mapper.convert(fields, owner=name).items():
                setattr(cls, python_attr_name(gql_name), st_field)

        return self.types.get_or_build(name, populate, description=obj.label)

    # ---------- roots ----------
    def query_namespace(self) -> Dict[str, Any]:
        namespace: Dict[str, Any] = {}
        for ds in self.registry.get_datasources():
            if not ds.name:
                logger.warning("skipping datasource without a name")
                continue
            for obj in list(ds.get_objects().values()):
                if not obj.name:
                    continue
                name = normalize_name(obj.name)
                if name in self.root_fields:
                    logger.warning("object %r clashes with %r as %r; keeping the first", obj.name, self.root_fields[name], name)
                    continue
                st_type = self.object_type(obj)
                if st_type is None:
                    continue
                namespace[python_attr_name(name)] = strawberry.field(
                    resolver=find_resolver(self.registry, obj.name, st_type),
                    name=name,
                    description=obj.label,
                )
                self.root_fields[name] = obj.name
        return namespace

    def mutation_namespace(self) -> Dict[str, Any]:
        namespace: Dict[str, Any] = {}
        for name, object_name in self.root_fields.items():
            for suffix, resolver in (
                (INSERT_ONE, insert_resolver(self.registry, object_name, self.settings)),
                (UPDATE_ONE, update_resolver(self.registry, object_name)),
                (DELETE_ONE, delete_resolver(self.registry, object_name)),
            ):
                namespace[python_attr_name(name + suffix)] = strawberry.mutation(resolver=resolver, name=name + suffix)
        return namespace

    def schema(self, strawberry_config: Optional[StrawberryConfig] = None) -> strawberry.Schema:
        query_namespace = self.query_namespace()
        if not query_namespace:
            async def _ping() -> str:
                return 'pong'
            query_namespace['_ping'] = strawberry.field(resolver=_ping, name='_ping')
        query_namespace['__annotations__'] = {}
        Query = strawberry.type(type(self.settings.query_type_name, (), query_namespace), name=self.settings.query_type_name)

        Mutation = None
        if self.root_fields and self.settings.enable_mutations:
            mutation_namespace = self.mutation_namespace()
            mutation_namespace['__annotations__'] = {}
            Mutation = strawberry.type(
                type(self.settings.mutation_type_name, (), mutation_namespace),
                name=self.settings.mutation_type_name,
            )

        config = strawberry_config or StrawberryConfig(auto_camel_case=self.settings.auto_camel_case)
        schema = strawberry.Schema(query=Query, mutation=Mutation, config=config)
        logger.info(
            "built schema: %d types, %d root fields, %d reverse fields",
            len(self.types), len(self.root_fields), len(self.related),
        )
        return schema


class SchemaBuilder:
    def __init__(self, registry: MetadataRegistry, *, settings: Optional[SchemaSettings] = None):
        self.registry = registry
        self.settings = settings or SchemaSettings()
        self.last_build: Optional[SchemaBuild] = None

    def build(self, *, strawberry_config: Optional[StrawberryConfig] = None) -> strawberry.Schema:
        current = SchemaBuild(self.registry, self.settings)
        schema = current.schema(strawberry_config)
        self.last_build = current
        return schema


def build_schema(
    registry: MetadataRegistry,
    *,
    settings: Optional[SchemaSettings] = None,
    strawberry_config: Optional[StrawberryConfig] = None,
) -> strawberry.Schema:
    return SchemaBuilder(registry, settings=settings).build(strawberry_config=strawberry_config)
