"""objectql: GraphQL schemas generated from object/field metadata.

Public API:
- MetadataRegistry, DataSource, ObjectMetadata, FieldDefinition, FieldType
- build_schema, SchemaBuilder, SchemaBuild, SchemaSettings
- RecordAccess (protocol implemented by record-access drivers)
- ObjectQLError, MetadataError, RecordAccessError, MutationInputError
"""
from .config import SchemaSettings
from .errors import MetadataError, MutationInputError, ObjectQLError, RecordAccessError
from .metadata import DataSource, FieldDefinition, FieldType, ObjectMetadata, ReverseFieldEntry
from .records import RecordAccess
from .registry import MetadataRegistry
from .relations import ReverseIndex, collect_related_objects
from .schema import SchemaBuild, SchemaBuilder, build_schema

__all__ = [
    'MetadataRegistry', 'DataSource', 'ObjectMetadata', 'FieldDefinition', 'FieldType', 'ReverseFieldEntry',
    'build_schema', 'SchemaBuilder', 'SchemaBuild', 'SchemaSettings', 'ReverseIndex', 'collect_related_objects',
    'RecordAccess',
    'ObjectQLError', 'MetadataError', 'RecordAccessError', 'MutationInputError',
]
