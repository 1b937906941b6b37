"""Object and field metadata consumed by the schema builder.

Objects and fields are usually declared as plain dicts (JSON/YAML style
configs); ``from_config`` turns them into the dataclasses below. Unknown keys
of a field config are kept in ``FieldDefinition.options``.
"""
from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Mapping, Optional, Union

from .errors import MetadataError
from .naming import normalize_name

if TYPE_CHECKING:  # pragma: no cover
    from .records import RecordAccess


class FieldType(str, Enum):
    TEXT = 'text'
    TEXTAREA = 'textarea'
    HTML = 'html'
    SELECT = 'select'
    URL = 'url'
    EMAIL = 'email'
    DATE = 'date'
    DATETIME = 'datetime'
    NUMBER = 'number'
    CURRENCY = 'currency'
    BOOLEAN = 'boolean'
    LOOKUP = 'lookup'
    MASTER_DETAIL = 'master_detail'
    OTHER = 'other'

    @classmethod
    def parse(cls, raw: Any) -> Optional['FieldType']:
        """Map a raw ``type`` value to a member; unknown strings become OTHER."""
        if raw is None or raw == '':
            return None
        if isinstance(raw, FieldType):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            return cls.OTHER


_FIELD_KEYS = ('name', 'type', 'reference_to', 'multiple', 'label', 'description')


@dataclass
class FieldDefinition:
    name: Optional[str] = None
    type: Optional[str] = None
    reference_to: Any = None
    multiple: bool = False
    label: Optional[str] = None
    description: Optional[str] = None
    options: Dict[str, Any] = dc_field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Union['FieldDefinition', Mapping[str, Any]], name: Optional[str] = None) -> 'FieldDefinition':
        """Build a field from a config mapping; ``name`` fills in a missing ``name`` key."""
        if isinstance(config, FieldDefinition):
            if name and not config.name:
                config.name = name
            return config
        raw = dict(config)
        ftype = raw.get('type')
        if isinstance(ftype, FieldType):
            ftype = ftype.value
        return cls(
            name=raw.get('name') or name,
            type=ftype,
            reference_to=raw.get('reference_to'),
            multiple=bool(raw.get('multiple', False)),
            label=raw.get('label'),
            description=raw.get('description'),
            options={k: v for k, v in raw.items() if k not in _FIELD_KEYS},
        )

    @property
    def field_type(self) -> Optional[FieldType]:
        return FieldType.parse(self.type)

    @property
    def help_text(self) -> Optional[str]:
        return self.description or self.label


@dataclass
class ObjectMetadata:
    """One entity: a name, its field map and the enabled sub-resources.

    ``fields`` stays ``None`` for partially defined objects; the relationship
    collector skips those.
    """

    name: Optional[str]
    fields: Optional[Dict[str, FieldDefinition]] = None
    label: Optional[str] = None
    enable_files: bool = False
    enable_tasks: bool = False
    enable_events: bool = False
    enable_audit: bool = False
    records: Optional['RecordAccess'] = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any], records: Optional['RecordAccess'] = None) -> 'ObjectMetadata':
        raw = dict(config)
        fields = raw.get('fields')
        return cls(
            name=raw.get('name'),
            fields=_fields_from_config(fields) if fields is not None else None,
            label=raw.get('label'),
            enable_files=bool(raw.get('enable_files', False)),
            enable_tasks=bool(raw.get('enable_tasks', False)),
            enable_events=bool(raw.get('enable_events', False)),
            enable_audit=bool(raw.get('enable_audit', False)),
            records=records if records is not None else raw.get('records'),
        )

    @property
    def normalized_name(self) -> Optional[str]:
        return normalize_name(self.name) if self.name else None

    def set_field(self, definition: FieldDefinition) -> None:
        if not definition.name:
            raise MetadataError('missing attribute name')
        if self.fields is None:
            self.fields = {}
        self.fields[definition.name] = definition


def _fields_from_config(fields: Union[Mapping[str, Any], Iterable[Any]]) -> Dict[str, FieldDefinition]:
    out: Dict[str, FieldDefinition] = {}
    if isinstance(fields, Mapping):
        for fname, fcfg in fields.items():
            out[fname] = FieldDefinition.from_config(fcfg or {}, name=fname)
        return out
    for fcfg in fields:
        fdef = FieldDefinition.from_config(fcfg)
        if not fdef.name:
            raise MetadataError('missing attribute name')
        out[fdef.name] = fdef
    return out


Driver = Callable[[ObjectMetadata], 'RecordAccess']


class DataSource:
    """A named group of objects, optionally backed by a record-access driver."""

    def __init__(self, name: Optional[str], driver: Optional[Driver] = None):
        self.name = name
        self.driver = driver
        self._objects: Dict[str, ObjectMetadata] = {}

    def add_object(self, obj: ObjectMetadata, key: Optional[str] = None) -> ObjectMetadata:
        """Store ``obj`` under ``key`` (defaults to its name).

        Objects without a name can still be stored under an explicit key; the
        schema builder skips them.
        """
        key = key or obj.name
        if not key:
            raise MetadataError('object config is missing a name')
        if obj.records is None and self.driver is not None:
            obj.records = self.driver(obj)
        self._objects[key] = obj
        return obj

    def get_object(self, name: str) -> Optional[ObjectMetadata]:
        return self._objects.get(name)

    def get_objects(self) -> Dict[str, ObjectMetadata]:
        return self._objects

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"DataSource(name={self.name!r}, objects={list(self._objects)!r})"


@dataclass(frozen=True)
class ReverseFieldEntry:
    """A relationship field synthesized from the inverse side of a declaration.

    Attributes:
        synthetic_name: Field name on the attached type (prefix + referrer name).
        reference_to: Normalized name of the object the field is attached to.
        name: Underlying field on the listed records (foreign key or the
            polymorphic ``parent``/``related_to`` pair).
        object_name: Object whose records the field lists.
        by_enabled: Created from an ``enable_*`` flag; filter on the
            ``(o, ids)`` owner pair instead of a plain foreign key.
        inverse: Attached to the sub-resource object and lists the owners its
            pair points to.
    """

    synthetic_name: str
    reference_to: str
    name: str
    object_name: str
    by_enabled: bool = False
    inverse: bool = False
