"""Classification of field declarations into the kinds the type mapper handles.

Each kind carries only what its mapping needs; ``classify`` is the single
place that looks at the raw ``type`` string.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union

from .metadata import FieldDefinition, FieldType, ReverseFieldEntry

# Declared types mapped onto GraphQL scalars; the extra text/number types are
# ones record drivers commonly emit alongside the core set.
SCALAR_TYPE_MAPPING: Dict[str, Any] = {
    'text': str,
    'textarea': str,
    'html': str,
    'select': str,
    'url': str,
    'email': str,
    'date': str,
    'datetime': str,
    'markdown': str,
    'code': str,
    'password': str,
    'autonumber': str,
    'number': float,
    'currency': float,
    'percent': float,
    'boolean': bool,
}


@dataclass(frozen=True)
class ScalarKind:
    python_type: Any


@dataclass(frozen=True)
class ReferenceKind:
    reference_to: str
    multiple: bool = False


@dataclass(frozen=True)
class RelatedKind:
    entry: ReverseFieldEntry


@dataclass(frozen=True)
class PassthroughKind:
    pass


@dataclass(frozen=True)
class SkipKind:
    reason: str


FieldKind = Union[ScalarKind, ReferenceKind, RelatedKind, PassthroughKind, SkipKind]


def classify(name: str, definition: Union[FieldDefinition, ReverseFieldEntry]) -> FieldKind:
    """Decide how a field is exposed.

    Dotted names are nested paths with no direct schema field. ``lookup``
    and ``master_detail`` need a single string ``reference_to``; anything
    else they carry (target lists, callables) falls back to passthrough.
    Only ``lookup`` fields can be ``multiple``.
    """
    if '.' in name:
        return SkipKind('dotted')
    if isinstance(definition, ReverseFieldEntry):
        return RelatedKind(definition)
    if not definition.type:
        return SkipKind('no type')
    raw_type = definition.type.value if isinstance(definition.type, FieldType) else str(definition.type)
    scalar = SCALAR_TYPE_MAPPING.get(raw_type)
    if scalar is not None:
        return ScalarKind(scalar)
    ftype = definition.field_type
    if ftype in (FieldType.LOOKUP, FieldType.MASTER_DETAIL):
        if isinstance(definition.reference_to, str) and definition.reference_to:
            return ReferenceKind(
                definition.reference_to,
                multiple=ftype is FieldType.LOOKUP and bool(definition.multiple),
            )
    return PassthroughKind()
