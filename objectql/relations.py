"""Relationship collector: builds the index of synthesized reverse fields.

Two sources produce reverse fields:

- a ``master_detail`` field on object A pointing at B gives B a
  ``related__A`` field listing A records whose field equals B's id;
- an ``enable_files``/``enable_tasks``/``enable_events``/``enable_audit``
  flag on object O gives O a ``related__<well-known>`` field listing the
  sub-resource records attached to it through their polymorphic
  ``(o, ids)`` pair, and gives the well-known object the inverse
  ``related__O`` field listing the owners that pair points to.

When both produce the same field name on one object, the ``master_detail``
field is kept, whatever order the objects are scanned in.

The index is built fresh for every schema build.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .config import SchemaSettings
from .metadata import DataSource, FieldType, ObjectMetadata, ReverseFieldEntry
from .naming import normalize_name, related_field_name

logger = logging.getLogger(__name__)

# (flag attribute, well-known object, polymorphic field on that object)
ENABLED_SUB_RESOURCES: Tuple[Tuple[str, str, str], ...] = (
    ('enable_files', 'cms_files', 'parent'),
    ('enable_tasks', 'tasks', 'related_to'),
    ('enable_events', 'events', 'related_to'),
    ('enable_audit', 'audit_records', 'related_to'),
)


class ReverseIndex:
    """Normalized object name -> {synthetic field name -> ReverseFieldEntry}."""

    def __init__(self):
        self._entries: Dict[str, Dict[str, ReverseFieldEntry]] = {}

    def ensure(self, object_name: str) -> Dict[str, ReverseFieldEntry]:
        return self._entries.setdefault(normalize_name(object_name), {})

    def add(self, object_name: str, entry: ReverseFieldEntry, *, replace: bool = True) -> bool:
        """Store ``entry``; with ``replace=False`` an existing entry of the same name is kept.

        Returns True when ``entry`` was stored.
        """
        entries = self.ensure(object_name)
        if not replace and entry.synthetic_name in entries:
            return False
        entries[entry.synthetic_name] = entry
        return True

    def fields_for(self, object_name: str) -> Dict[str, ReverseFieldEntry]:
        return dict(self._entries.get(normalize_name(object_name), {}))

    def get(self, object_name: str, synthetic_name: str) -> Optional[ReverseFieldEntry]:
        return self._entries.get(normalize_name(object_name), {}).get(synthetic_name)

    def __contains__(self, object_name: object) -> bool:
        return isinstance(object_name, str) and normalize_name(object_name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return sum(len(v) for v in self._entries.values())


def _collect_object(index: ReverseIndex, obj: ObjectMetadata, prefix: str) -> None:
    obj_name = normalize_name(obj.name)
    index.ensure(obj_name)

    for fname, fdef in (obj.fields or {}).items():
        if fdef.field_type is not FieldType.MASTER_DETAIL:
            continue
        if not isinstance(fdef.reference_to, str) or not fdef.reference_to:
            continue
        ref_name = normalize_name(fdef.reference_to)
        synthetic_name = related_field_name(prefix, obj_name)
        replaced = index.get(ref_name, synthetic_name)
        if replaced is not None and replaced.by_enabled:
            logger.warning(
                "%s.%s: master_detail field %r replaces the link through %r",
                ref_name, synthetic_name, fdef.name or fname, replaced.name,
            )
        index.add(ref_name, ReverseFieldEntry(
            synthetic_name=synthetic_name,
            reference_to=ref_name,
            name=fdef.name or fname,
            object_name=obj_name,
        ))

    # master_detail reverse fields take precedence over same-named enabled entries
    for flag, ref_name, pair_field in ENABLED_SUB_RESOURCES:
        if not getattr(obj, flag, False):
            continue
        owner_side = ReverseFieldEntry(
            synthetic_name=related_field_name(prefix, ref_name),
            reference_to=obj_name,
            name=pair_field,
            object_name=ref_name,
            by_enabled=True,
        )
        inverse = ReverseFieldEntry(
            synthetic_name=related_field_name(prefix, obj_name),
            reference_to=ref_name,
            name=pair_field,
            object_name=obj_name,
            by_enabled=True,
            inverse=True,
        )
        for target, entry in ((obj_name, owner_side), (ref_name, inverse)):
            if not index.add(target, entry, replace=False):
                logger.warning(
                    "%s.%s is already a master_detail reverse field; link through %r not added",
                    target, entry.synthetic_name, pair_field,
                )


def collect_related_objects(
    datasources: Iterable[DataSource],
    settings: Optional[SchemaSettings] = None,
) -> ReverseIndex:
    """Scan every object of every data source once and return a new ReverseIndex.

    Objects missing a name or a field map are skipped.
    """
    prefix = (settings or SchemaSettings()).related_prefix
    index = ReverseIndex()
    for ds in datasources:
        for key, obj in ds.get_objects().items():
            if not obj.name or obj.fields is None:
                logger.debug("skipping partially defined object %r in datasource %r", key, ds.name)
                continue
            _collect_object(index, obj, prefix)
    return index
