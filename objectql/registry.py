"""Metadata registry with deferred field registration.

Fields can be registered for an object before the object itself is declared
(e.g. field files loaded ahead of object files). Such fields wait in a
pending queue keyed by normalized object name and are attached once, when
``add_object`` declares that object.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import MetadataError
from .metadata import DataSource, Driver, FieldDefinition, ObjectMetadata
from .naming import normalize_name

logger = logging.getLogger(__name__)

FieldConfig = Union[FieldDefinition, Mapping[str, Any]]

DEFAULT_DATASOURCE = 'default'
FIELD_FILE_SUFFIX = '.field.json'


class MetadataRegistry:
    def __init__(self):
        self._datasources: Dict[str, DataSource] = {}
        self._lazy_fields: Dict[str, List[FieldDefinition]] = {}

    # ---------- data sources ----------
    def add_datasource(self, datasource: DataSource) -> DataSource:
        key = datasource.name or f"<unnamed:{id(datasource)}>"
        self._datasources[key] = datasource
        return datasource

    def datasource(self, name: str = DEFAULT_DATASOURCE, driver: Optional[Driver] = None) -> DataSource:
        """Get the data source called ``name``, creating it when missing."""
        ds = self._datasources.get(name)
        if ds is None:
            ds = self.add_datasource(DataSource(name, driver=driver))
        elif driver is not None and ds.driver is None:
            ds.driver = driver
        return ds

    def get_datasources(self) -> List[DataSource]:
        return list(self._datasources.values())

    # ---------- objects ----------
    def add_object(
        self,
        obj: Union[ObjectMetadata, Mapping[str, Any]],
        datasource: Union[str, DataSource] = DEFAULT_DATASOURCE,
    ) -> ObjectMetadata:
        """Declare an object and attach any fields registered for it earlier."""
        if not isinstance(obj, ObjectMetadata):
            obj = ObjectMetadata.from_config(obj)
        if not obj.name:
            raise MetadataError('object config is missing a name')
        ds = datasource if isinstance(datasource, DataSource) else self.datasource(datasource)
        if ds.name not in self._datasources:
            self.add_datasource(ds)
        ds.add_object(obj)
        self.load_object_lazy_fields(obj.name)
        return obj

    def get_object(self, name: str) -> Optional[ObjectMetadata]:
        """Find an object by name across all data sources.

        Falls back to matching the normalized name, so ``a.b`` and ``a_b``
        refer to the same object.
        """
        if not name:
            return None
        for ds in self._datasources.values():
            obj = ds.get_object(name)
            if obj is not None:
                return obj
        wanted = normalize_name(name)
        for ds in self._datasources.values():
            for obj in ds.get_objects().values():
                if obj.name and normalize_name(obj.name) == wanted:
                    return obj
        return None

    get_object_config = get_object

    # ---------- fields ----------
    def add_object_field_config(self, object_name: str, config: FieldConfig) -> FieldDefinition:
        definition = FieldDefinition.from_config(config)
        if not definition.name:
            raise MetadataError('missing attribute name')
        obj = self.get_object(object_name)
        if obj is not None:
            obj.set_field(definition)
        else:
            logger.debug("object %s not defined yet; deferring field %s", object_name, definition.name)
            self._lazy_fields.setdefault(normalize_name(object_name), []).append(definition)
        return definition

    def load_object_lazy_fields(self, object_name: str) -> int:
        """Attach the fields queued for ``object_name``; returns how many were attached.

        The queue is keyed by normalized name, so fields deferred for ``a_b``
        reach an object declared as ``a.b``.
        """
        pending = self._lazy_fields.pop(normalize_name(object_name), [])
        for definition in pending:
            self.add_object_field_config(object_name, definition)
        return len(pending)

    def pending_fields(self, object_name: Optional[str] = None) -> Dict[str, List[FieldDefinition]]:
        if object_name is not None:
            return {object_name: list(self._lazy_fields.get(normalize_name(object_name), []))}
        return {k: list(v) for k, v in self._lazy_fields.items()}

    def load_object_fields(self, path: Union[str, Path]) -> int:
        """Register field configs from a JSON file or a directory of ``*.field.json`` files.

        Each config names its owner in ``object_name``. A file holds one config
        or a list of them. Returns the number of fields registered.
        """
        p = Path(path)
        files = sorted(p.glob(f"*{FIELD_FILE_SUFFIX}")) if p.is_dir() else [p]
        count = 0
        for file_path in files:
            with open(file_path, 'r', encoding='utf-8') as fh:
                payload = json.load(fh)
            configs = payload if isinstance(payload, list) else [payload]
            for cfg in configs:
                object_name = cfg.get('object_name') if isinstance(cfg, Mapping) else None
                if not object_name:
                    raise MetadataError(f"field config in {file_path} has no object_name")
                self.add_object_field_config(object_name, {k: v for k, v in cfg.items() if k != 'object_name'})
                count += 1
        return count
