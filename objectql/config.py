"""Settings for schema generation.

Values can be given in code or read from ``OBJECTQL_*`` environment variables
(a ``.env`` file is loaded first when present):

  OBJECTQL_ID_FIELD            identifier field name (default ``_id``)
  OBJECTQL_RELATED_PREFIX      prefix of synthesized reverse fields (default ``related__``)
  OBJECTQL_USERS_OBJECT        object whose lookups are fetched without access context
  OBJECTQL_QUERY_TYPE_NAME     root query type name
  OBJECTQL_MUTATION_TYPE_NAME  root mutation type name
  OBJECTQL_AUTO_CAMEL_CASE     '1'/'true' to camel-case argument names
  OBJECTQL_ENABLE_MUTATIONS    '0'/'false' to omit the mutation root
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

_TRUE = ('1', 'true', 't', 'yes', 'y', 'on')
_FALSE = ('0', 'false', 'f', 'no', 'n', 'off')


def _parse_bool(raw: str, default: bool) -> bool:
    lv = raw.strip().lower()
    if lv in _TRUE:
        return True
    if lv in _FALSE:
        return False
    return default


@dataclass(frozen=True)
class SchemaSettings:
    id_field: str = '_id'
    related_prefix: str = 'related__'
    users_object: str = 'users'
    query_type_name: str = 'RootQueryType'
    mutation_type_name: str = 'MutationRootType'
    auto_camel_case: bool = False
    enable_mutations: bool = True

    @classmethod
    def from_env(
        cls,
        prefix: str = 'OBJECTQL_',
        *,
        env_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> 'SchemaSettings':
        """Build settings from environment variables.

        ``env_file`` is loaded with python-dotenv (without overriding variables
        already set). ``environ`` replaces ``os.environ`` as the source, mainly
        for tests.
        """
        if environ is None:
            load_dotenv(env_file)
            environ = os.environ
        overrides: Dict[str, Any] = {}
        defaults = cls()
        for f in fields(cls):
            raw = environ.get(prefix + f.name.upper())
            if raw is None:
                continue
            current = getattr(defaults, f.name)
            if isinstance(current, bool):
                overrides[f.name] = _parse_bool(raw, current)
            else:
                overrides[f.name] = raw
        return replace(defaults, **overrides)
