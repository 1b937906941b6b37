"""Exceptions raised by objectql.

Schema building itself is tolerant and only logs; these are raised at the
registration API and from resolvers at request time.
"""
from __future__ import annotations


class ObjectQLError(Exception):
    """Base class for objectql errors."""


class MetadataError(ObjectQLError, ValueError):
    """Invalid object or field registration (e.g. a field config without a name)."""


class RecordAccessError(ObjectQLError):
    """The record-access layer for an object is unavailable at resolve time."""

    def __init__(self, object_name: str, message: str | None = None):
        self.object_name = object_name
        super().__init__(message or f"No record access available for object '{object_name}'")


class MutationInputError(ObjectQLError, ValueError):
    """A mutation payload is not a JSON object."""
