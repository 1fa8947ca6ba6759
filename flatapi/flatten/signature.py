"""Structural signatures used to merge identical promoted definitions.

A signature is a hashable value built directly from the pydantic node, never
from a serialized string, so key order in the source document does not
matter.
"""

import logging
from collections.abc import Hashable
from enum import Enum
from typing import Any

from pydantic import BaseModel

from flatapi.openapi.v3 import Reference, Schema

logger = logging.getLogger(__name__)

__all__ = ('SignatureCache', 'canonical_signature')

# Fields whose list value has set semantics.
_UNORDERED_LIST_FIELDS = frozenset({'required'})


def canonical_signature(node: Any) -> Hashable:
    """Return a hashable structural representation of ``node``.

    Two nodes with the same properties (in any order), the same required set,
    nullability and descriptive metadata produce equal signatures. The
    pipeline-only display name is ignored.
    """
    if isinstance(node, Reference):
        return ('$ref', node.ref)
    if isinstance(node, BaseModel):
        items = []
        for field_name in type(node).model_fields:
            if field_name == 'name' and isinstance(node, Schema):
                continue
            value = getattr(node, field_name)
            if value is None or value == {}:
                continue
            if field_name in _UNORDERED_LIST_FIELDS and isinstance(value, list):
                items.append((field_name, frozenset(value)))
            else:
                items.append((field_name, canonical_signature(value)))
        return (type(node).__name__, tuple(items))
    if isinstance(node, dict):
        return (
            'dict',
            tuple(
                sorted(
                    ((key, canonical_signature(value)) for key, value in node.items()),
                    key=lambda item: item[0],
                )
            ),
        )
    if isinstance(node, (list, tuple)):
        return ('list', tuple(canonical_signature(value) for value in node))
    if isinstance(node, Enum):
        return ('enum', node.value)
    if isinstance(node, (set, frozenset)):
        return frozenset(canonical_signature(value) for value in node)
    if isinstance(node, Hashable):
        # bool is a subclass of int; keep True and 1 apart.
        return (type(node).__name__, node)
    return ('repr', repr(node))


class SignatureCache:
    """Maps canonical signatures of promoted definitions to their names."""

    def __init__(self):
        self._names: dict[Hashable, str] = {}

    def match(self, schema: Schema) -> str | None:
        """Return the name already registered for an identical shape."""
        name = self._names.get(canonical_signature(schema))
        if name is not None:
            logger.debug(f'Reusing {name!r} for structurally identical schema')
        return name

    def add(self, name: str, schema: Schema) -> None:
        self._names.setdefault(canonical_signature(schema), name)
