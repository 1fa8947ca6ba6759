"""Structural classification predicates for schema nodes.

The flattener only ever asks these questions about a node, so the exact
shape rules live in one place.
"""

from flatapi.openapi.v3 import Reference, Schema, Type

__all__ = (
    'COMPOSED_KEYWORDS',
    'SCHEMA_REF_PREFIX',
    'composed_kind',
    'has_properties',
    'is_array_schema',
    'is_composed_schema',
    'is_entry_point_candidate',
    'is_map_schema',
    'is_object_schema',
    'is_promotable_element',
    'make_reference',
)

SCHEMA_REF_PREFIX = '#/components/schemas/'

COMPOSED_KEYWORDS = ('allOf', 'oneOf', 'anyOf')


def make_reference(name: str) -> Reference:
    return Reference(ref=f'{SCHEMA_REF_PREFIX}{name}')


def composed_kind(schema) -> str | None:
    if not isinstance(schema, Schema):
        return None
    for keyword in COMPOSED_KEYWORDS:
        if getattr(schema, keyword):
            return keyword
    return None


def is_composed_schema(schema) -> bool:
    return composed_kind(schema) is not None


def is_array_schema(schema) -> bool:
    if not isinstance(schema, Schema) or is_composed_schema(schema):
        return False
    return schema.type == Type.array or schema.items is not None


def is_map_schema(schema) -> bool:
    """Object used as a dictionary: a schema-valued ``additionalProperties``
    and no fixed property set."""
    if not isinstance(schema, Schema) or is_composed_schema(schema):
        return False
    if schema.type not in (None, Type.object) or schema.properties:
        return False
    return isinstance(schema.additionalProperties, (Schema, Reference))


def is_object_schema(schema) -> bool:
    if not isinstance(schema, Schema) or is_composed_schema(schema):
        return False
    if is_array_schema(schema) or is_map_schema(schema):
        return False
    return schema.type == Type.object or bool(schema.properties)


def has_properties(schema) -> bool:
    return isinstance(schema, Schema) and bool(schema.properties)


def is_entry_point_candidate(schema) -> bool:
    """Promotion predicate for request-body and response payloads.

    Single-property wrapper objects stay inline at this boundary.
    """
    if is_composed_schema(schema):
        return True
    return is_object_schema(schema) and len(schema.properties or {}) > 1


def is_promotable_element(schema) -> bool:
    """Array items and map values are promoted when they are objects of any
    size or composed schemas."""
    return is_composed_schema(schema) or is_object_schema(schema)
