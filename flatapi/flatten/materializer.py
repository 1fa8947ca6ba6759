"""Construction of named definitions from anonymous schema nodes."""

import json
from typing import TYPE_CHECKING, Any

from flatapi.flatten.utils import is_composed_schema
from flatapi.openapi.v3 import Schema, Type

if TYPE_CHECKING:
    from flatapi.flatten.flattener import SchemaFlattener

__all__ = ('ModelMaterializer', 'render_example')


def render_example(example: Any) -> str | None:
    """Render an example value to its scalar (string) form."""
    if example is None or isinstance(example, str):
        return example
    return json.dumps(example)


class ModelMaterializer:
    """Builds the registry entry for an inline schema that is being promoted.

    The new entry is fully flattened before it is returned: its properties,
    and any schema-valued ``additionalProperties``, go through the flattener
    first. Entries created this way never need another visit.
    """

    def __init__(self, flattener: 'SchemaFlattener'):
        self.flattener = flattener

    def materialize(self, schema: Schema, path: str) -> Schema:
        """Return the definition to register for ``schema``.

        Args:
            schema: The anonymous object or composed schema being promoted.
            path: Naming prefix for anything promoted from inside it.
        """
        if is_composed_schema(schema):
            self.flattener.flatten(schema, path)
            return schema

        if schema.properties:
            self.flattener.flatten_properties(schema.properties, path)
        if isinstance(schema.additionalProperties, Schema):
            schema.additionalProperties = self.flattener.flatten_element(
                schema.additionalProperties, f'{path}_additional'
            )

        model = Schema(
            type=Type.object,
            description=schema.description,
            example=render_example(schema.example),
            name=schema.name,
            xml=schema.xml,
            required=schema.required,
            nullable=schema.nullable,
            properties=schema.properties,
            additionalProperties=schema.additionalProperties,
        )
        for key, value in schema.extensions.items():
            model.extensions.setdefault(key, value)
        return model
