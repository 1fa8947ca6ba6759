"""Recursive flattening of inline schemas.

The flattener walks a schema node in place. Whatever it decides to promote is
materialized, checked against the signature cache and registered under a free
name; the occurrence is then rewritten to a ``$ref``.

Promotion rules:
    - Object property values that are objects with at least one property
    - Array items that are objects (of any size) or composed schemas
    - Map values (``additionalProperties``) under the same rule as array items

Everything else is walked in place. Primitives and references end the walk.
"""

import logging

from flatapi.flatten.materializer import ModelMaterializer
from flatapi.flatten.naming import NameResolver
from flatapi.flatten.resolver import DocumentResolver
from flatapi.flatten.signature import SignatureCache
from flatapi.flatten.utils import (
    COMPOSED_KEYWORDS,
    has_properties,
    is_array_schema,
    is_composed_schema,
    is_entry_point_candidate,
    is_object_schema,
    is_promotable_element,
    make_reference,
)
from flatapi.openapi.v3 import Reference, Schema

logger = logging.getLogger(__name__)

__all__ = ['SchemaFlattener']


class SchemaFlattener:
    """Walks schemas, promoting nested inline structures to named definitions.

    Attributes:
        resolver: Access to the document's definitions registry.
        names: Picks free registry names.
        signatures: Structural dedup cache shared by every promotion.
        created: Names registered by this flattener, in creation order.
    """

    def __init__(
        self,
        resolver: DocumentResolver,
        names: NameResolver,
        signatures: SignatureCache | None = None,
    ):
        self.resolver = resolver
        self.names = names
        self.signatures = signatures if signatures is not None else SignatureCache()
        self.materializer = ModelMaterializer(self)
        self.created: list[str] = []

    def flatten(self, schema: Schema | Reference | None, path: str) -> None:
        """Flatten ``schema`` in place; the node itself is never promoted."""
        if not isinstance(schema, Schema):
            return

        for keyword in COMPOSED_KEYWORDS:
            for member in getattr(schema, keyword) or []:
                self.flatten(member, path)

        if schema.properties:
            self.flatten_properties(schema.properties, path)

        if is_array_schema(schema) and schema.items is not None:
            schema.items = self.flatten_element(schema.items, f'{path}_inner')

        if isinstance(schema.additionalProperties, Schema):
            schema.additionalProperties = self.flatten_element(
                schema.additionalProperties, f'{path}_additional'
            )

    def flatten_properties(
        self, properties: dict[str, Schema | Reference], path: str
    ) -> None:
        for key, value in list(properties.items()):
            if not isinstance(value, Schema):
                continue
            child_path = f'{path}_{key}'
            if is_object_schema(value) and has_properties(value):
                properties[key] = self.promote(value, child_path)
            else:
                self.flatten(value, child_path)

    def flatten_element(
        self, schema: Schema | Reference, path: str
    ) -> Schema | Reference:
        """Handle an array item or map value, returning its replacement."""
        if is_promotable_element(schema):
            return self.promote(schema, path)
        self.flatten(schema, path)
        return schema

    def flatten_entry_point(
        self, schema: Schema | Reference | None, key: str | None
    ) -> Schema | Reference | None:
        """Handle a request-body or response payload.

        Composed schemas and objects with more than one property are
        promoted; anything else stays in place with its contents flattened.
        """
        if not isinstance(schema, Schema):
            return schema
        if is_entry_point_candidate(schema):
            return self.promote(schema, key)
        self.flatten(schema, self.names.candidate(schema.title, key))
        return schema

    def flatten_parameter(
        self, schema: Schema | Reference | None, key: str | None
    ) -> Schema | Reference | None:
        """Handle a parameter schema; any non-empty object is promoted."""
        if not isinstance(schema, Schema):
            return schema
        if is_composed_schema(schema) or (
            is_object_schema(schema) and has_properties(schema)
        ):
            return self.promote(schema, key)
        self.flatten(schema, self.names.candidate(schema.title, key))
        return schema

    def promote(self, schema: Schema, key: str | None) -> Reference:
        """Register ``schema`` as a named definition and return a reference.

        An identical shape promoted earlier is reused instead of registering
        a second entry.
        """
        base_name = self.names.candidate(schema.title, key)
        # Children are named after the parent's final name.
        name = self.names.unique(base_name)
        model = self.materializer.materialize(schema, name)

        existing = self.signatures.match(model)
        if existing is not None:
            return make_reference(existing)

        if name in self.resolver.schemas:
            name = self.names.unique(base_name)
        self.resolver.add_schema(name, model)
        self.signatures.add(name, model)
        self.created.append(name)
        logger.debug(f'Promoted inline schema to {name!r}')
        return make_reference(name)
