"""Reference dereferencing and registry access for OpenAPI documents.

This module provides the DocumentResolver class the flattener uses to follow
local ``$ref`` aliases to request bodies, parameters, responses and schemas,
and to add new entries to ``components.schemas``.
"""

from typing import Any

from flatapi.exceptions import SchemaReferenceError
from flatapi.openapi.v3 import (
    Components,
    OpenAPI,
    Parameter,
    Reference,
    RequestBody,
    Response,
    Schema,
)

__all__ = ['DocumentResolver']


class DocumentResolver:
    """Resolves local $ref references inside a single OpenAPI document.

    Only ``#/components/<section>/<name>`` references are supported, which is
    what a bundled, pre-validated document contains. Chains of aliases are
    followed until a concrete object is reached.

    Example:
        >>> resolver = DocumentResolver(openapi_doc)
        >>> body = resolver.request_body(operation.requestBody)
        >>> resolver.add_schema('Pet', pet_schema)
    """

    def __init__(self, openapi: OpenAPI):
        """Initialize the resolver.

        Args:
            openapi: The OpenAPI document to resolve references from.
        """
        self.openapi = openapi

    @property
    def components(self) -> Components:
        if self.openapi.components is None:
            self.openapi.components = Components()
        return self.openapi.components

    @property
    def schemas(self) -> dict[str, Schema | Reference]:
        """The definitions registry, created on first access."""
        components = self.components
        if components.schemas is None:
            components.schemas = {}
        return components.schemas

    def add_schema(self, name: str, schema: Schema) -> None:
        """Add or overwrite a named definition.

        Callers are expected to pick a free name beforehand.
        """
        self.schemas[name] = schema

    def schema(self, node: Schema | Reference | None) -> Schema | None:
        return self._follow(node, 'schemas')

    def request_body(self, node: RequestBody | Reference | None) -> RequestBody | None:
        return self._follow(node, 'requestBodies')

    def parameter(self, node: Parameter | Reference | None) -> Parameter | None:
        return self._follow(node, 'parameters')

    def response(self, node: Response | Reference | None) -> Response | None:
        return self._follow(node, 'responses')

    def _follow(self, node: Any, section: str) -> Any:
        seen: set[str] = set()
        while isinstance(node, Reference):
            if node.ref in seen:
                raise SchemaReferenceError(node.ref, 'Circular reference chain')
            seen.add(node.ref)
            node = self._lookup(node.ref, section)
        return node

    def _lookup(self, ref: str, section: str) -> Any:
        """Return the component a local reference points to.

        Raises:
            SchemaReferenceError: If the reference is not local, points to
                another components section, or the target doesn't exist.
        """
        prefix = f'#/components/{section}/'
        if not ref.startswith('#/'):
            raise SchemaReferenceError(
                ref,
                'External references are not supported. '
                'Load the document with resolve_external_refs enabled.',
            )
        if not ref.startswith(prefix):
            raise SchemaReferenceError(ref, f'Expected a reference into {prefix}')

        name = ref[len(prefix) :]
        entries = getattr(self.openapi.components, section, None) or {}
        if name not in entries:
            available = ', '.join(sorted(entries)[:10])
            if len(entries) > 10:
                available += f', ... ({len(entries)} total)'
            raise SchemaReferenceError(
                ref, f"'{name}' not found. Available {section}: {available or 'none'}"
            )
        return entries[name]
