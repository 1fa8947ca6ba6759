"""Promotion of inline schemas across a whole OpenAPI document.

The InlineModelResolver drives the flattener over every operation's request
body, parameters and responses, then over the definitions that already
existed in ``components.schemas`` when that second pass started.
"""

import logging
from dataclasses import dataclass, field

from flatapi.flatten.diagnostics import Diagnostics
from flatapi.flatten.flattener import SchemaFlattener
from flatapi.flatten.naming import NameResolver, sanitize_model_name
from flatapi.flatten.resolver import DocumentResolver
from flatapi.flatten.signature import SignatureCache
from flatapi.flatten.utils import composed_kind
from flatapi.openapi.v3 import (
    OpenAPI,
    Operation,
    Parameter,
    PathItem,
    Reference,
    Schema,
)

logger = logging.getLogger(__name__)

__all__ = ['FlattenResult', 'InlineModelResolver']


@dataclass
class FlattenResult:
    """Outcome of one flattening pass.

    Attributes:
        document: The flattened document (mutated in place).
        created: Names of definitions added by the pass, in creation order.
        warnings: Recoverable conditions reported while flattening.
    """

    document: OpenAPI = field(repr=False)
    created: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class InlineModelResolver:
    """Promotes anonymous schemas to uniquely named component schemas.

    Example:
        >>> document = SchemaLoader().load('./api.yaml')
        >>> result = InlineModelResolver().flatten(document)
        >>> result.created
        ['createPet_requestBody', 'listPets_response_200_inner']
    """

    def __init__(self, diagnostics: Diagnostics | None = None):
        """Initialize the resolver.

        Args:
            diagnostics: Sink for recoverable conditions such as a missing
                naming key. A fresh sink logging to this package's logger is
                used when omitted.
        """
        self.diagnostics = diagnostics or Diagnostics()

    def flatten(self, openapi: OpenAPI) -> FlattenResult:
        """Flatten ``openapi`` in place.

        Operations are processed first, then the definitions present in the
        registry at the start of the definitions pass.
        """
        resolver = DocumentResolver(openapi)
        first_warning = len(self.diagnostics.warnings)
        # Make sure the registry exists before any name is resolved against it.
        registry = resolver.schemas
        existing = list(registry)
        names = NameResolver(registry, self.diagnostics)
        flattener = SchemaFlattener(resolver, names, SignatureCache())

        self._flatten_paths(openapi, resolver, flattener)
        self._flatten_components(existing, resolver, flattener)

        logger.info(
            f'Flattened document: {len(flattener.created)} inline schema(s) promoted'
        )
        return FlattenResult(
            openapi, list(flattener.created), self.diagnostics.warnings[first_warning:]
        )

    def _flatten_paths(
        self,
        openapi: OpenAPI,
        resolver: DocumentResolver,
        flattener: SchemaFlattener,
    ) -> None:
        if not openapi.paths:
            return

        for path, path_item in openapi.paths.items():
            for method, operation in path_item.operations():
                key = operation_key(method, path, operation)
                self._flatten_request_body(operation, key, resolver, flattener)
                self._flatten_parameters(operation, path_item, resolver, flattener)
                self._flatten_responses(operation, key, resolver, flattener)

    def _flatten_request_body(
        self,
        operation: Operation,
        key: str,
        resolver: DocumentResolver,
        flattener: SchemaFlattener,
    ) -> None:
        request_body = resolver.request_body(operation.requestBody)
        if request_body is None or not request_body.content:
            return

        for media_type in request_body.content.values():
            media_type.schema_ = flattener.flatten_entry_point(
                media_type.schema_, f'{key}_requestBody'
            )

    def _flatten_parameters(
        self,
        operation: Operation,
        path_item: PathItem,
        resolver: DocumentResolver,
        flattener: SchemaFlattener,
    ) -> None:
        parameters = [*(path_item.parameters or []), *(operation.parameters or [])]
        if not parameters:
            return

        for node in parameters:
            parameter = resolver.parameter(node)
            if parameter is None:
                continue
            schema = parameter_schema(parameter)
            if schema is None:
                continue
            if isinstance(schema, Reference):
                # Shared definitions keep the reference; only their contents
                # are flattened, in place.
                target = resolver.schema(schema)
                key = parameter_key(parameter, target)
                flattener.flatten(target, flattener.names.candidate(target.title, key))
                continue
            parameter.schema_ = flattener.flatten_parameter(
                schema, parameter_key(parameter)
            )

    def _flatten_responses(
        self,
        operation: Operation,
        key: str,
        resolver: DocumentResolver,
        flattener: SchemaFlattener,
    ) -> None:
        if not operation.responses:
            return

        for status_code, node in operation.responses.items():
            response = resolver.response(node)
            if response is None or not response.content:
                continue
            for media_type in response.content.values():
                media_type.schema_ = flattener.flatten_entry_point(
                    media_type.schema_, f'{key}_response_{status_code}'
                )

    def _flatten_components(
        self,
        snapshot: list[str],
        resolver: DocumentResolver,
        flattener: SchemaFlattener,
    ) -> None:
        """Flatten the definitions listed in ``snapshot``.

        Entries promoted by this pass are not in the snapshot: they were
        flattened when they were created and must not be revisited.
        """
        registry = resolver.schemas
        for name in snapshot:
            flattener.flatten(registry[name], name)


def operation_key(method: str, path: str, operation: Operation) -> str:
    """Naming key for an operation: its operationId, else method and path."""
    if operation.operationId:
        return operation.operationId
    return sanitize_model_name(f'{method}_{path}'.replace('{', '').replace('}', ''))


def parameter_schema(parameter: Parameter) -> Schema | Reference | None:
    """Return the effective schema of a parameter.

    A parameter described through the legacy ``content`` map is rewritten to
    use ``schema`` directly, taking the first media type's schema. A first
    media type without a schema leaves the parameter untouched.
    """
    if parameter.schema_ is not None:
        return parameter.schema_
    if not parameter.content:
        return None
    media_type = next(iter(parameter.content.values()))
    if media_type.schema_ is None:
        return None
    parameter.schema_ = media_type.schema_
    parameter.content = None
    return parameter.schema_


def parameter_key(
    parameter: Parameter, schema: Schema | Reference | None = None
) -> str:
    """Naming key for a parameter: its name and its declared type name.

    ``schema`` overrides the parameter's own schema, for parameters whose
    schema is a reference.
    """
    if schema is None:
        schema = parameter.schema_
    type_name = 'object'
    if isinstance(schema, Schema):
        if schema.type is not None:
            type_name = schema.type.value
        elif composed_kind(schema):
            type_name = composed_kind(schema)
    return f'{parameter.name}_{type_name}'
