from flatapi.openapi.v3 import (
    HTTP_METHODS,
    Components,
    MediaType,
    OpenAPI,
    Operation,
    Parameter,
    PathItem,
    Reference,
    RequestBody,
    Response,
    Schema,
    Type,
)

__all__ = [
    'HTTP_METHODS',
    'Components',
    'MediaType',
    'OpenAPI',
    'Operation',
    'Parameter',
    'PathItem',
    'Reference',
    'RequestBody',
    'Response',
    'Schema',
    'Type',
]
