"""flatapi - Promote inline schemas in OpenAPI documents to named definitions.

Code generators that emit one named type per schema cannot represent
anonymous ("inline") object and composed schemas. flatapi walks every request
body, parameter, response and existing definition of an OpenAPI 3.0 document,
moves each inline structure into ``components.schemas`` under a unique name
and rewrites the occurrence to a ``$ref``.

Quick Start:
    >>> from flatapi import InlineModelResolver, SchemaLoader
    >>>
    >>> document = SchemaLoader().load('./api.yaml')
    >>> result = InlineModelResolver().flatten(document)
    >>> result.created
    ['createPet_requestBody', 'listPets_response_200_inner']

CLI Usage:
    $ flatapi flatten ./api.yaml --output ./api.flat.yaml
    $ flatapi run --config flat.yaml
"""

from importlib.metadata import PackageNotFoundError, version

from flatapi.config import DocumentConfig, FlattenConfig, get_config
from flatapi.exceptions import (
    ConfigurationError,
    FlatAPIError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaReferenceError,
    SchemaValidationError,
)
from flatapi.flatten import (
    Diagnostics,
    DocumentResolver,
    FlattenResult,
    InlineModelResolver,
    NameResolver,
    SchemaFlattener,
    SignatureCache,
)
from flatapi.loader import SchemaLoader
from flatapi.writer import DocumentWriter

__all__ = [
    # Main classes
    'InlineModelResolver',
    'FlattenResult',
    'SchemaFlattener',
    'NameResolver',
    'SignatureCache',
    'DocumentResolver',
    'Diagnostics',
    'SchemaLoader',
    'DocumentWriter',
    # Configuration
    'DocumentConfig',
    'FlattenConfig',
    'get_config',
    # Exceptions
    'FlatAPIError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'SchemaReferenceError',
    'ConfigurationError',
    'OutputError',
]

try:
    __version__ = version('flatapi')
except PackageNotFoundError:
    __version__ = 'unknown'
