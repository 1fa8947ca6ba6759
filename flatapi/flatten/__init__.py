"""Inline model flattening.

Finds anonymous schemas in request bodies, parameters, responses and existing
definitions, and promotes them to named entries in ``components.schemas``.

Main Classes:
    - InlineModelResolver: Runs the pass over a whole document
    - SchemaFlattener: Recursive promotion engine for a single schema
    - ModelMaterializer: Builds the registry entry for a promoted schema
    - NameResolver: Picks collision-free definition names
    - SignatureCache: Merges structurally identical promotions
    - DocumentResolver: Follows local $ref aliases and owns the registry
    - Diagnostics: Collects recoverable conditions reported by the pass
"""

from flatapi.flatten.diagnostics import Diagnostics
from flatapi.flatten.flattener import SchemaFlattener
from flatapi.flatten.inline_model_resolver import FlattenResult, InlineModelResolver
from flatapi.flatten.materializer import ModelMaterializer
from flatapi.flatten.naming import NULL_UNIQUE_NAME, NameResolver, sanitize_model_name
from flatapi.flatten.resolver import DocumentResolver
from flatapi.flatten.signature import SignatureCache, canonical_signature

__all__ = [
    'Diagnostics',
    'DocumentResolver',
    'FlattenResult',
    'InlineModelResolver',
    'ModelMaterializer',
    'NULL_UNIQUE_NAME',
    'NameResolver',
    'SchemaFlattener',
    'SignatureCache',
    'canonical_signature',
    'sanitize_model_name',
]
