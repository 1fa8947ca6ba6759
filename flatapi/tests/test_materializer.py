"""Test construction of promoted definitions."""

import pytest

from flatapi.flatten import (
    DocumentResolver,
    NameResolver,
    SchemaFlattener,
    SignatureCache,
)
from flatapi.flatten.materializer import render_example
from flatapi.openapi.v3 import OpenAPI, Reference, Schema, Type

from .fixtures import MINIMAL_OPENAPI_SPEC


@pytest.fixture
def flattener():
    document = OpenAPI.model_validate(MINIMAL_OPENAPI_SPEC)
    resolver = DocumentResolver(document)
    return SchemaFlattener(resolver, NameResolver(resolver.schemas), SignatureCache())


class TestRenderExample:
    """Test render_example function."""

    def test_none(self):
        assert render_example(None) is None

    def test_string_unchanged(self):
        assert render_example('fluffy') == 'fluffy'

    def test_structured_value_dumped(self):
        """Test that non-string examples become their JSON text."""
        assert render_example({'name': 'fluffy'}) == '{"name": "fluffy"}'
        assert render_example(3) == '3'


class TestModelMaterializer:
    """Test ModelMaterializer.materialize."""

    def test_copies_descriptive_fields(self, flattener):
        """Test that metadata is copied onto the new definition."""
        schema = Schema.model_validate(
            {
                'title': 'Ignored',
                'description': 'A pet',
                'example': {'name': 'fluffy'},
                'nullable': True,
                'required': ['name'],
                'xml': {'name': 'pet'},
                'properties': {'name': {'type': 'string'}},
                'x-internal': True,
            }
        )

        model = flattener.materializer.materialize(schema, 'Pet')

        assert model.type == Type.object
        assert model.description == 'A pet'
        assert model.example == '{"name": "fluffy"}'
        assert model.nullable is True
        assert model.required == ['name']
        assert model.xml.name == 'pet'
        assert model.title is None
        assert model.extensions == {'x-internal': True}
        assert list(model.properties) == ['name']

    def test_nested_objects_promoted(self, flattener):
        """Test that nested objects are promoted before the parent is built."""
        schema = Schema.model_validate(
            {
                'type': 'object',
                'properties': {
                    'owner': {
                        'type': 'object',
                        'properties': {'name': {'type': 'string'}},
                    }
                },
            }
        )

        model = flattener.materializer.materialize(schema, 'Pet')

        assert isinstance(model.properties['owner'], Reference)
        assert model.properties['owner'].ref == '#/components/schemas/Pet_owner'
        assert flattener.created == ['Pet_owner']

    def test_additional_properties_value_promoted(self, flattener):
        """Test that object-valued additionalProperties are promoted."""
        schema = Schema.model_validate(
            {
                'type': 'object',
                'properties': {'id': {'type': 'string'}},
                'additionalProperties': {
                    'type': 'object',
                    'properties': {'value': {'type': 'string'}},
                },
            }
        )

        model = flattener.materializer.materialize(schema, 'Bag')

        assert model.additionalProperties.ref == '#/components/schemas/Bag_additional'

    def test_boolean_additional_properties_kept(self, flattener):
        """Test that a boolean additionalProperties is copied unchanged."""
        schema = Schema.model_validate(
            {
                'type': 'object',
                'properties': {'id': {'type': 'string'}},
                'additionalProperties': False,
            }
        )

        model = flattener.materializer.materialize(schema, 'Strict')

        assert model.additionalProperties is False

    def test_composed_registered_as_is(self, flattener):
        """Test that composed schemas keep their composition keywords."""
        schema = Schema.model_validate(
            {
                'oneOf': [
                    {'$ref': '#/components/schemas/Cat'},
                    {'$ref': '#/components/schemas/Dog'},
                ],
                'discriminator': {'propertyName': 'kind'},
            }
        )

        model = flattener.materializer.materialize(schema, 'Animal')

        assert model is schema
        assert model.type is None
        assert [member.ref for member in model.oneOf] == [
            '#/components/schemas/Cat',
            '#/components/schemas/Dog',
        ]
