"""Test fixtures for flatapi tests.

Sample OpenAPI documents with inline schemas in every position the flattener
visits. Tests deep-copy these before validating them so the constants are
never mutated.
"""

# Minimal OpenAPI 3.0 spec for basic testing
MINIMAL_OPENAPI_SPEC = {
    'openapi': '3.0.3',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# Petstore with inline request bodies, responses, parameters and definitions
PETSTORE_INLINE_SPEC = {
    'openapi': '3.0.3',
    'info': {'title': 'Petstore API', 'version': '1.0.0'},
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'parameters': [
                    {'name': 'limit', 'in': 'query', 'schema': {'type': 'integer'}},
                    {
                        'name': 'filter',
                        'in': 'query',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'properties': {'species': {'type': 'string'}},
                                }
                            }
                        },
                    },
                ],
                'responses': {
                    '200': {
                        'description': 'A list of pets',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'array',
                                    'items': {
                                        'type': 'object',
                                        'properties': {
                                            'id': {'type': 'integer'},
                                            'name': {'type': 'string'},
                                            'tag': {'type': 'string'},
                                        },
                                    },
                                }
                            }
                        },
                    }
                },
            },
            'post': {
                'operationId': 'createPet',
                'requestBody': {
                    'required': True,
                    'content': {
                        'application/json': {
                            'schema': {
                                'type': 'object',
                                'required': ['name'],
                                'properties': {
                                    'name': {'type': 'string'},
                                    'tag': {'type': 'string'},
                                },
                            }
                        }
                    },
                },
                'responses': {
                    '201': {
                        'description': 'Created',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'properties': {'id': {'type': 'integer'}},
                                }
                            }
                        },
                    }
                },
            },
        },
        '/pets/{petId}': {
            'get': {
                'parameters': [
                    {
                        'name': 'petId',
                        'in': 'path',
                        'required': True,
                        'schema': {'type': 'string'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'A pet',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'properties': {
                                        'id': {'type': 'integer'},
                                        'name': {'type': 'string'},
                                        'owner': {
                                            'type': 'object',
                                            'properties': {
                                                'name': {'type': 'string'}
                                            },
                                        },
                                    },
                                }
                            }
                        },
                    },
                    'default': {
                        'description': 'Unexpected error',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Error'}
                            }
                        },
                    },
                },
            }
        },
    },
    'components': {
        'schemas': {
            'Error': {
                'type': 'object',
                'properties': {
                    'code': {'type': 'integer'},
                    'message': {'type': 'string'},
                    'details': {
                        'type': 'object',
                        'properties': {
                            'field': {'type': 'string'},
                            'reason': {'type': 'string'},
                        },
                    },
                },
            }
        }
    },
}

# Names PETSTORE_INLINE_SPEC promotes, in creation order
PETSTORE_PROMOTED_NAMES = [
    'filter_object',
    'listPets_response_200_inner',
    'createPet_requestBody',
    'get__pets_petId_response_200_owner',
    'get__pets_petId_response_200',
    'Error_details',
]


def inline_body_operation(
    operation_id: str, schema: dict, path: str | None = None
) -> dict:
    """Build a path entry whose POST operation has ``schema`` as its body."""
    return {
        path or f'/{operation_id}': {
            'post': {
                'operationId': operation_id,
                'requestBody': {
                    'content': {'application/json': {'schema': schema}}
                },
                'responses': {'204': {'description': 'No content'}},
            }
        }
    }


def spec_with_paths(*path_entries: dict, schemas: dict | None = None) -> dict:
    """Assemble an OpenAPI document from path entries and component schemas."""
    paths = {}
    for entry in path_entries:
        paths.update(entry)
    spec = {
        'openapi': '3.0.3',
        'info': {'title': 'Test API', 'version': '1.0.0'},
        'paths': paths,
    }
    if schemas is not None:
        spec['components'] = {'schemas': schemas}
    return spec
