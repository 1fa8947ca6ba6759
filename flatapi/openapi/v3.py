from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    StringConstraints,
    field_validator,
    model_serializer,
    model_validator,
)

EXTENSION_PREFIX = 'x-'


class ExtensibleModel(BaseModel):
    """Base for OpenAPI objects that may carry ``x-`` vendor extensions.

    Extension keys are collected into ``extensions`` on validation and written
    back as top-level keys on serialization, so the round trip is lossless.
    Fields listed in ``extension_maps`` are maps (Paths, Responses) that may
    carry extensions next to their entries; those keys are kept per field in
    ``map_extensions``.
    """

    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    extension_maps: ClassVar[Tuple[str, ...]] = ()

    extensions: Dict[str, Any] = Field(default_factory=dict, exclude=True)
    map_extensions: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict, exclude=True
    )

    @model_validator(mode='before')
    @classmethod
    def _collect_extensions(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        extensions = _split_extensions(data)
        map_extensions = {}
        for field_name in cls.extension_maps:
            value = data.get(field_name)
            if isinstance(value, dict) and _split_extensions(value):
                map_extensions[field_name] = _split_extensions(value)
        if not extensions and not map_extensions:
            return data

        data = {key: value for key, value in data.items() if key not in extensions}
        if extensions:
            data['extensions'] = {**data.get('extensions', {}), **extensions}
        for field_name, found in map_extensions.items():
            data[field_name] = {
                key: value
                for key, value in data[field_name].items()
                if key not in found
            }
        if map_extensions:
            data['map_extensions'] = {**data.get('map_extensions', {}), **map_extensions}
        return data

    @model_serializer(mode='wrap')
    def _dump_extensions(self, handler):
        data = handler(self)
        if not isinstance(data, dict):
            return data
        for field_name, found in self.map_extensions.items():
            if isinstance(data.get(field_name), dict):
                data[field_name].update(found)
        if self.extensions:
            data.update(self.extensions)
        return data


def _split_extensions(data: dict) -> Dict[str, Any]:
    return {
        key: value
        for key, value in data.items()
        if isinstance(key, str) and key.startswith(EXTENSION_PREFIX)
    }


class Reference(ExtensibleModel):
    ref: str = Field(..., alias='$ref')
    summary: Optional[str] = None
    description: Optional[str] = None


class Contact(ExtensibleModel):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(ExtensibleModel):
    name: str
    url: Optional[str] = None


class Info(ExtensibleModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str
    description: Optional[str] = None
    termsOfService: Optional[str] = None
    contact: Optional[Contact] = None
    license: Optional[License] = None
    version: str


class ServerVariable(ExtensibleModel):
    enum: Optional[List[str]] = None
    default: str
    description: Optional[str] = None


class Server(ExtensibleModel):
    url: str
    description: Optional[str] = None
    variables: Optional[Dict[str, ServerVariable]] = None


class ExternalDocumentation(ExtensibleModel):
    description: Optional[str] = None
    url: str


class Tag(ExtensibleModel):
    name: str
    description: Optional[str] = None
    externalDocs: Optional[ExternalDocumentation] = None


class Type(Enum):
    array = 'array'
    boolean = 'boolean'
    integer = 'integer'
    number = 'number'
    object = 'object'
    string = 'string'


class Discriminator(BaseModel):
    propertyName: str
    mapping: Optional[Dict[str, str]] = None


class XML(ExtensibleModel):
    name: Optional[str] = None
    namespace: Optional[str] = None
    prefix: Optional[str] = None
    attribute: Optional[bool] = None
    wrapped: Optional[bool] = None


class Example(ExtensibleModel):
    summary: Optional[str] = None
    description: Optional[str] = None
    value: Optional[Any] = None
    externalValue: Optional[str] = None


class Schema(ExtensibleModel):
    title: Optional[str] = None
    multipleOf: Optional[PositiveFloat] = None
    maximum: Optional[float] = None
    exclusiveMaximum: Optional[bool] = None
    minimum: Optional[float] = None
    exclusiveMinimum: Optional[bool] = None
    maxLength: Optional[Annotated[int, Field(ge=0)]] = None
    minLength: Optional[Annotated[int, Field(ge=0)]] = None
    pattern: Optional[str] = None
    maxItems: Optional[Annotated[int, Field(ge=0)]] = None
    minItems: Optional[Annotated[int, Field(ge=0)]] = None
    uniqueItems: Optional[bool] = None
    maxProperties: Optional[Annotated[int, Field(ge=0)]] = None
    minProperties: Optional[Annotated[int, Field(ge=0)]] = None
    required: Optional[List[str]] = None
    enum: Optional[List] = None
    type: Optional[Type] = None
    not_: Optional[Union[Schema, Reference]] = Field(None, alias='not')
    allOf: Optional[List[Union[Schema, Reference]]] = None
    oneOf: Optional[List[Union[Schema, Reference]]] = None
    anyOf: Optional[List[Union[Schema, Reference]]] = None
    items: Optional[Union[Schema, Reference]] = None
    properties: Optional[Dict[str, Union[Schema, Reference]]] = None
    additionalProperties: Optional[Union[Schema, Reference, bool]] = None
    description: Optional[str] = None
    format: Optional[str] = None
    default: Optional[Any] = None
    nullable: Optional[bool] = None
    discriminator: Optional[Discriminator] = None
    readOnly: Optional[bool] = None
    writeOnly: Optional[bool] = None
    example: Optional[Any] = None
    externalDocs: Optional[ExternalDocumentation] = None
    deprecated: Optional[bool] = None
    xml: Optional[XML] = None
    # Display name assigned by the pipeline, never part of the document.
    name: Optional[str] = Field(None, exclude=True)


class Encoding(ExtensibleModel):
    contentType: Optional[str] = None
    headers: Optional[Dict[str, Union[Header, Reference]]] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allowReserved: Optional[bool] = None


class MediaType(ExtensibleModel):
    schema_: Optional[Union[Schema, Reference]] = Field(None, alias='schema')
    example: Optional[Any] = None
    examples: Optional[Dict[str, Union[Example, Reference]]] = None
    encoding: Optional[Dict[str, Encoding]] = None


class Header(ExtensibleModel):
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allowEmptyValue: Optional[bool] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allowReserved: Optional[bool] = None
    schema_: Optional[Union[Schema, Reference]] = Field(None, alias='schema')
    content: Optional[Dict[str, MediaType]] = None
    example: Optional[Any] = None
    examples: Optional[Dict[str, Union[Example, Reference]]] = None


class Parameter(ExtensibleModel):
    name: str
    in_: str = Field(..., alias='in')
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allowEmptyValue: Optional[bool] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allowReserved: Optional[bool] = None
    schema_: Optional[Union[Schema, Reference]] = Field(None, alias='schema')
    content: Optional[Dict[str, MediaType]] = None
    example: Optional[Any] = None
    examples: Optional[Dict[str, Union[Example, Reference]]] = None


class RequestBody(ExtensibleModel):
    description: Optional[str] = None
    content: Dict[str, MediaType]
    required: Optional[bool] = None


class Response(ExtensibleModel):
    description: str
    headers: Optional[Dict[str, Union[Header, Reference]]] = None
    content: Optional[Dict[str, MediaType]] = None
    links: Optional[Dict[str, Any]] = None


class Operation(ExtensibleModel):
    extension_maps: ClassVar[Tuple[str, ...]] = ('responses',)

    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    externalDocs: Optional[ExternalDocumentation] = None
    operationId: Optional[str] = None
    parameters: Optional[List[Union[Parameter, Reference]]] = None
    requestBody: Optional[Union[RequestBody, Reference]] = None
    responses: Dict[str, Union[Response, Reference]]
    callbacks: Optional[Dict[str, Any]] = None
    deprecated: Optional[bool] = None
    security: Optional[List[Dict[str, List[str]]]] = None
    servers: Optional[List[Server]] = None

    @field_validator('responses', mode='before')
    @classmethod
    def _status_codes_as_strings(cls, value: Any) -> Any:
        # YAML loads unquoted status codes as integers.
        if isinstance(value, dict):
            return {str(key): item for key, item in value.items()}
        return value


class PathItem(ExtensibleModel):
    field_ref: Optional[str] = Field(None, alias='$ref')
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Optional[List[Server]] = None
    parameters: Optional[List[Union[Parameter, Reference]]] = None

    def operations(self) -> list[tuple[str, Operation]]:
        """Return the ``(method, operation)`` pairs defined on this path item."""
        return [
            (method, getattr(self, method))
            for method in HTTP_METHODS
            if getattr(self, method) is not None
        ]


HTTP_METHODS = ('get', 'put', 'post', 'delete', 'options', 'head', 'patch', 'trace')

ComponentName = Annotated[str, StringConstraints(pattern=r'^[a-zA-Z0-9\.\-_]+$')]


class Components(ExtensibleModel):
    schemas: Optional[Dict[ComponentName, Union[Schema, Reference]]] = None
    responses: Optional[Dict[ComponentName, Union[Reference, Response]]] = None
    parameters: Optional[Dict[ComponentName, Union[Reference, Parameter]]] = None
    examples: Optional[Dict[ComponentName, Union[Reference, Example]]] = None
    requestBodies: Optional[Dict[ComponentName, Union[Reference, RequestBody]]] = None
    headers: Optional[Dict[ComponentName, Union[Reference, Header]]] = None
    securitySchemes: Optional[Dict[ComponentName, Any]] = None
    links: Optional[Dict[ComponentName, Any]] = None
    callbacks: Optional[Dict[ComponentName, Any]] = None


class OpenAPI(ExtensibleModel):
    extension_maps: ClassVar[Tuple[str, ...]] = ('paths',)

    openapi: Annotated[str, StringConstraints(pattern=r'^3\.0\.\d(-.+)?$')]
    info: Info
    externalDocs: Optional[ExternalDocumentation] = None
    servers: Optional[List[Server]] = None
    security: Optional[List[Dict[str, List[str]]]] = None
    tags: Optional[List[Tag]] = None
    paths: Dict[str, PathItem]
    components: Optional[Components] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the document back to plain OpenAPI data."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


Schema.model_rebuild()
Encoding.model_rebuild()
MediaType.model_rebuild()
Header.model_rebuild()
Response.model_rebuild()
Operation.model_rebuild()
PathItem.model_rebuild()
Components.model_rebuild()
OpenAPI.model_rebuild()
