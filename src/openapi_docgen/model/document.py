"""OpenAPI 3.0 document model produced by the generator.

Field names follow Python conventions; aliases carry the OpenAPI spelling
(``$ref``, ``in``, ``operationId`` …) and are used when dumping.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

OPENAPI_VERSION = "3.0.0"


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Schema(_Node):
    ref: str | None = Field(default=None, alias="$ref")
    type: str | None = None
    format: str | None = None
    items: "Schema | None" = None
    properties: "dict[str, Schema] | None" = None


class MediaType(_Node):
    schema_: Schema | None = Field(default=None, alias="schema")


class Parameter(_Node):
    in_: str = Field(alias="in")
    name: str
    description: str | None = None
    required: bool | None = None
    deprecated: bool | None = None
    schema_: Schema | None = Field(default=None, alias="schema")


class RequestBody(_Node):
    description: str | None = None
    required: bool | None = None
    content: dict[str, MediaType] = {}


class Response(_Node):
    description: str
    content: dict[str, MediaType] | None = None


class Operation(_Node):
    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str | None = None
    description: str | None = None
    parameters: list[Parameter] | None = None
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = {}
    security: list[dict[str, list[str]]] | None = None


class PathItem(_Node):
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None

    def operations(self) -> dict[str, Operation]:
        """Populated operations keyed by lower-case method name."""
        return {
            method: op
            for method in ("get", "put", "post", "delete", "options", "head", "patch", "trace")
            if (op := getattr(self, method)) is not None
        }


class OAuthFlow(_Node):
    authorization_url: str | None = Field(default=None, alias="authorizationUrl")
    token_url: str | None = Field(default=None, alias="tokenUrl")
    refresh_url: str | None = Field(default=None, alias="refreshUrl")
    scopes: dict[str, str] | None = None


class OAuthFlows(_Node):
    implicit: OAuthFlow | None = None
    password: OAuthFlow | None = None
    client_credentials: OAuthFlow | None = Field(default=None, alias="clientCredentials")
    authorization_code: OAuthFlow | None = Field(default=None, alias="authorizationCode")


class SecurityScheme(_Node):
    type: str
    description: str | None = None
    name: str | None = None
    in_: str | None = Field(default=None, alias="in")
    scheme: str | None = None
    bearer_format: str | None = Field(default=None, alias="bearerFormat")
    flows: OAuthFlows | None = None
    open_id_connect_url: str | None = Field(default=None, alias="openIdConnectUrl")


class Components(_Node):
    schemas: dict[str, Schema] = {}
    security_schemes: dict[str, SecurityScheme] | None = Field(default=None, alias="securitySchemes")


class Contact(_Node):
    name: str | None = None
    url: str | None = None
    email: str | None = None


class License(_Node):
    name: str
    url: str | None = None


class Info(_Node):
    title: str
    version: str
    description: str | None = None
    terms_of_service: str | None = Field(default=None, alias="termsOfService")
    contact: Contact | None = None
    license: License | None = None


class ServerVariable(_Node):
    default: str
    description: str | None = None
    enum: list[str] | None = None


class Server(_Node):
    url: str
    description: str | None = None
    variables: dict[str, ServerVariable] | None = None


class Document(_Node):
    """The assembled document. Ownership passes to the caller.

    The freeze is shallow: top-level fields cannot be reassigned, but the
    ``paths`` and ``components`` containers and their nodes stay mutable.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    openapi: str = OPENAPI_VERSION
    info: Info
    servers: list[Server] | None = None
    paths: dict[str, PathItem] = {}
    components: Components = Components()
