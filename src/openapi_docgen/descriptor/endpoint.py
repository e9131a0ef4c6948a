"""Endpoint descriptors consumed by the document generator.

A routing layer (or the manifest loader) fills these in; the generator
only reads them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .types import TypeDescriptor


class HttpMethod(str, Enum):
    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"

    @classmethod
    def parse(cls, method: str | None) -> "HttpMethod | None":
        """Case-insensitive lookup. Returns None for unrecognized methods."""
        if not method:
            return None
        try:
            return cls(method.strip().lower())
        except ValueError:
            return None


class _Descriptor(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)


class ParamInfo(_Descriptor):
    """A path, query or header parameter."""

    type: TypeDescriptor
    description: str | None = None
    required: bool = True
    deprecated: bool = False


class ContentHint(_Descriptor):
    """One consumed media type and the schema of its payload."""

    content_type: str
    schema_type: TypeDescriptor


class BodyInfo(_Descriptor):
    """Single request body, used when no explicit consumed types are declared."""

    name: str
    type: TypeDescriptor
    content_type: str | None = None


class ResponseInfo(_Descriptor):
    status_code: int
    description: str
    content_type: str
    schema_type: TypeDescriptor


class EndpointInfo(_Descriptor):
    """A single API endpoint with all its metadata."""

    method: str  # GET / POST / PUT / ...
    path: str  # /api/users/{id}
    name: str | None = None
    summary: str | None = None
    description: str | None = None
    path_params: dict[str, ParamInfo] = {}
    query_params: dict[str, ParamInfo] = {}
    headers: dict[str, ParamInfo] = {}
    consumes: list[ContentHint] = []
    body: BodyInfo | None = None
    responses: list[ResponseInfo] = []
    security_requirements: dict[str, list[str] | None] = {}
    authorized: bool = False

    def add_security_requirement(self, name: str, scopes: list[str] | None = None) -> None:
        """Require the named security scheme and mark the endpoint authorized."""
        self.security_requirements[name] = list(scopes) if scopes is not None else None
        self.authorized = True
