"""Path/operation builder — turns endpoint descriptors into path items.

This is the reference-collecting pass: every object type an operation
touches is emitted as a ``$ref`` and recorded in the used-types registry,
every security requirement in the used-schemes registry.
"""

import logging

from pydantic import BaseModel, ConfigDict

from openapi_docgen.descriptor.endpoint import EndpointInfo, HttpMethod, ParamInfo
from openapi_docgen.descriptor.types import STRING, STRUCTURED_KINDS, TypeDescriptor
from openapi_docgen.errors import ConfigurationError
from openapi_docgen.model.document import MediaType, Operation, Parameter, PathItem, RequestBody, Response

from .schema import UsedTypes, require_type, schema_for_type

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "authorization"
REQUEST_BODY_DESCRIPTION = "request body"
DEFAULT_RESPONSE_CODE = "200"
DEFAULT_RESPONSE_DESCRIPTION = "success"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_TEXT = "text/plain"

UsedSecuritySchemes = set[str]


class ReferenceSnapshot(BaseModel):
    """Result of the reference-collecting pass."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    paths: dict[str, PathItem]
    used_types: UsedTypes
    used_security_schemes: list[str]


def collect_references(endpoints: list[EndpointInfo]) -> ReferenceSnapshot:
    """Build all path items with fresh registries and return them together."""
    used_types: UsedTypes = {}
    used_schemes: UsedSecuritySchemes = set()
    paths = generate_paths(endpoints, used_types, used_schemes)
    return ReferenceSnapshot(
        paths=paths,
        used_types=used_types,
        used_security_schemes=sorted(used_schemes),
    )


def normalize_path(path: str | None) -> str | None:
    """Prefix ``/`` when missing. Returns None for empty paths."""
    if not path:
        return None
    if not path.startswith("/"):
        path = "/" + path
    return path


def generate_paths(
    endpoints: list[EndpointInfo],
    used_types: UsedTypes,
    used_schemes: UsedSecuritySchemes,
) -> dict[str, PathItem]:
    """Group endpoints by normalized path, one operation per HTTP method."""
    paths: dict[str, PathItem] = {}
    for endpoint in endpoints:
        path = normalize_path(endpoint.path)
        if path is None:
            logger.warning("Skipping endpoint %r with empty path", endpoint.name)
            continue
        path_item = paths.setdefault(path, PathItem())
        generate_path_item_data(endpoint, path, path_item, used_types, used_schemes)
    return paths


def generate_path_item_data(
    endpoint: EndpointInfo,
    path: str,
    path_item: PathItem,
    used_types: UsedTypes,
    used_schemes: UsedSecuritySchemes,
) -> None:
    """Attach the endpoint's operation to ``path_item``."""
    check_authorization(endpoint)
    method = HttpMethod.parse(endpoint.method)
    if method is None:
        logger.warning("Unsupported HTTP method %r for %s, no operation generated", endpoint.method, path)
        return

    operation = Operation(
        operation_id=endpoint.name,
        summary=endpoint.summary,
        description=endpoint.description,
        parameters=generate_parameters(endpoint, used_types),
        request_body=generate_request_body(endpoint, True, used_types),
        responses=generate_responses(endpoint, True, used_types),
        security=generate_security(endpoint, used_schemes),
    )

    if getattr(path_item, method.value) is not None:
        logger.warning("Operation %s %s is defined twice, keeping the last one", method.name, path)
    setattr(path_item, method.value, operation)
    logger.debug("Generated operation %s %s", method.name, path)


def generate_parameters(endpoint: EndpointInfo, used_types: UsedTypes) -> list[Parameter]:
    """Headers (without Authorization), then path, then query parameters."""
    headers = {
        name: param
        for name, param in endpoint.headers.items()
        if name.lower() != AUTHORIZATION_HEADER
    }
    parameters: list[Parameter] = []
    parameters.extend(_params_to_parameters(headers, "header", used_types))
    parameters.extend(_params_to_parameters(endpoint.path_params, "path", used_types))
    parameters.extend(_params_to_parameters(endpoint.query_params, "query", used_types))
    return parameters


def _params_to_parameters(params: dict[str, ParamInfo], location: str, used_types: UsedTypes) -> list[Parameter]:
    return [
        Parameter(
            in_=location,
            name=name,
            description=param.description,
            required=param.required,
            deprecated=param.deprecated,
            schema_=schema_for_type(param.type, True, used_types),
        )
        for name, param in params.items()
    ]


def generate_request_body(endpoint: EndpointInfo, link_schema: bool, used_types: UsedTypes) -> RequestBody | None:
    if endpoint.consumes:
        content = {
            hint.content_type: MediaType(schema_=schema_for_type(hint.schema_type, link_schema, used_types))
            for hint in endpoint.consumes
        }
        return RequestBody(description=REQUEST_BODY_DESCRIPTION, content=content)

    body = endpoint.body
    if body is None:
        return None

    body_type = require_type(body.type, "generate_request_body")
    media_type = MediaType(schema_=schema_for_type(body_type, link_schema, used_types))
    content_type = body.content_type or _infer_content_type(body_type)
    return RequestBody(description=REQUEST_BODY_DESCRIPTION, content={content_type: media_type})


def _infer_content_type(type_: TypeDescriptor) -> str:
    if type_.kind in STRUCTURED_KINDS:
        return CONTENT_TYPE_JSON
    return CONTENT_TYPE_TEXT


def generate_responses(endpoint: EndpointInfo, link_schema: bool, used_types: UsedTypes) -> dict[str, Response]:
    """One response per declared status code, or a plain-text 200 if none."""
    if not endpoint.responses:
        return {
            DEFAULT_RESPONSE_CODE: Response(
                description=DEFAULT_RESPONSE_DESCRIPTION,
                content={CONTENT_TYPE_TEXT: MediaType(schema_=schema_for_type(STRING, link_schema, used_types))},
            )
        }

    responses: dict[str, Response] = {}
    for info in endpoint.responses:
        media_type = MediaType(schema_=schema_for_type(info.schema_type, link_schema, used_types))
        responses[str(info.status_code)] = Response(
            description=info.description,
            content={info.content_type: media_type},
        )
    return responses


def check_authorization(endpoint: EndpointInfo) -> None:
    """The authorized flag and the security requirements must agree."""
    where = f"{endpoint.method} {endpoint.path}"
    if endpoint.security_requirements and not endpoint.authorized:
        raise ConfigurationError(f"{where}: endpoint has security requirements but is not authorized")
    if endpoint.authorized and not endpoint.security_requirements:
        raise ConfigurationError(f"{where}: authorized endpoint has no security requirements")


def generate_security(endpoint: EndpointInfo, used_schemes: UsedSecuritySchemes) -> list[dict[str, list[str]]] | None:
    """Render one requirement block per scheme and record the scheme as used.

    Assumes ``check_authorization`` already passed for ``endpoint``.
    """
    if not endpoint.authorized:
        return None

    security = []
    for scheme_name, scopes in endpoint.security_requirements.items():
        used_schemes.add(scheme_name)
        security.append({scheme_name: list(scopes) if scopes is not None else []})
    return security
