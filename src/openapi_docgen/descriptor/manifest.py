"""Manifest loader.

Reads a YAML (or JSON) manifest describing document info, security
schemes, a type graph and endpoints, and turns it into the descriptors
the generator consumes.

Type references are strings: a primitive name (``String``, ``Int32`` …),
a declared type name, ``list[<ref>]``, ``map[<ref>]``, or any other
``name`` / ``name:format`` which becomes a custom scalar.
"""

import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from openapi_docgen.config import DocumentInfo, document_info_from_dict
from openapi_docgen.errors import ConfigurationError

from .endpoint import BodyInfo, ContentHint, EndpointInfo, ParamInfo, ResponseInfo
from .types import BOOLEAN, FLOAT32, FLOAT64, INT32, INT64, STRING, TypeDescriptor

_LIST_RE = re.compile(r"^list\[(.+)\]$")
_MAP_RE = re.compile(r"^map\[(.+)\]$")
_PRIMITIVES = {t.qualified_name: t for t in (STRING, INT32, INT64, FLOAT32, FLOAT64, BOOLEAN)}


class Manifest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    document_info: DocumentInfo
    endpoints: list[EndpointInfo]
    types: dict[str, TypeDescriptor] = {}


def load_manifest(file_path: Path) -> Manifest:
    """Load a manifest file into document info and endpoint descriptors."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{file_path}: not a valid YAML/JSON document: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{file_path}: manifest must be a mapping")
    return parse_manifest(data)


def parse_manifest(data: dict) -> Manifest:
    try:
        document_info = document_info_from_dict(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid document info: {e}") from e

    resolver = TypeResolver(data.get("types") or {})
    endpoints = [
        _parse_endpoint(item, index, resolver)
        for index, item in enumerate(_require_list(data.get("endpoints") or [], "endpoints"))
    ]
    return Manifest(document_info=document_info, endpoints=endpoints, types=resolver.objects)


class TypeResolver:
    """Resolves type references against the manifest's declared types.

    Declared types are created up front with lazy field resolution, so a
    type may reference itself or a type declared after it.
    """

    def __init__(self, type_specs: dict[str, dict]):
        self._specs = _require_mapping(type_specs, "types")
        for name, spec in self._specs.items():
            _require_mapping(spec or {}, f"types.{name}")
            _require_mapping((spec or {}).get("fields") or {}, f"types.{name}.fields")
        self.objects: dict[str, TypeDescriptor] = {
            name: TypeDescriptor.object(name, creator=self._fields_creator(name))
            for name in type_specs
        }

    def _fields_creator(self, name: str):
        def creator() -> dict[str, TypeDescriptor]:
            spec = self._specs[name] or {}
            fields = spec.get("fields") or {}
            return {field: self.resolve(ref, f"{name}.{field}") for field, ref in fields.items()}
        return creator

    def resolve(self, ref, where: str = "type") -> TypeDescriptor:
        if not isinstance(ref, str) or not ref.strip():
            raise ConfigurationError(f"{where}: type reference must be a non-empty string, got {ref!r}")
        ref = ref.strip()

        if ref in _PRIMITIVES:
            return _PRIMITIVES[ref]
        if ref in self.objects:
            return self.objects[ref]
        match = _LIST_RE.match(ref)
        if match:
            return TypeDescriptor.list_of(self.resolve(match.group(1), where))
        match = _MAP_RE.match(ref)
        if match:
            return TypeDescriptor.map_of(self.resolve(match.group(1), where))
        name, _, fmt = ref.partition(":")
        return TypeDescriptor.custom(name, fmt or None)


def _parse_endpoint(item: dict, index: int, resolver: TypeResolver) -> EndpointInfo:
    where = f"endpoints[{index}]"
    if not isinstance(item, dict):
        raise ConfigurationError(f"{where}: endpoint must be a mapping")
    for key in ("method", "path"):
        if key not in item:
            raise ConfigurationError(f"{where}: missing required key '{key}'")

    security = _parse_security(item.get("security"), where)
    try:
        return EndpointInfo(
            method=item["method"],
            path=item["path"] or "",
            name=item.get("name"),
            summary=item.get("summary"),
            description=item.get("description"),
            path_params=_parse_params(item.get("path_params"), resolver, f"{where}.path_params"),
            query_params=_parse_params(item.get("query_params"), resolver, f"{where}.query_params"),
            headers=_parse_params(item.get("headers"), resolver, f"{where}.headers"),
            consumes=_parse_consumes(item.get("consumes"), resolver, where),
            body=_parse_body(item.get("body"), resolver, where),
            responses=_parse_responses(item.get("responses"), resolver, where),
            security_requirements=security,
            authorized=item.get("authorized", bool(security)),
        )
    except ValidationError as e:
        raise ConfigurationError(f"{where}: {e}") from e
    except KeyError as e:
        raise ConfigurationError(f"{where}: missing required key {e}") from e


def _parse_params(params: dict | None, resolver: TypeResolver, where: str) -> dict[str, ParamInfo]:
    result = {}
    for name, spec in _require_mapping(params or {}, where).items():
        if isinstance(spec, str):
            spec = {"type": spec}
        spec = _require_mapping(spec, f"{where}.{name}")
        result[name] = ParamInfo(
            type=resolver.resolve(spec.get("type"), f"{where}.{name}"),
            description=spec.get("description"),
            required=spec.get("required", True),
            deprecated=spec.get("deprecated", False),
        )
    return result


def _parse_consumes(consumes: list | None, resolver: TypeResolver, where: str) -> list[ContentHint]:
    result = []
    for index, hint in enumerate(_require_list(consumes or [], f"{where}.consumes")):
        hint = _require_mapping(hint, f"{where}.consumes[{index}]")
        result.append(
            ContentHint(
                content_type=hint["content_type"],
                schema_type=resolver.resolve(hint.get("type"), f"{where}.consumes[{index}]"),
            )
        )
    return result


def _parse_body(body: dict | None, resolver: TypeResolver, where: str) -> BodyInfo | None:
    if not body:
        return None
    body = _require_mapping(body, f"{where}.body")
    return BodyInfo(
        name=body.get("name", "body"),
        type=resolver.resolve(body.get("type"), f"{where}.body"),
        content_type=body.get("content_type"),
    )


def _parse_responses(responses: list | None, resolver: TypeResolver, where: str) -> list[ResponseInfo]:
    result = []
    for index, resp in enumerate(_require_list(responses or [], f"{where}.responses")):
        resp = _require_mapping(resp, f"{where}.responses[{index}]")
        result.append(
            ResponseInfo(
                status_code=resp["code"],
                description=resp.get("description", ""),
                content_type=resp.get("content_type", "application/json"),
                schema_type=resolver.resolve(resp.get("type", "String"), f"{where}.responses[{resp['code']}]"),
            )
        )
    return result


def _parse_security(security, where: str) -> dict[str, list[str] | None]:
    """Accept either a list of scheme names or a mapping of name to scopes."""
    if not security:
        return {}
    if isinstance(security, list):
        return {name: None for name in security}
    if isinstance(security, dict):
        return {name: list(scopes) if scopes is not None else None for name, scopes in security.items()}
    raise ConfigurationError(f"{where}.security: expected a list or mapping, got {type(security).__name__}")


def _require_mapping(value, where: str) -> dict:
    if not isinstance(value, dict):
        raise ConfigurationError(f"{where}: expected a mapping, got {type(value).__name__}")
    return value


def _require_list(value, where: str) -> list:
    if not isinstance(value, list):
        raise ConfigurationError(f"{where}: expected a list, got {type(value).__name__}")
    return value
