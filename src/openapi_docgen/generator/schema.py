"""Schema generator — converts type descriptors into schema nodes.

In link mode object types become ``$ref`` pointers and are recorded in the
used-types registry; their full definitions are produced later from the
decomposed closure (see ``generator.decompose``).
"""

import logging

from openapi_docgen.descriptor.types import Primitive, TypeDescriptor, TypeKind
from openapi_docgen.errors import PreconditionError
from openapi_docgen.model.document import Schema

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"

UsedTypes = dict[str, TypeDescriptor]

PRIMITIVE_SCHEMAS: dict[Primitive, tuple[str, str | None]] = {
    Primitive.STRING: ("string", None),
    Primitive.INT32: ("integer", "int32"),
    Primitive.INT64: ("integer", "int64"),
    Primitive.FLOAT32: ("number", "float"),
    Primitive.FLOAT64: ("number", "double"),
    Primitive.BOOLEAN: ("boolean", None),
}


def require_type(type_: TypeDescriptor | None, where: str) -> TypeDescriptor:
    if type_ is None:
        raise PreconditionError(f"{where}: type descriptor must not be None")
    return type_


def schema_ref(qualified_name: str) -> str:
    return SCHEMA_REF_PREFIX + qualified_name


def schema_for_type(type_: TypeDescriptor | None, link_schema: bool, used_types: UsedTypes) -> Schema:
    """Generate the schema for a type descriptor.

    Object types are emitted as references when ``link_schema`` is set and
    recorded in ``used_types``; otherwise inline with every field linked.
    """
    type_ = require_type(type_, "schema_for_type")

    if type_.kind == TypeKind.PRIMITIVE:
        schema_type, schema_format = PRIMITIVE_SCHEMAS[type_.primitive]
        return Schema(type=schema_type, format=schema_format)
    if type_.kind == TypeKind.OBJECT:
        return _schema_for_object(type_, link_schema, used_types)
    if type_.kind == TypeKind.LIST:
        return _schema_for_list(type_, link_schema, used_types)
    if type_.kind == TypeKind.MAP:
        logger.debug("Map types are not described, emitting empty schema for %r", type_)
        return Schema()
    # TypeKind.CUSTOM
    return Schema(type=type_.qualified_name, format=type_.format)


def _schema_for_object(type_: TypeDescriptor, link_schema: bool, used_types: UsedTypes) -> Schema:
    if link_schema:
        used_types[type_.qualified_name] = type_
        return Schema(ref=schema_ref(type_.qualified_name))

    properties = {
        name: schema_for_type(field_type, True, used_types)
        for name, field_type in type_.ensure_realized().items()
    }
    return Schema(type="object", properties=properties)


def _schema_for_list(type_: TypeDescriptor, link_schema: bool, used_types: UsedTypes) -> Schema:
    element_type = require_type(type_.element_type, "schema_for_type(list)")
    return Schema(type="array", items=schema_for_type(element_type, link_schema, used_types))
