"""Expands referenced types into the full closure of definitions.

Every object type reachable from the registry (through object fields and
list elements) ends up in the result exactly once, keyed by qualified name.
"""

import logging

from openapi_docgen.descriptor.types import TypeDescriptor, TypeKind

from .schema import UsedTypes, require_type

logger = logging.getLogger(__name__)


def decompose_types(used_types: UsedTypes) -> UsedTypes:
    """Return the closure of object types reachable from ``used_types``.

    The input mapping is left untouched.
    """
    decomposed: UsedTypes = {}
    for type_ in used_types.values():
        _decompose_type(type_, decomposed)
    logger.debug("Decomposed %d referenced types into %d definitions", len(used_types), len(decomposed))
    return decomposed


def _decompose_type(type_: TypeDescriptor | None, decomposed: UsedTypes) -> None:
    type_ = require_type(type_, "decompose_types")
    if type_.kind == TypeKind.OBJECT:
        _decompose_object(type_, decomposed)
    elif type_.kind == TypeKind.LIST:
        _decompose_type(type_.element_type, decomposed)
    # maps are not described, primitives have nothing to decompose


def _decompose_object(type_: TypeDescriptor, decomposed: UsedTypes) -> None:
    # must be checked before descending, cyclic graphs rely on it
    if type_.qualified_name in decomposed:
        return
    decomposed[type_.qualified_name] = type_

    for field_type in type_.ensure_realized().values():
        _decompose_type(field_type, decomposed)
