"""Build type descriptors from Python annotations and pydantic models.

Models become object descriptors whose fields are resolved lazily on
realization, so self-referencing and mutually recursive models work.
"""

import datetime
import types
import typing
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .types import BOOLEAN, FLOAT64, INT64, STRING, TypeDescriptor

_SCALARS: dict[Any, TypeDescriptor] = {
    str: STRING,
    bool: BOOLEAN,
    int: INT64,
    float: FLOAT64,
    datetime.datetime: TypeDescriptor.custom("string", "date-time"),
    datetime.date: TypeDescriptor.custom("string", "date"),
    bytes: TypeDescriptor.custom("string", "byte"),
}

_LIST_ORIGINS = (list, set, frozenset, tuple)


class TypeReflector:
    """Caches one descriptor per model class so cycles resolve to the same node.

    Distinct classes sharing a class name get distinct qualified names.
    """

    def __init__(self):
        self._models: dict[type, TypeDescriptor] = {}
        self._names: dict[str, type] = {}

    def describe(self, annotation: Any) -> TypeDescriptor:
        if isinstance(annotation, type) and annotation in _SCALARS:
            return _SCALARS[annotation]

        origin = typing.get_origin(annotation)
        args = typing.get_args(annotation)

        if origin is typing.Annotated:
            return self.describe(args[0])
        if origin in (typing.Union, types.UnionType):
            return self._describe_union(annotation, args)
        if origin in _LIST_ORIGINS or annotation in _LIST_ORIGINS:
            element = args[0] if args else Any
            return TypeDescriptor.list_of(self.describe(element))
        if origin is dict or annotation is dict:
            value = args[1] if len(args) == 2 else Any
            return TypeDescriptor.map_of(self.describe(value))
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return self._describe_model(annotation)
        if isinstance(annotation, type) and issubclass(annotation, Enum):
            return STRING
        if annotation is Any:
            return TypeDescriptor.custom("object")
        name = getattr(annotation, "__name__", str(annotation))
        return TypeDescriptor.custom(name)

    def _describe_union(self, annotation: Any, args: tuple) -> TypeDescriptor:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) != 1:
            raise TypeError(f"Cannot describe union type {annotation!r}")
        return self.describe(members[0])

    def _describe_model(self, model: type[BaseModel]) -> TypeDescriptor:
        if model in self._models:
            return self._models[model]

        def creator() -> dict[str, TypeDescriptor]:
            model.model_rebuild()
            return {
                field.alias or name: self.describe(field.annotation)
                for name, field in model.model_fields.items()
            }

        name = self._unique_name(model)
        descriptor = TypeDescriptor.object(name, creator=creator)
        self._models[model] = descriptor
        self._names[name] = model
        return descriptor

    def _unique_name(self, model: type[BaseModel]) -> str:
        """The class name, or its dotted module path when that name is taken."""
        name = model.__name__
        if name not in self._names:
            return name
        name = f"{model.__module__}.{model.__qualname__}".replace("<locals>.", "")
        candidate, suffix = name, 2
        while candidate in self._names:
            candidate = f"{name}_{suffix}"
            suffix += 1
        return candidate


_default_reflector = TypeReflector()


def describe(annotation: Any) -> TypeDescriptor:
    """Describe ``annotation`` using the shared reflector."""
    return _default_reflector.describe(annotation)
