"""Type descriptors — the reflected type graph the generator walks.

A descriptor is one node of the graph: a primitive, an object with named
fields, a list with a single element type, a map, or a custom scalar.
Object descriptors may reference each other cyclically and may populate
their fields lazily through `ensure_realized()`.
"""

from enum import Enum
from typing import Callable


class TypeKind(str, Enum):
    PRIMITIVE = "primitive"
    OBJECT = "object"
    LIST = "list"
    MAP = "map"
    CUSTOM = "custom"


class Primitive(str, Enum):
    STRING = "String"
    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    BOOLEAN = "Boolean"


FieldsCreator = Callable[[], dict[str, "TypeDescriptor"]]

# Kinds that carry structured (JSON) payloads rather than plain text.
STRUCTURED_KINDS = (TypeKind.OBJECT, TypeKind.LIST, TypeKind.MAP)


class TypeDescriptor:
    """A node in the type graph.

    Use the classmethod constructors instead of calling ``__init__`` directly.
    """

    def __init__(
        self,
        kind: TypeKind,
        qualified_name: str | None = None,
        *,
        primitive: Primitive | None = None,
        element_type: "TypeDescriptor | None" = None,
        fields: dict[str, "TypeDescriptor"] | None = None,
        creator: FieldsCreator | None = None,
        format: str | None = None,
    ):
        self.kind = kind
        self.qualified_name = qualified_name
        self.primitive = primitive
        self.element_type = element_type
        self.format = format
        self._fields: dict[str, TypeDescriptor] = dict(fields or {})
        self._creator = creator
        self._realized = bool(self._fields) or creator is None

    @classmethod
    def of_primitive(cls, primitive: Primitive) -> "TypeDescriptor":
        return cls(TypeKind.PRIMITIVE, primitive.value, primitive=primitive)

    @classmethod
    def object(
        cls,
        qualified_name: str,
        fields: dict[str, "TypeDescriptor"] | None = None,
        creator: FieldsCreator | None = None,
    ) -> "TypeDescriptor":
        """Create an object descriptor.

        ``fields`` may be omitted when ``creator`` is given; the creator is
        called once on realization and must return the ordered field mapping.
        """
        return cls(TypeKind.OBJECT, qualified_name, fields=fields, creator=creator)

    @classmethod
    def list_of(cls, element_type: "TypeDescriptor") -> "TypeDescriptor":
        return cls(TypeKind.LIST, element_type=element_type)

    @classmethod
    def map_of(cls, value_type: "TypeDescriptor") -> "TypeDescriptor":
        return cls(TypeKind.MAP, element_type=value_type)

    @classmethod
    def custom(cls, name: str, format: str | None = None) -> "TypeDescriptor":
        return cls(TypeKind.CUSTOM, name, format=format)

    @property
    def fields(self) -> dict[str, "TypeDescriptor"]:
        """Fields populated so far. Empty until realized for lazy objects."""
        return self._fields

    @property
    def realized(self) -> bool:
        return self._realized

    def ensure_realized(self) -> dict[str, "TypeDescriptor"]:
        """Populate the field mapping on first use and return it."""
        if not self._realized:
            created = self._creator() if self._creator else {}
            for name, field_type in created.items():
                self._fields.setdefault(name, field_type)
            self._realized = True
        return self._fields

    def __repr__(self) -> str:
        if self.kind in (TypeKind.LIST, TypeKind.MAP):
            return f"<TypeDescriptor {self.kind.value}[{self.element_type!r}]>"
        return f"<TypeDescriptor {self.kind.value} {self.qualified_name}>"


STRING = TypeDescriptor.of_primitive(Primitive.STRING)
INT32 = TypeDescriptor.of_primitive(Primitive.INT32)
INT64 = TypeDescriptor.of_primitive(Primitive.INT64)
FLOAT32 = TypeDescriptor.of_primitive(Primitive.FLOAT32)
FLOAT64 = TypeDescriptor.of_primitive(Primitive.FLOAT64)
BOOLEAN = TypeDescriptor.of_primitive(Primitive.BOOLEAN)
