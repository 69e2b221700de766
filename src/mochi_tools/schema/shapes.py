"""Explicit shape descriptors for tool parameters.

A shape describes what a parameter looks like without relying on runtime
type introspection. Object shapes are keyed by a stable logical name (usually
the fully qualified class name), which is what recursion detection and schema
reference ids are derived from. A field that points back to an object shape
that is still being declared uses ``RefShape`` with that name.

Example:
    >>> person = ObjectShape(
    ...     name="family.Person",
    ...     fields=(
    ...         FieldSpec("name", STRING),
    ...         FieldSpec("children", ListShape(RefShape("family.Person"))),
    ...     ),
    ... )
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union


class PrimitiveKind(str, Enum):
    """Scalar kinds a parameter can take."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    STRING = "string"

    @property
    def is_integral(self) -> bool:
        return self in INTEGER_RANGES

    @property
    def is_floating(self) -> bool:
        return self in (PrimitiveKind.FLOAT32, PrimitiveKind.FLOAT64)


# Inclusive bounds of each integral kind
INTEGER_RANGES: dict[PrimitiveKind, tuple[int, int]] = {
    PrimitiveKind.INT8: (-(2**7), 2**7 - 1),
    PrimitiveKind.INT16: (-(2**15), 2**15 - 1),
    PrimitiveKind.INT32: (-(2**31), 2**31 - 1),
    PrimitiveKind.INT64: (-(2**63), 2**63 - 1),
}


@dataclass(frozen=True)
class PrimitiveShape:
    """A scalar value: integer, floating point, boolean or text."""

    kind: PrimitiveKind


@dataclass(frozen=True)
class EnumShape:
    """A closed set of constant names, in declaration order.

    Attributes:
        name: Fully qualified logical name of the enum
        values: Constant names, case preserved
        enum_class: Optional Python Enum the names are bound back to
    """

    name: str
    values: tuple[str, ...]
    enum_class: type[Enum] | None = None

    @classmethod
    def of(cls, enum_class: type[Enum]) -> "EnumShape":
        """Build an EnumShape from a Python Enum, keeping member order."""
        return cls(
            name=qualified_name(enum_class),
            values=tuple(member.name for member in enum_class),
            enum_class=enum_class,
        )


@dataclass(frozen=True)
class FieldSpec:
    """A named field of an object shape."""

    name: str
    shape: "Shape"
    description: str | None = None
    nullable: bool = False


@dataclass(frozen=True)
class ObjectShape:
    """A record-like value with named, ordered fields.

    Attributes:
        name: Stable logical name, used for recursion detection and reference ids
        fields: Fields in declaration order
        factory: Optional callable receiving the bound fields as keyword
                 arguments (a dataclass, a pydantic model, ...). Without it the
                 bound value is a plain dict.
        description: Optional description attached to the generated schema
    """

    name: str
    fields: tuple[FieldSpec, ...]
    factory: Callable[..., Any] | None = None
    description: str | None = None


@dataclass(frozen=True)
class ListShape:
    """An ordered collection of items of one shape."""

    items: "Shape"


@dataclass(frozen=True)
class SetShape:
    """An unordered collection of unique items of one shape."""

    items: "Shape"


@dataclass(frozen=True)
class MapShape:
    """A string-keyed mapping. Values are coerced when a value shape is set."""

    values: "Shape | None" = None


@dataclass(frozen=True)
class RefShape:
    """A by-name reference to an object shape declared elsewhere."""

    name: str


Shape = Union[
    PrimitiveShape, EnumShape, ObjectShape, ListShape, SetShape, MapShape, RefShape
]


@dataclass(frozen=True)
class ParameterSpec:
    """One declared parameter of a tool.

    Attributes:
        shape: The parameter's shape
        name: Explicit property name; positional ``argN`` when omitted
        description: Optional description attached to the parameter schema
        optional: Whether the model may leave the parameter out
        default: Value passed to the tool when an optional parameter is absent
    """

    shape: Shape
    name: str | None = None
    description: str | None = None
    optional: bool = False
    default: Any = None

    def property_name(self, index: int) -> str:
        return self.name if self.name is not None else f"arg{index}"


INT8 = PrimitiveShape(PrimitiveKind.INT8)
INT16 = PrimitiveShape(PrimitiveKind.INT16)
INT32 = PrimitiveShape(PrimitiveKind.INT32)
INT64 = PrimitiveShape(PrimitiveKind.INT64)
FLOAT32 = PrimitiveShape(PrimitiveKind.FLOAT32)
FLOAT64 = PrimitiveShape(PrimitiveKind.FLOAT64)
BOOLEAN = PrimitiveShape(PrimitiveKind.BOOLEAN)
STRING = PrimitiveShape(PrimitiveKind.STRING)


def qualified_name(cls: type) -> str:
    """Return the fully qualified name of a class (module + qualname)."""
    return f"{cls.__module__}.{cls.__qualname__}"


def collect_object_shapes(
    shape: Shape, found: dict[str, ObjectShape] | None = None
) -> dict[str, ObjectShape]:
    """Index every object shape reachable from ``shape`` by its name.

    Used to resolve RefShape names when binding arguments. Each object shape
    is walked once, so cyclic declarations terminate.
    """
    if found is None:
        found = {}

    if isinstance(shape, ObjectShape):
        if shape.name in found:
            return found
        found[shape.name] = shape
        for field_spec in shape.fields:
            collect_object_shapes(field_spec.shape, found)
    elif isinstance(shape, (ListShape, SetShape)):
        collect_object_shapes(shape.items, found)
    elif isinstance(shape, MapShape) and shape.values is not None:
        collect_object_shapes(shape.values, found)

    return found
