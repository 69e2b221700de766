"""JSON schema elements sent to the model as tool parameter descriptions.

Elements are immutable. ``to_dict()`` renders the JSON schema dialect the
function-calling APIs expect; references render as ``{"$ref": "#/$defs/<id>"}``
and the definitions they point to live under ``$defs`` of the outermost
object schema.
"""

from dataclasses import dataclass
from typing import Any, Union


def _with_description(schema: dict[str, Any], description: str | None) -> dict:
    if description is not None:
        schema["description"] = description
    return schema


@dataclass(frozen=True)
class StringSchema:
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_description({"type": "string"}, self.description)


@dataclass(frozen=True)
class IntegerSchema:
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_description({"type": "integer"}, self.description)


@dataclass(frozen=True)
class NumberSchema:
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_description({"type": "number"}, self.description)


@dataclass(frozen=True)
class BooleanSchema:
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_description({"type": "boolean"}, self.description)


@dataclass(frozen=True)
class EnumSchema:
    values: tuple[str, ...]
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_description(
            {"type": "string", "enum": list(self.values)}, self.description
        )


@dataclass(frozen=True)
class ReferenceSchema:
    reference: str

    def to_dict(self) -> dict[str, Any]:
        return {"$ref": f"#/$defs/{self.reference}"}


@dataclass(frozen=True)
class ArraySchema:
    items: "JsonSchemaElement"
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_description(
            {"type": "array", "items": self.items.to_dict()}, self.description
        )


@dataclass(frozen=True)
class ObjectSchema:
    """An object with ordered properties.

    Attributes:
        properties: Property name to element, in declaration order
        required: Required property names, in declaration order
        definitions: Reference id to shared definition (outermost schema only)
        description: Optional description
    """

    properties: tuple[tuple[str, "JsonSchemaElement"], ...] = ()
    required: tuple[str, ...] = ()
    definitions: tuple[tuple[str, "ObjectSchema"], ...] = ()
    description: str | None = None

    @property
    def property_map(self) -> dict[str, "JsonSchemaElement"]:
        return dict(self.properties)

    @property
    def definition_map(self) -> dict[str, "ObjectSchema"]:
        return dict(self.definitions)

    def to_dict(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {name: element.to_dict() for name, element in self.properties},
            "required": list(self.required),
        }
        _with_description(schema, self.description)
        if self.definitions:
            schema["$defs"] = {
                reference: definition.to_dict()
                for reference, definition in self.definitions
            }
        return schema


JsonSchemaElement = Union[
    StringSchema,
    IntegerSchema,
    NumberSchema,
    BooleanSchema,
    EnumSchema,
    ReferenceSchema,
    ArraySchema,
    ObjectSchema,
]

