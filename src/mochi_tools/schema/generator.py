"""Shape to JSON schema generation.

The generator turns shape descriptors into JsonSchemaElements. Object shapes
are expanded at most once per generator: while an object is being expanded a
second encounter yields a reference to it (and marks it recursive), and once
it is built later encounters reuse the cached schema. Recursive objects are
collected into ``definitions`` so the references can be resolved.
"""

import hashlib
import logging
import uuid
from dataclasses import dataclass, replace
from typing import Sequence

from mochi_tools.exceptions import SchemaError
from mochi_tools.schema.elements import (
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    IntegerSchema,
    JsonSchemaElement,
    NumberSchema,
    ObjectSchema,
    ReferenceSchema,
    StringSchema,
)
from mochi_tools.schema.shapes import (
    EnumShape,
    ListShape,
    MapShape,
    ObjectShape,
    ParameterSpec,
    PrimitiveKind,
    PrimitiveShape,
    RefShape,
    SetShape,
    Shape,
)

logger = logging.getLogger(__name__)


def reference_id(type_name: str) -> str:
    """Derive a stable schema reference id from a fully qualified type name.

    The id is a name-based (MD5, version 3) UUID of the UTF-8 encoded name,
    so it is identical across runs and processes.
    """
    digest = hashlib.md5(type_name.encode("utf-8")).digest()
    return str(uuid.UUID(bytes=digest, version=3))


@dataclass
class _VisitedType:
    reference: str
    schema: JsonSchemaElement
    recursive: bool = False
    expanding: bool = True


class SchemaGenerator:
    """Generates JSON schema elements from shapes.

    A generator instance holds the cache of expanded object types, so one
    instance should be used per top-level schema (one per tool).
    """

    def __init__(self) -> None:
        self._visited: dict[str, _VisitedType] = {}

    @property
    def definitions(self) -> dict[str, ObjectSchema]:
        """Definitions of every recursive object type seen so far."""
        return {
            visited.reference: visited.schema
            for visited in self._visited.values()
            if visited.recursive and isinstance(visited.schema, ObjectSchema)
        }

    def generate(
        self, shape: Shape, description: str | None = None
    ) -> JsonSchemaElement:
        """Generate the schema element for a shape.

        Args:
            shape: The shape to describe
            description: Optional description attached to the element

        Returns:
            JsonSchemaElement: The generated element

        Raises:
            SchemaError: If the shape is not supported
        """
        if isinstance(shape, PrimitiveShape):
            return self._generate_primitive(shape, description)

        if isinstance(shape, EnumShape):
            if not shape.values:
                raise SchemaError(f"Enum '{shape.name}' declares no constants")
            return EnumSchema(values=tuple(shape.values), description=description)

        if isinstance(shape, (ListShape, SetShape)):
            return ArraySchema(
                items=self.generate(shape.items), description=description
            )

        if isinstance(shape, MapShape):
            # Maps stay opaque, key and value shapes are not described
            return ObjectSchema(description=description)

        if isinstance(shape, ObjectShape):
            return self._generate_object(shape, description)

        if isinstance(shape, RefShape):
            visited = self._visited.get(shape.name)
            if visited is None:
                raise SchemaError(
                    f"Reference to unknown object shape '{shape.name}'"
                )
            return self._reuse(visited, description)

        raise SchemaError(f"Unsupported parameter shape: {shape!r}")

    def generate_parameters(
        self, parameters: Sequence[ParameterSpec]
    ) -> ObjectSchema | None:
        """Wrap a tool's parameter list into one object schema.

        Properties are named ``arg0``, ``arg1``, ... unless a parameter has an
        explicit name. Every parameter is required unless marked optional.
        The wrapper carries the definitions of all recursive types.

        Returns:
            ObjectSchema | None: None when the tool declares no parameters
        """
        if not parameters:
            return None

        properties: list[tuple[str, JsonSchemaElement]] = []
        required: list[str] = []
        for index, parameter in enumerate(parameters):
            name = parameter.property_name(index)
            if any(existing == name for existing, _ in properties):
                raise SchemaError(f"Duplicate parameter name '{name}'")
            properties.append((name, self.generate(parameter.shape, parameter.description)))
            if not parameter.optional:
                required.append(name)

        return ObjectSchema(
            properties=tuple(properties),
            required=tuple(required),
            definitions=tuple(self.definitions.items()),
        )

    def _generate_primitive(
        self, shape: PrimitiveShape, description: str | None
    ) -> JsonSchemaElement:
        kind = shape.kind
        if not isinstance(kind, PrimitiveKind):
            raise SchemaError(f"Unsupported primitive kind: {kind!r}")
        if kind.is_integral:
            return IntegerSchema(description=description)
        if kind.is_floating:
            return NumberSchema(description=description)
        if kind is PrimitiveKind.BOOLEAN:
            return BooleanSchema(description=description)
        return StringSchema(description=description)

    def _generate_object(
        self, shape: ObjectShape, description: str | None
    ) -> JsonSchemaElement:
        visited = self._visited.get(shape.name)
        if visited is not None:
            return self._reuse(visited, description)

        # Reserve the reference before descending so cycles terminate
        reference = reference_id(shape.name)
        visited = _VisitedType(
            reference=reference, schema=ReferenceSchema(reference=reference)
        )
        self._visited[shape.name] = visited
        logger.debug(f"Expanding object shape {shape.name} (ref {reference})")

        properties: list[tuple[str, JsonSchemaElement]] = []
        for field_spec in shape.fields:
            if any(existing == field_spec.name for existing, _ in properties):
                raise SchemaError(
                    f"Duplicate field '{field_spec.name}' in '{shape.name}'"
                )
            properties.append(
                (field_spec.name, self.generate(field_spec.shape, field_spec.description))
            )

        schema = ObjectSchema(
            properties=tuple(properties),
            required=tuple(name for name, _ in properties),
            description=shape.description,
        )
        visited.schema = schema
        visited.expanding = False

        if description is not None:
            return replace(schema, description=description)
        return schema

    def _reuse(
        self, visited: _VisitedType, description: str | None
    ) -> JsonSchemaElement:
        if visited.expanding:
            visited.recursive = True
            return visited.schema
        if description is not None:
            return replace(visited.schema, description=description)
        return visited.schema


def generate_schema(shape: Shape) -> tuple[JsonSchemaElement, dict[str, ObjectSchema]]:
    """Generate a schema and its definitions with a fresh generator."""
    generator = SchemaGenerator()
    element = generator.generate(shape)
    return element, generator.definitions
