"""Parameter shapes and JSON schema generation for tools.

This package holds the shape descriptors callers use to declare tool
parameters, the immutable JSON schema elements sent to the model, and the
generator that turns one into the other.
"""

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
from mochi_tools.schema.generator import SchemaGenerator, generate_schema, reference_id
from mochi_tools.schema.shapes import (
    BOOLEAN,
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    STRING,
    EnumShape,
    FieldSpec,
    ListShape,
    MapShape,
    ObjectShape,
    ParameterSpec,
    PrimitiveKind,
    PrimitiveShape,
    RefShape,
    SetShape,
    Shape,
    qualified_name,
)

__all__ = [
    # Elements
    "JsonSchemaElement",
    "ObjectSchema",
    "ArraySchema",
    "StringSchema",
    "IntegerSchema",
    "NumberSchema",
    "BooleanSchema",
    "EnumSchema",
    "ReferenceSchema",
    # Generation
    "SchemaGenerator",
    "generate_schema",
    "reference_id",
    # Shapes
    "Shape",
    "PrimitiveKind",
    "PrimitiveShape",
    "EnumShape",
    "FieldSpec",
    "ObjectShape",
    "ListShape",
    "SetShape",
    "MapShape",
    "RefShape",
    "ParameterSpec",
    "qualified_name",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "FLOAT32",
    "FLOAT64",
    "BOOLEAN",
    "STRING",
]
