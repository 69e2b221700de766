"""Unit tests for shape to JSON schema generation."""

import hashlib
import uuid
from dataclasses import dataclass
from enum import Enum

import pytest

from mochi_tools.exceptions import SchemaError
from mochi_tools.schema import (
    BOOLEAN,
    FLOAT64,
    INT32,
    INT64,
    STRING,
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    EnumShape,
    FieldSpec,
    IntegerSchema,
    ListShape,
    MapShape,
    NumberSchema,
    ObjectSchema,
    ObjectShape,
    ParameterSpec,
    PrimitiveKind,
    PrimitiveShape,
    ReferenceSchema,
    RefShape,
    SchemaGenerator,
    SetShape,
    StringSchema,
    generate_schema,
    qualified_name,
    reference_id,
)


class TemperatureUnit(Enum):
    CELSIUS = "c"
    fahrenheit = "f"
    Kelvin = "k"


@dataclass
class Person:
    name: str
    children: list


PERSON = ObjectShape(
    name="family.Person",
    fields=(
        FieldSpec("name", STRING),
        FieldSpec("children", ListShape(RefShape("family.Person"))),
    ),
    factory=Person,
)

ADDRESS = ObjectShape(name="family.Address", fields=(FieldSpec("city", STRING),))


class TestPrimitives:
    """Tests for primitive kinds."""

    @pytest.mark.parametrize(
        "kind", [PrimitiveKind.INT8, PrimitiveKind.INT16, PrimitiveKind.INT32, PrimitiveKind.INT64]
    )
    def test_integral_kinds_map_to_integer(self, kind):
        assert SchemaGenerator().generate(PrimitiveShape(kind)) == IntegerSchema()

    @pytest.mark.parametrize("kind", [PrimitiveKind.FLOAT32, PrimitiveKind.FLOAT64])
    def test_floating_kinds_map_to_number(self, kind):
        assert SchemaGenerator().generate(PrimitiveShape(kind)) == NumberSchema()

    def test_boolean_and_string(self):
        generator = SchemaGenerator()
        assert generator.generate(BOOLEAN) == BooleanSchema()
        assert generator.generate(STRING) == StringSchema()

    def test_description_is_attached(self):
        schema = SchemaGenerator().generate(STRING, description="city name")
        assert schema == StringSchema(description="city name")
        assert schema.to_dict() == {"type": "string", "description": "city name"}


class TestEnums:
    """Tests for enum shapes."""

    def test_values_keep_declaration_order_and_case(self):
        shape = EnumShape.of(TemperatureUnit)

        schema = SchemaGenerator().generate(shape)

        assert schema == EnumSchema(values=("CELSIUS", "fahrenheit", "Kelvin"))
        assert schema.to_dict() == {
            "type": "string",
            "enum": ["CELSIUS", "fahrenheit", "Kelvin"],
        }

    def test_enum_shape_of_uses_qualified_name(self):
        shape = EnumShape.of(TemperatureUnit)
        assert shape.name == qualified_name(TemperatureUnit)
        assert shape.enum_class is TemperatureUnit

    def test_empty_enum_is_rejected(self):
        with pytest.raises(SchemaError):
            SchemaGenerator().generate(EnumShape(name="Empty", values=()))


class TestObjects:
    """Tests for object shapes."""

    def test_fields_in_declaration_order_all_required(self):
        shape = ObjectShape(
            name="people.Person",
            fields=(
                FieldSpec("name", STRING),
                FieldSpec("age", INT32),
                FieldSpec("height", FLOAT64, nullable=True),
                FieldSpec("married", BOOLEAN),
            ),
        )

        schema = SchemaGenerator().generate(shape)

        assert schema == ObjectSchema(
            properties=(
                ("name", StringSchema()),
                ("age", IntegerSchema()),
                ("height", NumberSchema()),
                ("married", BooleanSchema()),
            ),
            required=("name", "age", "height", "married"),
        )

    def test_nested_object_is_inlined(self):
        shape = ObjectShape(
            name="people.Person",
            fields=(FieldSpec("name", STRING), FieldSpec("address", ADDRESS)),
        )
        generator = SchemaGenerator()

        schema = generator.generate(shape)

        assert schema.property_map["address"] == ObjectSchema(
            properties=(("city", StringSchema()),), required=("city",)
        )
        assert generator.definitions == {}

    def test_repeated_object_is_reused_without_definitions(self):
        shape = ObjectShape(
            name="trips.Trip",
            fields=(FieldSpec("origin", ADDRESS), FieldSpec("destination", ADDRESS)),
        )
        generator = SchemaGenerator()

        schema = generator.generate(shape)

        properties = schema.property_map
        assert properties["origin"] == properties["destination"]
        assert isinstance(properties["origin"], ObjectSchema)
        assert generator.definitions == {}

    def test_duplicate_field_names_are_rejected(self):
        shape = ObjectShape(
            name="broken.Shape",
            fields=(FieldSpec("a", STRING), FieldSpec("a", INT32)),
        )
        with pytest.raises(SchemaError, match="Duplicate field"):
            SchemaGenerator().generate(shape)


class TestCollections:
    """Tests for list, set and map shapes."""

    def test_list_of_strings(self):
        schema = SchemaGenerator().generate(ListShape(STRING))
        assert schema == ArraySchema(items=StringSchema())
        assert schema.to_dict() == {"type": "array", "items": {"type": "string"}}

    def test_set_and_list_produce_identical_schemas(self):
        colors = EnumShape(name="paint.Color", values=("RED", "GREEN", "BLUE"))
        assert SchemaGenerator().generate(SetShape(colors)) == SchemaGenerator().generate(
            ListShape(colors)
        )

    def test_list_of_objects_keeps_item_required(self):
        item = ObjectShape(name="people.Name", fields=(FieldSpec("name", STRING),))

        schema = SchemaGenerator().generate(ListShape(item))

        assert schema == ArraySchema(
            items=ObjectSchema(properties=(("name", StringSchema()),), required=("name",))
        )

    def test_map_is_opaque(self):
        schema = SchemaGenerator().generate(
            MapShape(INT32), description="map from name to age"
        )

        assert schema == ObjectSchema(description="map from name to age")
        assert schema.to_dict() == {
            "type": "object",
            "properties": {},
            "required": [],
            "description": "map from name to age",
        }


class TestRecursion:
    """Tests for recursive object graphs."""

    def test_self_reference_produces_one_definition(self):
        generator = SchemaGenerator()
        reference = reference_id("family.Person")

        schema = generator.generate(PERSON)

        expected = ObjectSchema(
            properties=(
                ("name", StringSchema()),
                ("children", ArraySchema(items=ReferenceSchema(reference=reference))),
            ),
            required=("name", "children"),
        )
        assert schema == expected
        assert generator.definitions == {reference: expected}

    def test_reference_id_is_stable(self):
        first, first_definitions = generate_schema(PERSON)
        second, second_definitions = generate_schema(PERSON)

        assert first == second
        assert first_definitions == second_definitions
        assert reference_id("family.Person") == reference_id("family.Person")
        assert reference_id("family.Person") != reference_id("family.Address")

    def test_reference_id_is_name_based_uuid(self):
        reference = reference_id("family.Person")
        digest = hashlib.md5(b"family.Person").digest()

        assert reference == str(uuid.UUID(bytes=digest, version=3))
        assert uuid.UUID(reference).version == 3

    def test_mutual_recursion(self):
        employee = ObjectShape(
            name="org.Employee",
            fields=(
                FieldSpec("name", STRING),
                FieldSpec(
                    "team",
                    ObjectShape(
                        name="org.Team",
                        fields=(FieldSpec("members", ListShape(RefShape("org.Employee"))),),
                    ),
                ),
            ),
        )
        generator = SchemaGenerator()

        schema = generator.generate(employee)

        employee_ref = reference_id("org.Employee")
        team = schema.property_map["team"]
        assert team.property_map["members"] == ArraySchema(
            items=ReferenceSchema(reference=employee_ref)
        )
        assert list(generator.definitions) == [employee_ref]

    def test_recursive_rendering_uses_defs(self):
        schema = SchemaGenerator().generate_parameters([ParameterSpec(PERSON)])
        reference = reference_id("family.Person")

        rendered = schema.to_dict()

        assert rendered["required"] == ["arg0"]
        assert rendered["properties"]["arg0"]["properties"]["children"] == {
            "type": "array",
            "items": {"$ref": f"#/$defs/{reference}"},
        }
        assert list(rendered["$defs"]) == [reference]

    def test_unknown_reference_is_rejected(self):
        with pytest.raises(SchemaError, match="unknown object shape"):
            SchemaGenerator().generate(ListShape(RefShape("nowhere.Node")))


class TestParameterWrapper:
    """Tests for the synthetic wrapper around a tool's parameters."""

    def test_positional_names_and_required(self):
        schema = SchemaGenerator().generate_parameters(
            [ParameterSpec(INT32), ParameterSpec(INT32)]
        )

        assert schema == ObjectSchema(
            properties=(("arg0", IntegerSchema()), ("arg1", IntegerSchema())),
            required=("arg0", "arg1"),
        )

    def test_explicit_names_and_optional_parameters(self):
        schema = SchemaGenerator().generate_parameters(
            [
                ParameterSpec(STRING, name="city"),
                ParameterSpec(INT64, optional=True),
            ]
        )

        assert [name for name, _ in schema.properties] == ["city", "arg1"]
        assert schema.required == ("city",)

    def test_no_parameters_produces_no_schema(self):
        assert SchemaGenerator().generate_parameters([]) is None

    def test_duplicate_parameter_names_are_rejected(self):
        with pytest.raises(SchemaError, match="Duplicate parameter"):
            SchemaGenerator().generate_parameters(
                [ParameterSpec(STRING, name="arg1"), ParameterSpec(STRING)]
            )


class TestUnsupportedShapes:
    """Tests for shapes the generator has no rule for."""

    def test_python_type_is_rejected(self):
        with pytest.raises(SchemaError, match="Unsupported parameter shape"):
            SchemaGenerator().generate(int)

    def test_unknown_primitive_kind_is_rejected(self):
        with pytest.raises(SchemaError, match="Unsupported primitive kind"):
            SchemaGenerator().generate(PrimitiveShape("decimal"))
