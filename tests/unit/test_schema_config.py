"""
Unit tests for schema loading and building.
"""

import pytest

from dtoguard.core.models import ErrorCode, FieldRule
from dtoguard.core.rules import SchemaBuilder, SchemaLoader, parse_schema_config, validate


@pytest.mark.unit
class TestSchemaLoader:
    """Tests for SchemaLoader"""

    def test_load_schema_from_yaml(self, schema_file):
        schema = SchemaLoader(schema_file).load_schema()

        assert list(schema) == ["name", "age", "email", "role"]
        assert all(isinstance(rule, FieldRule) for rule in schema.values())
        assert schema["name"].required is True
        assert schema["name"].min_length == 2
        assert schema["age"].min == 0
        assert schema["age"].max == 120

    def test_loaded_schema_validates_records(self, schema_file):
        schema = SchemaLoader(schema_file).load_schema()

        result = validate({"name": "  Ann ", "age": "33", "role": "admin"}, schema)

        assert result.success is True
        assert result.data == {"name": "Ann", "age": 33, "role": "admin"}

    def test_loaded_custom_validators(self, schema_file):
        schema = SchemaLoader(schema_file).load_schema()

        result = validate({"name": "Ann", "age": 33, "email": "nope", "role": "owner"}, schema)

        assert result.success is False
        assert [error.message for error in result.errors] == [
            "Invalid email format",
            "Value must be one of: admin, member",
        ]
        assert all(error.code == ErrorCode.CUSTOM_VALIDATION_FAILED for error in result.errors)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SchemaLoader(tmp_path / "missing.yaml")

    def test_missing_fields_section(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("rules: {}\n")

        with pytest.raises(ValueError) as exc_info:
            SchemaLoader(path).load_schema()
        assert "fields" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("fields: [unclosed\n")

        with pytest.raises(ValueError) as exc_info:
            SchemaLoader(path).load_schema()
        assert "invalid yaml" in str(exc_info.value).lower()


@pytest.mark.unit
class TestParseSchemaConfig:
    """Tests for parsing already-loaded configuration"""

    def test_empty_field_definition_means_no_constraints(self):
        schema = parse_schema_config({"fields": {"anything": None}})

        assert schema["anything"] == FieldRule()

    def test_named_transform(self):
        schema = parse_schema_config({"fields": {"code": {"transform": "upper"}}})

        assert validate({"code": "abc"}, schema).data == {"code": "ABC"}

    def test_int_transform_failure_is_reported(self):
        schema = parse_schema_config({"fields": {"count": {"transform": "int"}}})

        result = validate({"count": "many"}, schema)

        assert result.errors[0].code == ErrorCode.TRANSFORM_FAILED

    @pytest.mark.parametrize(
        "definition, message",
        [
            ({"transform": "reverse"}, "unknown transform"),
            ({"custom": "credit_card"}, "unknown custom validator"),
            ({"custom": {"name": "between"}}, "unknown custom validator"),
            ({"custom": {"name": "one_of", "params": {"values": [1]}}}, "invalid params"),
            ({"custom": 42}, "must be a name"),
            ({"type": "date"}, "invalid rule"),
            ("required", "must be a mapping"),
        ],
    )
    def test_invalid_field_definitions(self, definition, message):
        with pytest.raises(ValueError) as exc_info:
            parse_schema_config({"fields": {"field": definition}})
        assert message in str(exc_info.value).lower()

    def test_fields_must_be_mapping(self):
        with pytest.raises(ValueError):
            parse_schema_config({"fields": ["name", "age"]})


@pytest.mark.unit
class TestSchemaBuilder:
    """Tests for SchemaBuilder"""

    def test_build_schema(self):
        schema = (
            SchemaBuilder()
            .required_string("code", min_length=3, max_length=3, pattern=r"^[A-Z]+$")
            .number("amount", required=True, min_value=0.01, max_value=1000)
            .field("notes", type="string", allow_null=True)
            .build()
        )

        assert list(schema) == ["code", "amount", "notes"]
        assert schema["code"].required is True
        assert schema["amount"].min == 0.01
        assert schema["notes"].allow_null is True

    def test_built_schema_validates(self):
        schema = SchemaBuilder().number("amount", required=True, min_value=1).build()

        assert validate({"amount": 5}, schema).success is True
        assert validate({"amount": 0}, schema).errors[0].code == ErrorCode.BELOW_MINIMUM

    def test_build_returns_copy(self):
        builder = SchemaBuilder().field("a")
        schema = builder.build()
        builder.field("b")

        assert list(schema) == ["a"]
