"""
Schema configuration management.

Loads field schemas from YAML files and provides utilities
for building schemas programmatically.
"""

from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import ValidationError as PydanticValidationError

from dtoguard.core.models import FieldRule
from dtoguard.core.validators import common
from dtoguard.observability.logger import get_logger

logger = get_logger(__name__)

TRANSFORM_REGISTRY: dict[str, Callable[[Any], Any]] = {
    "strip": lambda value: value.strip(),
    "lower": lambda value: value.lower(),
    "upper": lambda value: value.upper(),
    "strip_lower": lambda value: value.strip().lower(),
    "int": int,
    "float": float,
}

CUSTOM_REGISTRY: dict[str, Callable[[Any], Any]] = {
    "email": common.email,
    "phone": common.phone,
    "url": common.url,
}

# Validators that need parameters, e.g. {"name": "one_of", "params": {"allowed_values": [...]}}
CUSTOM_FACTORY_REGISTRY: dict[str, Callable[..., Callable[[Any], Any]]] = {
    "one_of": common.one_of,
    "min_items": common.min_items,
    "max_items": common.max_items,
}


class SchemaLoader:
    """
    Loads a field schema from a YAML configuration file.

    Expected YAML format:
    ```yaml
    fields:
      name:
        required: true
        type: string
        minLength: 2
        transform: strip

      email:
        required: true
        type: string
        custom: email

      role:
        type: string
        custom:
          name: one_of
          params:
            allowed_values: [admin, member]
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the schema loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Schema configuration file not found: {config_path}")

    def load_schema(self) -> dict[str, FieldRule]:
        """
        Load and parse the field schema from the YAML file.

        Returns:
            Ordered dict of field name to FieldRule

        Raises:
            ValueError: If YAML is invalid or a field definition is malformed
        """
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}")

        schema = parse_schema_config(config)
        logger.info(
            f"Loaded schema with {len(schema)} fields",
            extra={"schema_path": str(self.config_path)},
        )
        return schema


def parse_schema_config(config: Any) -> dict[str, FieldRule]:
    """
    Parse an already-loaded schema configuration.

    Args:
        config: Mapping with a "fields" section

    Returns:
        Ordered dict of field name to FieldRule

    Raises:
        ValueError: If the configuration is malformed
    """
    if not isinstance(config, dict) or "fields" not in config:
        raise ValueError("Configuration file must contain 'fields' section")

    fields = config["fields"]
    if not isinstance(fields, dict):
        raise ValueError("'fields' section must be a mapping of field name to rule")

    return {str(name): _parse_field(str(name), definition) for name, definition in fields.items()}


def _parse_field(field_name: str, definition: Any) -> FieldRule:
    """
    Parse a single field definition.

    Args:
        field_name: The field this rule applies to
        definition: The rule definition from YAML (None means "no constraints")

    Returns:
        FieldRule instance

    Raises:
        ValueError: If the definition is invalid
    """
    if definition is None:
        definition = {}
    if not isinstance(definition, dict):
        raise ValueError(f"Rule for field '{field_name}' must be a mapping")

    rule_def = dict(definition)

    if "transform" in rule_def:
        name = rule_def["transform"]
        if name not in TRANSFORM_REGISTRY:
            raise ValueError(f"Unknown transform '{name}' for field '{field_name}'")
        rule_def["transform"] = TRANSFORM_REGISTRY[name]

    if "custom" in rule_def:
        rule_def["custom"] = _resolve_custom(field_name, rule_def["custom"])

    try:
        return FieldRule.model_validate(rule_def)
    except PydanticValidationError as e:
        raise ValueError(f"Invalid rule for field '{field_name}': {e}")


def _resolve_custom(field_name: str, custom_def: Any) -> Callable[[Any], Any]:
    if isinstance(custom_def, str):
        if custom_def not in CUSTOM_REGISTRY:
            raise ValueError(f"Unknown custom validator '{custom_def}' for field '{field_name}'")
        return CUSTOM_REGISTRY[custom_def]

    if isinstance(custom_def, dict) and "name" in custom_def:
        factory = CUSTOM_FACTORY_REGISTRY.get(custom_def["name"])
        if factory is None:
            raise ValueError(f"Unknown custom validator '{custom_def['name']}' for field '{field_name}'")
        params = custom_def.get("params") or {}
        try:
            return factory(**params)
        except TypeError as e:
            raise ValueError(f"Invalid params for custom validator '{custom_def['name']}': {e}")

    raise ValueError(f"Custom validator for field '{field_name}' must be a name or a mapping with 'name'")


class SchemaBuilder:
    """
    Programmatically build schemas (for testing or dynamic schemas).
    """

    def __init__(self):
        """Initialize empty schema."""
        self.fields: dict[str, FieldRule] = {}

    def field(self, field_name: str, **rule: Any) -> "SchemaBuilder":
        """Add (or replace) a field rule."""
        self.fields[field_name] = FieldRule(**rule)
        return self

    def required_string(
        self,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
        pattern: str | None = None,
    ) -> "SchemaBuilder":
        """Add a required string field."""
        return self.field(
            field_name,
            required=True,
            type="string",
            min_length=min_length,
            max_length=max_length,
            pattern=pattern,
        )

    def number(
        self,
        field_name: str,
        required: bool = False,
        min_value: float | None = None,
        max_value: float | None = None,
    ) -> "SchemaBuilder":
        """Add a numeric field."""
        return self.field(field_name, required=required, type="number", min=min_value, max=max_value)

    def build(self) -> dict[str, FieldRule]:
        """Build and return the schema."""
        return dict(self.fields)
