"""
Pytest configuration and fixtures for dtoguard tests

This module provides shared fixtures for unit and CLI tests.
"""
import pytest

from dtoguard.core.models import FieldRule


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )


# =======================
# SCHEMA FIXTURES
# =======================

@pytest.fixture
def user_schema() -> dict[str, FieldRule]:
    """
    Schema for a typical "create user" request body

    Returns:
        Ordered dict of field name to FieldRule
    """
    return {
        "name": FieldRule(required=True, type="string", min_length=2, max_length=50),
        "age": FieldRule(required=True, type="number", min=0, max=120),
        "email": FieldRule(required=False, type="string", pattern=r"^[^@\s]+@[^@\s]+$"),
        "tags": FieldRule(type="array"),
        "bio": FieldRule(type="string", allow_null=True),
    }


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture
def schema_file(tmp_path):
    """
    Write a YAML schema file for loader and CLI tests

    Returns:
        Path to the schema file
    """
    path = tmp_path / "user.yaml"
    path.write_text(
        """
fields:
  name:
    required: true
    type: string
    minLength: 2
    transform: strip
  age:
    required: true
    type: number
    min: 0
    max: 120
  email:
    type: string
    custom: email
  role:
    type: string
    custom:
      name: one_of
      params:
        allowed_values: [admin, member]
"""
    )
    return path
