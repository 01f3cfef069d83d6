"""
Schemas Package

Type schema resolution and JSON schema validation utilities.
"""

from .registry import SchemaError, TypeEntry, TypeRegistry
from .validator import ValidationError, validate_finder_config

__all__ = [
    "SchemaError",
    "TypeEntry",
    "TypeRegistry",
    "ValidationError",
    "validate_finder_config",
]
