"""
Config Document Validation

Checks JSON configuration documents against the schemas bundled next to
this module (`<name>.schema.json`) before any dataclass is built from them.

- `validate_finder_config()` checks a finder configuration document
- Every violation is collected; the first (by field path) names the error
- Required fields are checked up front so their absence reads plainly
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, List

import jsonschema


FINDER_CONFIG_SCHEMA = "finder_config"
FINDER_CONFIG_REQUIRED = ("schema", "core_type")

_SCHEMA_DIR = Path(__file__).parent


class ValidationError(Exception):
    """
    A configuration document does not match its schema.

    Attributes:
        path: Dotted path of the first failing field ("" for the document)
        errors: Message for every violation found
    """

    def __init__(self, message: str, path: str = "", errors: List[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = list(errors) if errors else []


@lru_cache(maxsize=None)
def _validator_for(name: str) -> jsonschema.Draft7Validator:
    schema_path = _SCHEMA_DIR / f"{name}.schema.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    jsonschema.Draft7Validator.check_schema(schema)
    return jsonschema.Draft7Validator(schema)


def _dotted(error: jsonschema.ValidationError) -> str:
    return ".".join(str(part) for part in error.absolute_path)


def validate_finder_config(data: Any) -> None:
    """
    Validate a finder configuration document.

    Args:
        data: Parsed JSON document

    Raises:
        ValidationError: If data is not an object, lacks a required field,
            or violates the finder config schema
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Config must be a JSON object, got {type(data).__name__}")

    missing = [name for name in FINDER_CONFIG_REQUIRED if name not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            errors=[f"Missing field: {name}" for name in missing],
        )

    failures = sorted(
        _validator_for(FINDER_CONFIG_SCHEMA).iter_errors(data),
        key=lambda error: [str(part) for part in error.absolute_path],
    )
    if failures:
        raise ValidationError(
            f"Schema validation failed: {failures[0].message}",
            path=_dotted(failures[0]),
            errors=[error.message for error in failures],
        )
