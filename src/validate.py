"""JSON Schema validation helpers for untrusted JSON documents.

Registry responses and local package.json files are checked against Draft-07
schemas before any field is read. Callers get the document back untouched on
success, or a ``SchemaError`` describing the first problem.
"""

from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft7Validator


class SchemaError(ValueError):
    """Raised when data fails to validate against a provided schema."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Invalid document at '{path}': {message}")


def validate_document(schema: Dict[str, Any], data: Any) -> Any:
    """Validate ``data`` strictly and raise on the first error.

    Args:
        schema: Draft-07 JSON Schema dict.
        data:   Decoded JSON payload to validate.

    Returns:
        The same ``data`` object, for chaining.
    """
    validator = Draft7Validator(schema)
    errs = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise SchemaError(path, first.message)
    return data

