"""JSON Schema compilation using the jsonschema library."""

import json

import jsonschema
from jsonschema.validators import validator_for

from eventcatalog.errors.exceptions import SchemaCompilationError


def compile_schema(schema_text: str, require_dialect: bool = False) -> dict:
    """Parse and check JSON Schema text, returning the parsed schema.

    Args:
        schema_text: Raw JSON Schema document.
        require_dialect: Also require a top-level ``$schema`` keyword.

    Raises:
        SchemaCompilationError: if the text is not JSON, not an object, or is
            not a valid schema for its declared (or the latest) draft.
    """
    try:
        schema = json.loads(schema_text)
    except (TypeError, ValueError) as exc:
        raise SchemaCompilationError(f"schema is not valid JSON: {exc}") from exc

    if not isinstance(schema, dict):
        raise SchemaCompilationError("schema must be a JSON object")
    if require_dialect and "$schema" not in schema:
        raise SchemaCompilationError("schema must declare '$schema'")

    validator_cls = validator_for(schema)
    try:
        validator_cls.check_schema(schema)
    except jsonschema.SchemaError as exc:
        raise SchemaCompilationError(exc.message) from exc
    return schema
