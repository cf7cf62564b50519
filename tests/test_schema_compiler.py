"""Tests for JSON Schema compilation."""

import pytest

from eventcatalog.errors.exceptions import SchemaCompilationError
from eventcatalog.services.schema_compiler import compile_schema


def test_valid_schema_compiles():
    schema = compile_schema('{"$schema": "http://json-schema.org/draft-07/schema#", "type": "object"}')
    assert schema["type"] == "object"


def test_schema_without_dialect_compiles_by_default():
    assert compile_schema('{"type": "string"}') == {"type": "string"}


def test_dialect_can_be_required():
    with pytest.raises(SchemaCompilationError, match=r"\$schema"):
        compile_schema('{"type": "string"}', require_dialect=True)


def test_invalid_json_is_rejected():
    with pytest.raises(SchemaCompilationError, match="not valid JSON"):
        compile_schema("{not json")


def test_non_object_is_rejected():
    with pytest.raises(SchemaCompilationError, match="JSON object"):
        compile_schema("[1, 2, 3]")


def test_invalid_keyword_value_is_rejected():
    with pytest.raises(SchemaCompilationError):
        compile_schema('{"type": "banana"}')


def test_same_input_same_outcome():
    text = '{"type": "object", "required": "id"}'
    messages = []
    for _ in range(2):
        with pytest.raises(SchemaCompilationError) as exc_info:
            compile_schema(text)
        messages.append(exc_info.value.message)
    assert messages[0] == messages[1]
