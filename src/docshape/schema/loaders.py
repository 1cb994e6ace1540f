"""Schema loading utilities for docshape."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from docshape.errors import SchemaDefinitionError
from docshape.loaders import load_content, load_file

from .models import Schema

logger = logging.getLogger(__name__)

STRUCTURE_SCHEMA_PATH = Path(__file__).parent / "schemas" / "docshape-schema-1.json"


def load_schema(content: str, format: str = "yaml") -> dict[str, Any]:
    """Load a schema description from string content.

    Args:
        content: Schema content as string
        format: Format of the content ('yaml' or 'json')

    Returns:
        Schema dictionary

    Raises:
        ValueError: If format is not supported or parsing fails
        SchemaDefinitionError: If the content is not a mapping
    """
    data = load_content(content, format=format)
    if not isinstance(data, dict):
        raise SchemaDefinitionError("schema description must be a mapping")
    return data


def load_schema_from_file(path: str | Path) -> dict[str, Any]:
    """Load a schema description from a YAML or JSON file.

    Args:
        path: Path to the schema file

    Returns:
        Schema dictionary

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported or parsing fails
    """
    data = load_file(path)
    if not isinstance(data, dict):
        raise SchemaDefinitionError(f"schema description in {path} must be a mapping")
    return data


@lru_cache(maxsize=1)
def _structure_schema() -> dict[str, Any]:
    with open(STRUCTURE_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_schema_structure(schema: dict[str, Any]) -> None:
    """Validate that a schema description has the expected layout using JSON Schema.

    Args:
        schema: Schema dictionary to validate

    Raises:
        SchemaDefinitionError: If schema structure is invalid
    """
    try:
        jsonschema.validate(instance=schema, schema=_structure_schema())
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path)
        raise SchemaDefinitionError(e.message, path=path) from e
    except RecursionError as e:
        raise SchemaDefinitionError("schema nesting too deep") from e
    except jsonschema.SchemaError as e:
        # Only happens if the bundled structure schema itself is broken
        raise SchemaDefinitionError(f"Invalid structure schema: {e.message}") from e


def parse_schema(data: dict[str, Any]) -> Schema:
    """Check a schema description and build the `Schema` model from it.

    Raises:
        SchemaDefinitionError: If the description is malformed
    """
    validate_schema_structure(data)
    schema = Schema.from_dict(data)
    logger.debug(
        f"Parsed schema with {schema.root.type} root and {len(schema.validators)} validator(s)"
    )
    return schema


def read_schema(path: str | Path) -> Schema:
    """Load, check and build a `Schema` from a YAML or JSON file."""
    return parse_schema(load_schema_from_file(path))
