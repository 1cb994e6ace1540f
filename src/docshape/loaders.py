"""Loading utilities for documents and schema descriptions.

Both schemas and documents may be stored as YAML or JSON. The helpers here
only turn text into plain Python values; building a `Schema` from those
values lives in `docshape.schema.loaders`.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("yaml", "json")


def load_content(content: str, format: str = "yaml") -> Any:
    """Parse YAML or JSON text into a JSON-like value tree.

    Args:
        content: Text to parse
        format: Format of the content ('yaml' or 'json')

    Returns:
        The parsed value

    Raises:
        ValueError: If format is not supported or parsing fails
    """
    if format == "yaml":
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML: {e}") from e
    elif format == "json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON: {e}") from e
    else:
        raise ValueError(f"Unsupported format: {format}. Use 'yaml' or 'json'")


def detect_format(path: Path) -> str:
    """Determine the content format from a file extension.

    Raises:
        ValueError: If the extension is not .yaml, .yml or .json
    """
    suffix = path.suffix.lower()
    if suffix in [".yaml", ".yml"]:
        return "yaml"
    elif suffix == ".json":
        return "json"
    raise ValueError(f"Unsupported file extension: {path.suffix}. Use .yaml, .yml, or .json")


def load_file(path: str | Path) -> Any:
    """Load a YAML or JSON file.

    Args:
        path: Path to the file

    Returns:
        The parsed value

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported or parsing fails
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    format = detect_format(path)
    content = path.read_text(encoding="utf-8")
    logger.debug(f"Loading {format} content from {path}")
    return load_content(content, format=format)


def load_document(content: str, format: str = "json") -> Any:
    """Parse a document to validate from text."""
    return load_content(content, format=format)


def load_document_from_file(path: str | Path) -> Any:
    """Load a document to validate from a YAML or JSON file."""
    return load_file(path)
