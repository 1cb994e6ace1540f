"""docshape - declarative shape validation for JSON-like documents.

A schema is a tree of typed nodes (Dict, List, String, Literal, Boolean,
Number). docshape checks whether a document, an already parsed tree of
dicts, lists, strings, numbers, booleans and ``None``, conforms to it, and
reports every place where it does not.

## Quick Start

```python
from docshape import ShapeValidator, parse_schema

schema = parse_schema({
    "root": {
        "type": "Dict",
        "fields": {
            "id": {"type": "String", "regex": "[0-9]+"},
            "state": {"type": "Literal", "candidate": ["open", "closed"]},
            "tags": {"type": "List", "element_type": {"type": "String"}, "optional": True},
        },
    },
    "validators": [],
})

verdict = ShapeValidator(schema).validate({"id": "12a", "state": "open"})
for violation in verdict.violations:
    print(violation)  # $.id: String does not match pattern: [0-9]+
```

## Modules

- `docshape.schema`: Schema node models and schema loading
- `docshape.validator`: Validation engine, verdicts and named validators
- `docshape.loaders`: YAML/JSON document loading
- `docshape.cli`: Command line interface
"""

from .config import ValidationOptions
from .errors import DocumentValidationError, SchemaDefinitionError
from .loaders import load_document, load_document_from_file
from .schema import (
    BooleanNode,
    DictNode,
    ListNode,
    LiteralNode,
    NumberNode,
    Schema,
    SchemaNode,
    StringNode,
    parse_schema,
    read_schema,
)
from .validator import (
    NamedValidator,
    ShapeValidator,
    ValidatorRegistry,
    Verdict,
    Violation,
    ViolationCode,
    validate,
)

__all__ = [
    # Schema
    "Schema",
    "SchemaNode",
    "DictNode",
    "ListNode",
    "StringNode",
    "LiteralNode",
    "BooleanNode",
    "NumberNode",
    "parse_schema",
    "read_schema",
    # Validation
    "ShapeValidator",
    "validate",
    "Verdict",
    "Violation",
    "ViolationCode",
    "ValidationOptions",
    "NamedValidator",
    "ValidatorRegistry",
    # Documents
    "load_document",
    "load_document_from_file",
    # Errors
    "SchemaDefinitionError",
    "DocumentValidationError",
]
