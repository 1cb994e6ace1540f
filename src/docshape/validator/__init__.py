"""docshape validator - match JSON-like documents against a schema tree.

## Key Components

### Core
- `ShapeValidator`: Validation engine bound to one schema
- `validate`: One-shot helper for a schema and a document
- `shape_matches` / `value_kind`: The kind check on its own

### Results
- `Verdict`: Pass, or the list of violations
- `Violation`: Path, code and message of one failure
- `ViolationCode`: Kinds of failures

### Named validators
- `NamedValidator`, `ValidatorRegistry`: Hook for whole-document rules
  referenced from ``Schema.validators``

## Quick Example

```python
from docshape.schema import DictNode, ListNode, NumberNode, StringNode
from docshape.validator import ShapeValidator

validator = ShapeValidator(
    DictNode(
        fields={
            "name": StringNode(length=10),
            "scores": ListNode(element_type=NumberNode(min=0, max=100), limit=3),
        }
    )
)

verdict = validator.validate({"name": "utf8中文", "scores": [10, 200]})
# verdict.valid is False
# verdict.violations[0].location == "$.scores[1]"
```
"""

from .core import EXPECTED_KINDS, ShapeValidator, shape_matches, validate, value_kind
from .models import PathSegment, Verdict, Violation, ViolationCode, format_path
from .registry import (
    CallableValidator,
    NamedValidator,
    ValidatorRegistry,
    get_default_registry,
    register_validator,
)

__all__ = [
    # Core validator
    "ShapeValidator",
    "validate",
    "shape_matches",
    "value_kind",
    "EXPECTED_KINDS",
    # Results
    "Verdict",
    "Violation",
    "ViolationCode",
    "PathSegment",
    "format_path",
    # Named validators
    "NamedValidator",
    "CallableValidator",
    "ValidatorRegistry",
    "get_default_registry",
    "register_validator",
]
