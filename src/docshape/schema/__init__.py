"""docshape schema model.

A schema is a tree of typed nodes:

- `DictNode`: object with declared ``fields``, named ``any_fields`` and an
  ``others`` fallback
- `ListNode`: array of ``element_type`` with an optional ``limit``
- `StringNode`: string with optional ``length`` and anchored ``regex``
- `LiteralNode`: string equal to one of ``candidate``
- `BooleanNode`: any boolean
- `NumberNode`: number with optional inclusive ``min``/``max``

Every node carries ``optional`` and ``nullable``, both defaulting to false.

## Loading

```python
from docshape.schema import read_schema

schema = read_schema("schemas/order.yaml")
```

The persisted layout tags each node with ``type``:

```yaml
root:
  type: Dict
  fields:
    id: {type: String, regex: "[0-9]+"}
    status: {type: Literal, candidate: [open, closed]}
    note: {type: String, optional: true, nullable: true}
validators: [unique_line_ids]
```
"""

from .loaders import (
    load_schema,
    load_schema_from_file,
    parse_schema,
    read_schema,
    validate_schema_structure,
)
from .models import (
    NODE_TYPES,
    BaseNodeModel,
    BooleanNode,
    DictNode,
    ListNode,
    LiteralNode,
    NumberNode,
    Schema,
    SchemaNode,
    StringNode,
    parse_node,
)

__all__ = [
    # Models
    "NODE_TYPES",
    "BaseNodeModel",
    "DictNode",
    "ListNode",
    "StringNode",
    "LiteralNode",
    "BooleanNode",
    "NumberNode",
    "SchemaNode",
    "Schema",
    "parse_node",
    # Loaders
    "load_schema",
    "load_schema_from_file",
    "parse_schema",
    "read_schema",
    "validate_schema_structure",
]
