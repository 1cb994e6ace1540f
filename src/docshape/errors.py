"""Exceptions raised by docshape.

Two failure classes are kept apart:

- `SchemaDefinitionError` is a configuration problem found while building a
  schema (bad discriminant, unparsable pattern, ``min > max``...).
- `DocumentValidationError` is only raised when a caller explicitly asks a
  failing verdict to raise; routine document failures are returned as data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docshape.validator.models import Violation


class SchemaDefinitionError(ValueError):
    """Raised when a schema description is malformed.

    Attributes:
        path: Dotted location of the offending schema node or attribute,
            e.g. ``root.fields.email.regex``. Empty when the problem is not
            tied to a single node.
        reason: Human-readable description of the problem.

    Example:
        >>> try:
        ...     parse_schema({"root": {"type": "Tuple"}})
        ... except SchemaDefinitionError as e:
        ...     print(e.path, e.reason)
    """

    def __init__(self, reason: str, path: str = ""):
        self.path = path
        self.reason = reason
        message = f"Invalid schema at '{path}': {reason}" if path else f"Invalid schema: {reason}"
        super().__init__(message)


class DocumentValidationError(ValueError):
    """Raised by `Verdict.raise_for_violations` for a non-conforming document.

    Attributes:
        violations: The violations carried by the failing verdict.
    """

    def __init__(self, violations: list[Violation]):
        self.violations = violations
        lines = [f"{v.location}: {v.message}" for v in violations]
        super().__init__("Document does not match schema:\n  " + "\n  ".join(lines))
