"""Pydantic models for validation results.

A validation run returns a `Verdict`: either no violations, or an ordered
list of `Violation` entries, each located by its path from the document root.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, computed_field

from docshape.errors import DocumentValidationError
from docshape.models import DocshapeBaseModel

PathSegment = str | int


class ViolationCode(Enum):
    """Kinds of document-conformance failures.

    - WRONG_TYPE: The value's kind does not match the node variant
    - NULL_NOT_ALLOWED: ``null`` at a node that is not nullable
    - UNEXPECTED_FIELD: Object key not covered by the dict node
    - MISSING_FIELD: Required declared field is absent
    - TOO_LONG: String exceeds ``length`` characters
    - TOO_MANY_ITEMS: Array exceeds ``limit`` elements
    - PATTERN_MISMATCH: String does not fully match ``regex``
    - NOT_IN_CANDIDATES: String is not one of the literal candidates
    - BELOW_MINIMUM / ABOVE_MAXIMUM: Number outside its bounds
    - DEPTH_EXCEEDED: Nesting deeper than the configured limit
    - NAMED_VALIDATOR: Reported by a registered named validator
    """

    WRONG_TYPE = "wrong_type"
    NULL_NOT_ALLOWED = "null_not_allowed"
    UNEXPECTED_FIELD = "unexpected_field"
    MISSING_FIELD = "missing_field"
    TOO_LONG = "too_long"
    TOO_MANY_ITEMS = "too_many_items"
    PATTERN_MISMATCH = "pattern_mismatch"
    NOT_IN_CANDIDATES = "not_in_candidates"
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    DEPTH_EXCEEDED = "depth_exceeded"
    NAMED_VALIDATOR = "named_validator"


def format_path(path: tuple[PathSegment, ...]) -> str:
    """Render a document path, e.g. ``("items", 2, "name")`` as ``$.items[2].name``."""
    rendered = "$"
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        elif segment.isidentifier():
            rendered += f".{segment}"
        else:
            rendered += f"[{segment!r}]"
    return rendered


class Violation(DocshapeBaseModel):
    """A single place where a document deviates from its schema.

    Attributes:
        path: Field names and array indices from the document root.
        code: The kind of failure.
        message: Human-readable reason.
    """

    path: tuple[PathSegment, ...] = ()
    code: ViolationCode
    message: str

    @property
    def location(self) -> str:
        return format_path(self.path)

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class Verdict(DocshapeBaseModel):
    """Result of validating a document.

    A verdict is truthy when the document conforms.

    Example:
        >>> verdict = validator.validate({"id": "x1"})
        >>> if not verdict:
        ...     for violation in verdict.violations:
        ...         print(violation.location, violation.message)
    """

    violations: list[Violation] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        return not self.violations

    def __bool__(self) -> bool:
        return self.valid

    def raise_for_violations(self) -> None:
        """Raise `DocumentValidationError` if the document did not conform."""
        if self.violations:
            raise DocumentValidationError(list(self.violations))
