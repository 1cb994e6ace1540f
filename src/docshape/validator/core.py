"""Core validation logic for docshape.

The engine walks a document alongside a schema tree. For every node it first
checks the value's kind (the shape check), then the variant's constraints.
Each variant branch narrows the value once and hands the typed value to its
constraint checker, so the two phases never disagree about the kind.
"""

import logging
import math
from typing import Any, assert_never

from docshape.config import ValidationOptions
from docshape.schema.loaders import parse_schema
from docshape.schema.models import (
    BooleanNode,
    DictNode,
    ListNode,
    LiteralNode,
    NumberNode,
    Schema,
    SchemaNode,
    StringNode,
    compile_pattern,
)

from .models import PathSegment, Verdict, Violation, ViolationCode
from .registry import NamedValidator, ValidatorRegistry

logger = logging.getLogger(__name__)

DocumentPath = tuple[PathSegment, ...]

EXPECTED_KINDS = {
    "Dict": "object",
    "List": "array",
    "String": "string",
    "Literal": "string",
    "Boolean": "boolean",
    "Number": "number",
}


def value_kind(value: Any) -> str:
    """Name the JSON kind of a document value.

    Returns one of ``object``, ``array``, ``string``, ``number``,
    ``boolean``, ``null``, or the Python type name for anything that is not
    JSON-like.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def shape_matches(node: SchemaNode, value: Any) -> bool:
    """Return True if the value's kind is the one the node expects.

    ``null`` matches any nullable node.
    """
    if value is None:
        return node.nullable
    return value_kind(value) == EXPECTED_KINDS[node.type]


class _StopValidation(Exception):
    """Ends a fail-fast run after its first violation."""


class _ValidationRun:
    """State of one validation call: options and collected violations."""

    def __init__(self, options: ValidationOptions, fail_fast: bool):
        self.options = options
        self.fail_fast = fail_fast
        self.violations: list[Violation] = []

    def report(self, path: DocumentPath, code: ViolationCode, message: str) -> None:
        self.violations.append(Violation(path=path, code=code, message=message))
        if self.fail_fast:
            raise _StopValidation()

    def check(self, node: SchemaNode, value: Any, path: DocumentPath, depth: int) -> None:
        if depth > self.options.max_depth:
            self.report(
                path,
                ViolationCode.DEPTH_EXCEEDED,
                f"Nesting exceeds maximum depth of {self.options.max_depth}",
            )
            return

        if value is None:
            if not node.nullable:
                self.report(
                    path,
                    ViolationCode.NULL_NOT_ALLOWED,
                    f"Expected {EXPECTED_KINDS[node.type]}, got null",
                )
            return

        if isinstance(node, DictNode):
            if isinstance(value, dict):
                self._check_dict(node, value, path, depth)
            else:
                self._wrong_type(node, value, path)
        elif isinstance(node, ListNode):
            if isinstance(value, list):
                self._check_list(node, value, path, depth)
            else:
                self._wrong_type(node, value, path)
        elif isinstance(node, StringNode):
            if isinstance(value, str):
                self._check_string(node, value, path)
            else:
                self._wrong_type(node, value, path)
        elif isinstance(node, LiteralNode):
            if isinstance(value, str):
                self._check_literal(node, value, path)
            else:
                self._wrong_type(node, value, path)
        elif isinstance(node, BooleanNode):
            if not isinstance(value, bool):
                self._wrong_type(node, value, path)
        elif isinstance(node, NumberNode):
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                self._check_number(node, value, path)
            else:
                self._wrong_type(node, value, path)
        else:
            assert_never(node)

    def _wrong_type(self, node: SchemaNode, value: Any, path: DocumentPath) -> None:
        self.report(
            path,
            ViolationCode.WRONG_TYPE,
            f"Expected {EXPECTED_KINDS[node.type]}, got {value_kind(value)}",
        )

    def _check_dict(
        self, node: DictNode, value: dict[Any, Any], path: DocumentPath, depth: int
    ) -> None:
        for key, item in value.items():
            # YAML allows non-string keys; paths carry them as text
            segment = key if isinstance(key, str) else str(key)
            field_node = node.fields.get(key)
            if field_node is None and node.any_fields:
                field_node = node.any_fields.get(key)
            if field_node is None:
                field_node = node.others
            if field_node is None:
                self.report(
                    path + (segment,), ViolationCode.UNEXPECTED_FIELD, f"Unexpected field: {key}"
                )
                continue
            self.check(field_node, item, path + (segment,), depth + 1)

        for name, field_node in node.fields.items():
            if name not in value and not field_node.optional:
                self.report(
                    path + (name,), ViolationCode.MISSING_FIELD, f"Missing required field: {name}"
                )

    def _check_list(
        self, node: ListNode, value: list[Any], path: DocumentPath, depth: int
    ) -> None:
        if node.limit is not None and len(value) > node.limit:
            self.report(
                path,
                ViolationCode.TOO_MANY_ITEMS,
                f"Array must have at most {node.limit} items, got {len(value)}",
            )
        for index, item in enumerate(value):
            self.check(node.element_type, item, path + (index,), depth + 1)

    def _check_string(self, node: StringNode, value: str, path: DocumentPath) -> None:
        if node.length is not None and len(value) > node.length:
            self.report(
                path,
                ViolationCode.TOO_LONG,
                f"String must be at most {node.length} characters long, got {len(value)}",
            )
        if node.regex is not None and compile_pattern(node.regex).fullmatch(value) is None:
            self.report(
                path,
                ViolationCode.PATTERN_MISMATCH,
                f"String does not match pattern: {node.regex}",
            )

    def _check_literal(self, node: LiteralNode, value: str, path: DocumentPath) -> None:
        if value not in node.candidate:
            self.report(
                path,
                ViolationCode.NOT_IN_CANDIDATES,
                f"Invalid value {value!r}. Must be one of: {node.candidate}",
            )

    def _check_number(self, node: NumberNode, value: int | float, path: DocumentPath) -> None:
        # NaN compares false against everything, so it is outside any bound
        is_nan = isinstance(value, float) and math.isnan(value)
        if node.min is not None and (is_nan or value < node.min):
            self.report(path, ViolationCode.BELOW_MINIMUM, f"Value must be >= {node.min}")
        if node.max is not None and (is_nan or value > node.max):
            self.report(path, ViolationCode.ABOVE_MAXIMUM, f"Value must be <= {node.max}")

    def apply_named(self, validator: NamedValidator, document: Any) -> None:
        for problem in validator.validate(document):
            if isinstance(problem, Violation):
                self.violations.append(problem)
                if self.fail_fast:
                    raise _StopValidation()
            else:
                self.report((), ViolationCode.NAMED_VALIDATOR, f"{validator.name}: {problem}")


class ShapeValidator:
    """Validates documents against a schema.

    The validator holds no per-call state, so one instance can be shared by
    any number of threads validating different documents.

    Example:
        >>> from docshape.schema import DictNode, StringNode
        >>> validator = ShapeValidator(DictNode(fields={"id": StringNode(regex="[0-9]+")}))
        >>> validator.validate({"id": "42"}).valid
        True
        >>> [v.code for v in validator.validate({"id": "x"}).violations]
        [<ViolationCode.PATTERN_MISMATCH: 'pattern_mismatch'>]
    """

    def __init__(
        self,
        schema: Schema | SchemaNode,
        options: ValidationOptions | None = None,
        registry: ValidatorRegistry | None = None,
    ):
        """Initialize the validator with a schema.

        Args:
            schema: A full `Schema` or a bare root node
            options: Depth limit and fail-fast behaviour (default: ValidationOptions())
            registry: Registry used to resolve ``Schema.validators``. Without
                one, named validators are carried but not run.

        Raises:
            SchemaDefinitionError: If a named validator is not registered
        """
        if isinstance(schema, Schema):
            self.root: SchemaNode = schema.root
            self.validator_names = list(schema.validators)
        else:
            self.root = schema
            self.validator_names = []
        self.options = options or ValidationOptions()
        self.named_validators = self._resolve_named_validators(registry)

    @classmethod
    def from_dict(
        cls,
        schema_dict: dict[str, Any],
        options: ValidationOptions | None = None,
        registry: ValidatorRegistry | None = None,
    ) -> "ShapeValidator":
        """Create a ShapeValidator from a persisted schema description.

        Raises:
            SchemaDefinitionError: If the description is malformed
        """
        return cls(parse_schema(schema_dict), options=options, registry=registry)

    def _resolve_named_validators(
        self, registry: ValidatorRegistry | None
    ) -> list[NamedValidator]:
        if not self.validator_names:
            return []
        if registry is None:
            logger.debug(
                f"No validator registry given, named validators not run: {self.validator_names}"
            )
            return []
        resolved = registry.resolve(self.validator_names)
        logger.debug(f"Resolved named validators: {self.validator_names}")
        return resolved

    def validate(self, document: Any) -> Verdict:
        """Validate a document.

        Args:
            document: JSON-like value tree; it is never modified

        Returns:
            Verdict listing every violation found (or only the first one in
            fail-fast mode)
        """
        verdict = self._run(document, fail_fast=self.options.fail_fast)
        logger.debug(
            f"Validation finished: {'valid' if verdict.valid else 'invalid'} "
            f"({len(verdict.violations)} violation(s))"
        )
        return verdict

    def is_valid(self, document: Any) -> bool:
        """Return True if the document conforms, stopping at the first violation."""
        return self._run(document, fail_fast=True).valid

    def _run(self, document: Any, fail_fast: bool) -> Verdict:
        run = _ValidationRun(self.options, fail_fast)
        try:
            run.check(self.root, document, (), 0)
            for named in self.named_validators:
                run.apply_named(named, document)
        except _StopValidation:
            pass
        return Verdict(violations=run.violations)


def validate(
    schema: Schema | SchemaNode,
    document: Any,
    options: ValidationOptions | None = None,
    registry: ValidatorRegistry | None = None,
) -> Verdict:
    """Validate a document against a schema or schema node.

    Shortcut for ``ShapeValidator(schema, options, registry).validate(document)``.
    """
    return ShapeValidator(schema, options=options, registry=registry).validate(document)
