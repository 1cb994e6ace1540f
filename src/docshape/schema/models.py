"""Pydantic models for docshape schemas.

A schema is a tree of nodes. Each node is one of six variants, tagged by its
``type`` field, and carries the shared ``optional``/``nullable`` modifiers
plus its own constraints.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Annotated, Any, Literal, Union

import pydantic
from pydantic import Field, field_validator, model_validator

from docshape.errors import SchemaDefinitionError
from docshape.models import DocshapeBaseModel

NODE_TYPES = ("Dict", "List", "String", "Literal", "Boolean", "Number")

# Attributes whose value is a single schema node
_NODE_ATTRIBUTES = ("root", "others", "element_type")
# Attributes whose value maps names to schema nodes
_NODE_MAPPINGS = ("fields", "any_fields")


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a String node pattern, caching the result."""
    return re.compile(pattern)


class BaseNodeModel(DocshapeBaseModel):
    """Modifiers shared by every schema node.

    Attributes:
        optional: The node may be absent when it describes a dict field.
        nullable: ``null`` satisfies the node regardless of its variant.
    """

    optional: bool = False
    nullable: bool = False


class DictNode(BaseNodeModel):
    """An object with declared fields.

    Attributes:
        fields: Schema of each named field.
        any_fields: Schemas for named extension fields, always optional.
        others: Fallback schema for any key not covered above.

    Example:
        >>> node = DictNode(
        ...     fields={"name": StringNode(length=32), "tags": ListNode(element_type=StringNode())}
        ... )
    """

    type: Literal["Dict"] = "Dict"
    fields: dict[str, SchemaNode]
    any_fields: dict[str, SchemaNode] | None = None
    others: SchemaNode | None = None


class ListNode(BaseNodeModel):
    """An array whose elements all match ``element_type``."""

    type: Literal["List"] = "List"
    element_type: SchemaNode
    limit: int | None = Field(default=None, ge=0)


class StringNode(BaseNodeModel):
    """A string with optional maximum length and full-match pattern.

    ``length`` counts characters, not bytes. ``regex`` must match the whole
    value and is compiled when the node is built, so a bad pattern is a
    schema error rather than a document error.
    """

    type: Literal["String"] = "String"
    length: int | None = Field(default=None, ge=0)
    regex: str | None = None

    @field_validator("regex")
    @classmethod
    def check_regex(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                compile_pattern(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value


class LiteralNode(BaseNodeModel):
    """A string that must equal one of ``candidate`` exactly."""

    type: Literal["Literal"] = "Literal"
    candidate: list[str]


class BooleanNode(BaseNodeModel):
    type: Literal["Boolean"] = "Boolean"


class NumberNode(BaseNodeModel):
    """A number with optional inclusive bounds."""

    type: Literal["Number"] = "Number"
    max: int | None = None
    min: int | None = None

    @model_validator(mode="after")
    def check_bounds(self) -> NumberNode:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) is greater than max ({self.max})")
        return self


SchemaNode = Annotated[
    Union[DictNode, ListNode, StringNode, LiteralNode, BooleanNode, NumberNode],
    Field(discriminator="type"),
]

DictNode.model_rebuild()
ListNode.model_rebuild()


class Schema(DocshapeBaseModel):
    """Root of a schema description.

    Attributes:
        root: The node every document is matched against.
        validators: Names of registered validators to run on the whole
            document after structural validation.

    Example:
        >>> schema = Schema.from_dict({
        ...     "root": {"type": "Dict", "fields": {"enabled": {"type": "Boolean"}}},
        ...     "validators": ["unique_ids"],
        ... })
    """

    root: SchemaNode
    validators: list[str] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Schema:
        """Build a Schema from its persisted layout.

        Raises:
            SchemaDefinitionError: If the description is malformed
        """
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as e:
            raise schema_error_from_pydantic(e) from e

    def to_dict(self) -> dict[str, Any]:
        """Return the persisted layout, omitting unset constraints."""
        return self.model_dump(exclude_none=True)


_node_adapter: pydantic.TypeAdapter[SchemaNode] = pydantic.TypeAdapter(SchemaNode)


def parse_node(data: dict[str, Any]) -> SchemaNode:
    """Build a single schema node from its persisted layout.

    Raises:
        SchemaDefinitionError: If the description is malformed
    """
    try:
        return _node_adapter.validate_python(data)
    except pydantic.ValidationError as e:
        raise schema_error_from_pydantic(e, at_node=True) from e


def format_schema_location(loc: tuple[int | str, ...], at_node: bool = False) -> str:
    """Render a pydantic error location as a dotted schema path.

    Discriminator tags that pydantic inserts after each node position are
    dropped, so ``('root', 'Dict', 'fields', 'a', 'String', 'regex')``
    becomes ``root.fields.a.regex``. Pass ``at_node=True`` when the location
    starts at a node rather than at a `Schema`.
    """
    parts: list[str] = []
    expect_tag = at_node
    after_mapping = False
    for segment in loc:
        if expect_tag and segment in NODE_TYPES:
            expect_tag = False
            continue
        expect_tag = False
        parts.append(str(segment))
        if after_mapping:
            after_mapping = False
            expect_tag = True
        elif segment in _NODE_MAPPINGS:
            after_mapping = True
        elif segment in _NODE_ATTRIBUTES:
            expect_tag = True
    return ".".join(parts)


def schema_error_from_pydantic(
    error: pydantic.ValidationError, at_node: bool = False
) -> SchemaDefinitionError:
    """Convert a pydantic error into a `SchemaDefinitionError` for its first problem."""
    errors = error.errors()
    if not errors:
        return SchemaDefinitionError(str(error))

    first = errors[0]
    reason = first["msg"]
    if reason.startswith("Value error, "):
        reason = reason[len("Value error, ") :]
    if len(errors) > 1:
        reason = f"{reason} (and {len(errors) - 1} more error(s))"
    path = format_schema_location(tuple(first["loc"]), at_node=at_node)
    return SchemaDefinitionError(reason, path=path)

