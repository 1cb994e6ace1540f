"""Tests for the validation engine."""

import copy
from concurrent.futures import ThreadPoolExecutor

import pytest

from docshape.config import ValidationOptions
from docshape.errors import DocumentValidationError
from docshape.loaders import load_document, load_document_from_file
from docshape.schema import (
    BooleanNode,
    DictNode,
    ListNode,
    LiteralNode,
    NumberNode,
    StringNode,
    read_schema,
)
from docshape.validator import (
    ShapeValidator,
    Verdict,
    Violation,
    ViolationCode,
    format_path,
    shape_matches,
    validate,
    value_kind,
)

VALUES_BY_KIND = {
    "object": {"an": "object"},
    "array": [],
    "string": "it",
    "number": 1,
    "boolean": True,
    "null": None,
}

NODES_BY_KIND = [
    (DictNode(fields={}), "object"),
    (ListNode(element_type=BooleanNode()), "array"),
    (StringNode(), "string"),
    (LiteralNode(candidate=[]), "string"),
    (BooleanNode(), "boolean"),
    (NumberNode(), "number"),
]
NODE_IDS = ["dict", "list", "string", "literal", "boolean", "number"]


def codes(verdict: Verdict) -> list[ViolationCode]:
    return [v.code for v in verdict.violations]


class TestShapeCheck:
    """The first phase: does the value's kind match the node variant."""

    @pytest.mark.parametrize("node,expected_kind", NODES_BY_KIND, ids=NODE_IDS)
    def test_kind_matches_only_expected(self, node, expected_kind):
        for kind, value in VALUES_BY_KIND.items():
            assert shape_matches(node, value) == (kind == expected_kind), kind

    @pytest.mark.parametrize("node,expected_kind", NODES_BY_KIND, ids=NODE_IDS)
    def test_nullable_also_accepts_null(self, node, expected_kind):
        nullable = node.model_copy(update={"nullable": True})
        for kind, value in VALUES_BY_KIND.items():
            assert shape_matches(nullable, value) == (kind in (expected_kind, "null")), kind

    @pytest.mark.parametrize("node,expected_kind", NODES_BY_KIND, ids=NODE_IDS)
    def test_wrong_kind_is_reported(self, node, expected_kind):
        for kind, value in VALUES_BY_KIND.items():
            if kind in (expected_kind, "null"):
                continue
            verdict = validate(node, value)
            assert codes(verdict) == [ViolationCode.WRONG_TYPE]
            assert verdict.violations[0].message == f"Expected {expected_kind}, got {kind}"

    def test_boolean_is_not_a_number(self):
        assert codes(validate(NumberNode(), True)) == [ViolationCode.WRONG_TYPE]
        assert codes(validate(BooleanNode(), 1)) == [ViolationCode.WRONG_TYPE]
        assert codes(validate(BooleanNode(), 0)) == [ViolationCode.WRONG_TYPE]

    def test_floats_are_numbers(self):
        assert validate(NumberNode(), 1.5).valid

    def test_numeric_string_is_not_coerced(self):
        assert codes(validate(NumberNode(), "3")) == [ViolationCode.WRONG_TYPE]

    def test_value_kind_of_non_json_value(self):
        assert value_kind((1, 2)) == "tuple"
        assert codes(validate(ListNode(element_type=NumberNode()), (1, 2))) == [
            ViolationCode.WRONG_TYPE
        ]


class TestNullability:
    """``null`` passes nullable nodes and fails all others."""

    @pytest.mark.parametrize("node,expected_kind", NODES_BY_KIND, ids=NODE_IDS)
    def test_null(self, node, expected_kind):
        assert validate(node.model_copy(update={"nullable": True}), None).valid
        verdict = validate(node, None)
        assert codes(verdict) == [ViolationCode.NULL_NOT_ALLOWED]
        assert verdict.violations[0].message == f"Expected {expected_kind}, got null"

    def test_nullable_skips_constraints(self):
        node = LiteralNode(candidate=[], nullable=True)
        assert validate(node, None).valid


class TestLiteral:
    """Literal nodes accept exactly one of their candidates."""

    def test_literal_type_should_be_in_candidate(self):
        node = LiteralNode(candidate=["a", "b", "c"])
        assert validate(node, "a").valid
        assert validate(node, "b").valid
        assert validate(node, "c").valid
        assert codes(validate(node, "d")) == [ViolationCode.NOT_IN_CANDIDATES]

    def test_match_is_case_sensitive(self):
        node = LiteralNode(candidate=["open"])
        assert not validate(node, "Open").valid
        assert not validate(node, " open").valid

    def test_empty_candidates_reject_everything(self):
        node = LiteralNode(candidate=[])
        assert not validate(node, "").valid
        assert not validate(node, "anything").valid


class TestString:
    """String length and pattern constraints."""

    def test_string_type_should_limit_with_length(self):
        node = StringNode(length=10)
        assert validate(node, "1").valid
        assert validate(node, "").valid
        assert validate(node, "1234567890").valid
        assert validate(node, "emoji👍").valid
        assert validate(node, "utf8中文").valid
        verdict = validate(node, "12345678901")
        assert codes(verdict) == [ViolationCode.TOO_LONG]

    def test_length_counts_characters_not_bytes(self):
        node = StringNode(length=2)
        assert validate(node, "中文").valid
        assert not validate(node, "中文字").valid

    def test_string_type_should_match_by_regex(self):
        node = StringNode(regex="[0-9]+")
        assert validate(node, "1").valid
        assert not validate(node, "").valid
        assert validate(node, "1234567890").valid
        assert not validate(node, "emoji👍123").valid
        assert not validate(node, "utf8中文").valid
        assert validate(node, "12345678901").valid

    def test_regex_is_anchored_at_both_ends(self):
        node = StringNode(regex="[0-9]+")
        assert codes(validate(node, "a1")) == [ViolationCode.PATTERN_MISMATCH]
        assert codes(validate(node, "1a")) == [ViolationCode.PATTERN_MISMATCH]

    def test_anchoring_covers_alternation(self):
        node = StringNode(regex="a|ab")
        assert validate(node, "ab").valid
        assert not validate(node, "abc").valid

    def test_length_and_pattern_both_reported(self):
        node = StringNode(length=3, regex="[0-9]+")
        assert codes(validate(node, "abcd")) == [
            ViolationCode.TOO_LONG,
            ViolationCode.PATTERN_MISMATCH,
        ]


class TestList:
    """List limit and element propagation."""

    def test_list_type_should_validate_element_type(self):
        node = ListNode(element_type=BooleanNode())
        assert validate(node, [True]).valid
        assert validate(node, [True, True]).valid
        assert validate(node, [True, False]).valid
        assert not validate(node, [True, False, 1]).valid
        assert not validate(node, [True, False, "123"]).valid
        assert not validate(node, [True, False, None]).valid
        assert not validate(node, [{}]).valid

    def test_failing_element_is_located(self):
        verdict = validate(ListNode(element_type=BooleanNode()), [True, False, 1])
        assert verdict.violations[0].path == (2,)
        assert verdict.violations[0].location == "$[2]"

    def test_list_type_should_limit_by_length(self):
        node = ListNode(element_type=BooleanNode(), limit=3)
        assert validate(node, [True, True, True]).valid
        verdict = validate(node, [True, True, True, True])
        assert codes(verdict) == [ViolationCode.TOO_MANY_ITEMS]
        assert verdict.violations[0].path == ()

    def test_zero_limit(self):
        node = ListNode(element_type=BooleanNode(), limit=0)
        assert validate(node, []).valid
        assert not validate(node, [True]).valid

    def test_every_bad_element_is_reported(self):
        verdict = validate(ListNode(element_type=BooleanNode()), [1, "x", True])
        assert [v.path for v in verdict.violations] == [(0,), (1,)]


class TestDict:
    """Declared, extension and fallback fields of dict nodes."""

    def test_dict_type_should_have_one_field(self):
        node = DictNode(fields={"a": BooleanNode()})
        assert validate(node, {"a": True}).valid
        verdict = validate(node, {"b": True})
        assert codes(verdict) == [ViolationCode.UNEXPECTED_FIELD, ViolationCode.MISSING_FIELD]
        assert [v.path for v in verdict.violations] == [("b",), ("a",)]

    def test_field_values_are_validated(self):
        node = DictNode(fields={"a": BooleanNode()})
        verdict = validate(node, {"a": "yes"})
        assert codes(verdict) == [ViolationCode.WRONG_TYPE]
        assert verdict.violations[0].location == "$.a"

    def test_optional_field_may_be_absent(self):
        node = DictNode(fields={"a": BooleanNode(optional=True), "b": NumberNode()})
        assert validate(node, {"b": 1}).valid
        assert codes(validate(node, {"a": True})) == [ViolationCode.MISSING_FIELD]

    def test_optional_field_is_checked_when_present(self):
        node = DictNode(fields={"a": BooleanNode(optional=True)})
        assert codes(validate(node, {"a": 1})) == [ViolationCode.WRONG_TYPE]

    def test_nullable_field_is_still_required(self):
        node = DictNode(fields={"a": StringNode(nullable=True)})
        assert validate(node, {"a": None}).valid
        assert codes(validate(node, {})) == [ViolationCode.MISSING_FIELD]

    def test_nested_violation_path(self):
        node = DictNode(fields={"user": DictNode(fields={"name": StringNode(length=3)})})
        verdict = validate(node, {"user": {"name": "toolong"}})
        assert codes(verdict) == [ViolationCode.TOO_LONG]
        assert verdict.violations[0].path == ("user", "name")
        assert verdict.violations[0].location == "$.user.name"

    def test_any_fields_are_named_and_optional(self):
        node = DictNode(fields={}, any_fields={"x-note": StringNode()})
        assert validate(node, {}).valid
        assert validate(node, {"x-note": "hi"}).valid
        verdict = validate(node, {"x-note": 1})
        assert codes(verdict) == [ViolationCode.WRONG_TYPE]
        assert verdict.violations[0].location == "$['x-note']"
        assert codes(validate(node, {"x-other": "hi"})) == [ViolationCode.UNEXPECTED_FIELD]

    def test_others_is_a_fallback(self):
        node = DictNode(fields={"id": StringNode()}, others=NumberNode())
        assert validate(node, {"id": "a", "extra": 1, "more": 2.5}).valid
        assert codes(validate(node, {"id": "a", "extra": "x"})) == [ViolationCode.WRONG_TYPE]

    def test_declared_fields_take_precedence(self):
        node = DictNode(
            fields={"id": StringNode()},
            any_fields={"id": NumberNode(), "size": NumberNode()},
            others=BooleanNode(),
        )
        assert validate(node, {"id": "a", "size": 3, "flag": True}).valid
        assert not validate(node, {"id": 1}).valid
        assert not validate(node, {"id": "a", "size": True}).valid

    def test_non_string_keys_are_reported_as_text(self):
        node = DictNode(fields={"a": NumberNode(optional=True)})
        document = load_document("~: 1\n1.5: 2\nyes: 3\n", format="yaml")
        verdict = validate(node, document)
        assert codes(verdict) == [ViolationCode.UNEXPECTED_FIELD] * 3
        assert [v.path for v in verdict.violations] == [("None",), ("1.5",), ("True",)]
        assert [v.location for v in verdict.violations] == ["$.None", "$['1.5']", "$.True"]

    def test_non_string_keys_checked_against_others(self):
        node = DictNode(fields={}, others=StringNode())
        verdict = validate(node, {2: "two", 3: 3})
        assert codes(verdict) == [ViolationCode.WRONG_TYPE]
        assert verdict.violations[0].path == ("3",)


class TestNumber:
    """Inclusive numeric bounds."""

    def test_bounds_are_inclusive(self):
        node = NumberNode(min=0, max=10)
        assert validate(node, 0).valid
        assert validate(node, 10).valid
        assert validate(node, 5.5).valid

    def test_out_of_bounds(self):
        node = NumberNode(min=0, max=10)
        assert codes(validate(node, -1)) == [ViolationCode.BELOW_MINIMUM]
        assert codes(validate(node, 10.5)) == [ViolationCode.ABOVE_MAXIMUM]

    def test_single_bound(self):
        assert validate(NumberNode(min=1), 10**12).valid
        assert validate(NumberNode(max=1), -(10**12)).valid

    def test_nan_is_outside_every_bound(self):
        nan = load_document("NaN", format="json")
        assert codes(validate(NumberNode(min=0, max=10), nan)) == [
            ViolationCode.BELOW_MINIMUM,
            ViolationCode.ABOVE_MAXIMUM,
        ]
        assert codes(validate(NumberNode(max=10), nan)) == [ViolationCode.ABOVE_MAXIMUM]
        assert validate(NumberNode(), nan).valid

    def test_infinity_is_checked_against_bounds(self):
        assert codes(validate(NumberNode(max=10), float("inf"))) == [ViolationCode.ABOVE_MAXIMUM]
        assert codes(validate(NumberNode(min=0), float("-inf"))) == [ViolationCode.BELOW_MINIMUM]

    def test_huge_integers_are_compared_exactly(self):
        assert codes(validate(NumberNode(max=10), 10**400)) == [ViolationCode.ABOVE_MAXIMUM]


class TestValidatorOptions:
    """Fail-fast mode and the depth limit."""

    def test_fail_fast_stops_at_first_violation(self):
        node = ListNode(element_type=BooleanNode())
        validator = ShapeValidator(node, options=ValidationOptions(fail_fast=True))
        verdict = validator.validate([1, 2, 3])
        assert [v.path for v in verdict.violations] == [(0,)]

    def test_is_valid(self):
        validator = ShapeValidator(ListNode(element_type=BooleanNode()))
        assert validator.is_valid([True])
        assert not validator.is_valid([1, 2, 3])

    def test_depth_limit(self):
        node = ListNode(element_type=ListNode(element_type=ListNode(element_type=BooleanNode())))
        verdict = validate(node, [[[True]]], options=ValidationOptions(max_depth=2))
        assert codes(verdict) == [ViolationCode.DEPTH_EXCEEDED]
        assert verdict.violations[0].path == (0, 0, 0)
        assert validate(node, [[[True]]], options=ValidationOptions(max_depth=3)).valid

    def test_deep_schema_does_not_crash(self):
        node = BooleanNode()
        document = True
        for _ in range(400):
            node = ListNode(element_type=node)
            document = [document]
        verdict = validate(node, document)
        assert codes(verdict) == [ViolationCode.DEPTH_EXCEEDED]

    def test_options_from_env(self, monkeypatch):
        monkeypatch.setenv("DOCSHAPE_MAX_DEPTH", "12")
        monkeypatch.setenv("DOCSHAPE_FAIL_FAST", "true")
        options = ValidationOptions.from_env()
        assert options.max_depth == 12
        assert options.fail_fast is True

    def test_options_from_env_ignores_bad_depth(self, monkeypatch):
        monkeypatch.setenv("DOCSHAPE_MAX_DEPTH", "deep")
        assert ValidationOptions.from_env().max_depth == 256


class TestVerdict:
    """Verdict behaviour and engine guarantees."""

    def test_verdict_truthiness(self):
        assert bool(validate(BooleanNode(), True)) is True
        assert bool(validate(BooleanNode(), 1)) is False

    def test_raise_for_violations(self):
        verdict = validate(DictNode(fields={"a": BooleanNode()}), {"a": 1})
        with pytest.raises(DocumentValidationError, match=r"\$\.a") as exc_info:
            verdict.raise_for_violations()
        assert exc_info.value.violations == verdict.violations
        validate(BooleanNode(), True).raise_for_violations()

    def test_json_dump(self):
        verdict = validate(ListNode(element_type=BooleanNode()), [True, 1])
        assert verdict.model_dump(mode="json") == {
            "violations": [
                {"path": [1], "code": "wrong_type", "message": "Expected boolean, got number"}
            ],
            "valid": False,
        }

    def test_format_path(self):
        assert format_path(()) == "$"
        assert format_path(("items", 2, "name")) == "$.items[2].name"
        assert format_path(("x-note",)) == "$['x-note']"
        assert str(Violation(path=("a",), code=ViolationCode.WRONG_TYPE, message="m")) == "$.a: m"

    def test_idempotent(self):
        node = DictNode(fields={"a": BooleanNode(), "b": ListNode(element_type=NumberNode())})
        document = {"a": 1, "b": [1, "x"], "c": None}
        assert validate(node, document) == validate(node, document)

    def test_document_is_not_modified(self):
        node = DictNode(fields={"a": ListNode(element_type=NumberNode(max=1))})
        document = {"a": [1, 2, {"x": None}], "extra": [1]}
        before = copy.deepcopy(document)
        validate(node, document)
        assert document == before

    def test_shared_validator_across_threads(self):
        validator = ShapeValidator(ListNode(element_type=NumberNode(min=0), limit=5))
        documents = [[i, -i] for i in range(50)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            verdicts = list(pool.map(validator.validate, documents))
        assert verdicts[0].valid
        assert all(not v.valid for v in verdicts[1:])
        assert all(v.violations[0].path == (1,) for v in verdicts[1:])


class TestOrderDocuments:
    """End-to-end validation of the order fixtures."""

    def test_valid_order(self, fixtures_dir):
        validator = ShapeValidator(read_schema(fixtures_dir / "order-schema.yaml"))
        verdict = validator.validate(load_document_from_file(fixtures_dir / "order.json"))
        assert verdict.valid, verdict.violations

    def test_invalid_order_reports_everything(self, fixtures_dir):
        validator = ShapeValidator(read_schema(fixtures_dir / "order-schema.yaml"))
        verdict = validator.validate(load_document_from_file(fixtures_dir / "order-invalid.json"))
        assert [(v.location, v.code) for v in verdict.violations] == [
            ("$.id", ViolationCode.PATTERN_MISMATCH),
            ("$.status", ViolationCode.NOT_IN_CANDIDATES),
            ("$.priority", ViolationCode.ABOVE_MAXIMUM),
            ("$.lines[0].quantity", ViolationCode.BELOW_MINIMUM),
            ("$.lines[1].quantity", ViolationCode.MISSING_FIELD),
            ("$.gift", ViolationCode.UNEXPECTED_FIELD),
        ]

    def test_from_dict(self):
        validator = ShapeValidator.from_dict(
            {"root": {"type": "Literal", "candidate": ["x"]}, "validators": []}
        )
        assert validator.validate("x").valid
