"""Tests for the revive / copy / validate pipeline."""

import pytest
from wisp.errors import DocumentValidationError
from wisp.loading.pipeline import OMIT
from wisp.loading.pipeline import apply_reviver
from wisp.loading.pipeline import finish
from wisp.loading.pipeline import parse_json
from wisp.loading.pipeline import revive


class TestRevive:
    def test_visits_children_before_containers(self):
        calls = []

        def reviver(key, value):
            calls.append(key)
            return value

        revive({"a": 1, "b": [2, 3], "c": {"d": None}}, reviver)

        assert calls == ["a", 0, 1, "b", "d", "c", ""]

    def test_substitutes_returned_values(self):
        value = parse_json('{"foo": "bar", "nested": {"foo": 1}}', lambda k, v: "x" if k == "foo" else v)

        assert value == {"foo": "x", "nested": {"foo": "x"}}

    def test_omit_removes_members_and_items(self):
        value = parse_json('{"keep": 1, "drop": 2, "items": [1, 2, 3]}', lambda k, v: OMIT if v == 2 else v)

        assert value == {"keep": 1, "items": [1, 3]}

    def test_omit_at_root_gives_none(self):
        assert parse_json("[1, 2]", lambda k, v: OMIT if k == "" else v) is None

    def test_reviver_sees_revived_children(self):
        def reviver(key, value):
            if key == "n":
                return value * 10
            if key == "":
                return sum(value.values())
            return value

        assert parse_json('{"n": 2, "m": 1}', reviver) == 21


def test_parse_json_without_reviver():
    assert parse_json('{"ok": true}') == {"ok": True}


def test_parse_json_propagates_decode_errors():
    with pytest.raises(ValueError):
        parse_json('{"ok": ')


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_parse_json_rejects_non_standard_constants(constant):
    with pytest.raises(ValueError, match=f"Invalid JSON constant: {constant}"):
        parse_json(f'{{"ratio": {constant}}}', lambda k, v: v)


class TestApplyReviver:
    def test_none_reviver_returns_value_unchanged(self):
        value = {"a": 1}

        assert apply_reviver(value, None) is value

    def test_reviver_runs_on_a_fresh_structure(self):
        original = {"foo": "bar", "nested": {"ok": True}}

        revived = apply_reviver(original, lambda k, v: "modified" if k == "foo" else v)

        assert revived == {"foo": "modified", "nested": {"ok": True}}
        assert original == {"foo": "bar", "nested": {"ok": True}}


class TestFinish:
    def test_returns_independent_copy(self):
        value = {"nested": {"items": [1, 2]}}

        result = finish(value)
        result["nested"]["items"].append(3)

        assert result is not value
        assert value == {"nested": {"items": [1, 2]}}

    def test_keeps_non_json_values_from_revivers(self):
        marker = object()

        result = finish({"when": marker})

        assert result["when"] is marker

    def test_validator_receives_the_copy(self):
        seen = []
        value = {"foo": "bar"}

        result = finish(value, seen.append)

        assert seen == [result]
        assert seen[0] is not value

    def test_validation_failure_is_prefixed(self):
        def validate(value):
            raise ValueError("X")

        with pytest.raises(DocumentValidationError) as excinfo:
            finish({}, validate)

        assert str(excinfo.value) == "wisp: X"
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_empty_validation_message_gets_type_name(self):
        def validate(value):
            raise ValueError()

        with pytest.raises(DocumentValidationError, match=r"^wisp: ValueError: \(no additional details\)$"):
            finish({}, validate)
