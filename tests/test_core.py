"""
Tests for the node editing core.

    §1  Path rendering
    §2  Node flattening
    §3  Field updates at a path
    §4  Error taxonomy
"""

import json
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from json_node_editor import (
    FieldRow,
    MutationError,
    NotObjectError,
    ParseError,
    PathResolutionError,
    SerializeError,
    apply_field_updates,
    flatten_node,
    render_path,
)


# ═══════════════════════════════════════════════════════════════════
#  §1  PATH RENDERING
# ═══════════════════════════════════════════════════════════════════

class TestRenderPath:

    def test_root(self):
        assert render_path([]) == "$"
        assert render_path(()) == "$"
        assert render_path(None) == "$"

    @pytest.mark.parametrize("path,expected", [
        (["customer"], '$["customer"]'),
        ([0], "$[0]"),
        (["customer", 0, "name"], '$["customer"][0]["name"]'),
        ((3, 14), "$[3][14]"),
        (["", 0], '$[""][0]'),
    ])
    def test_segments(self, path, expected):
        assert render_path(path) == expected

    @pytest.mark.parametrize("path", [
        ["a"],
        ["a", 1, "b"],
        [0, 1, 2, 3, 4],
        ["x", "y"],
    ])
    def test_one_bracket_group_per_segment(self, path):
        rendered = render_path(path)
        assert rendered.startswith("$[")
        assert rendered.count("][") == len(path) - 1

    def test_special_characters_are_not_escaped(self):
        """Keys are shown verbatim inside the quotes."""
        assert render_path(['say "hi"']) == '$["say "hi""]'
        assert render_path(["a]b"]) == '$["a]b"]'
        assert render_path(["back\\slash"]) == '$["back\\slash"]'

    def test_input_not_modified(self):
        path = ["a", 0]
        render_path(path)
        assert path == ["a", 0]


# ═══════════════════════════════════════════════════════════════════
#  §2  NODE FLATTENING
# ═══════════════════════════════════════════════════════════════════

class TestFlattenNode:

    def test_empty(self):
        assert flatten_node([]) == "{}"
        assert flatten_node(None) == "{}"

    @pytest.mark.parametrize("value,type_tag,expected", [
        (5, "number", "5"),
        (2.5, "number", "2.5"),
        ("plain text", "string", "plain text"),
        (True, "boolean", "true"),
        (False, "boolean", "false"),
        (None, "null", "null"),
    ])
    def test_bare_scalar(self, value, type_tag, expected):
        assert flatten_node([FieldRow(None, value, type_tag)]) == expected

    def test_composite_fields_excluded(self):
        rows = [
            FieldRow("a", 1, "number"),
            FieldRow("b", [], "array"),
        ]
        assert json.loads(flatten_node(rows)) == {"a": 1}

    def test_object_children_excluded(self):
        rows = [
            FieldRow("name", "Ada", "string"),
            FieldRow("address", {"city": "London"}, "object"),
            FieldRow("active", True, "boolean"),
            FieldRow("manager", None, "null"),
        ]
        assert json.loads(flatten_node(rows)) == {"name": "Ada", "active": True, "manager": None}

    def test_only_composite_children(self):
        rows = [FieldRow("items", [1, 2], "array"), FieldRow("meta", {}, "object")]
        assert flatten_node(rows) == "{}"

    def test_two_space_indent_and_order(self):
        rows = [FieldRow("z", 1, "number"), FieldRow("a", "x", "string")]
        assert flatten_node(rows) == '{\n  "z": 1,\n  "a": "x"\n}'

    def test_single_keyed_row_is_an_object(self):
        assert json.loads(flatten_node([FieldRow("only", 1, "number")])) == {"only": 1}

    def test_idempotent(self):
        rows = [FieldRow("a", 1, "number"), FieldRow("b", "two", "string")]
        assert flatten_node(rows) == flatten_node(rows)


# ═══════════════════════════════════════════════════════════════════
#  §3  FIELD UPDATES AT A PATH
# ═══════════════════════════════════════════════════════════════════

DOCUMENTS = [
    ('{"a": {"b": 1, "c": 2}}', ["a"]),
    ('{"x": 1}', []),
    ('{"users": [{"name": "Ada"}, {"name": "Bob", "tags": ["x"]}]}', ["users", 1]),
    ('[{"id": 1}, [{"deep": {"k": null}}]]', [1, 0, "deep"]),
]


class TestApplyFieldUpdates:

    def test_nested_object(self):
        out = apply_field_updates('{"a": {"b": 1, "c": 2}}', ["a"], {"b": 99})
        assert json.loads(out) == {"a": {"b": 99, "c": 2}}

    def test_root_object(self):
        out = apply_field_updates('{"x": 1}', [], {"x": 2, "y": 3})
        assert json.loads(out) == {"x": 2, "y": 3}

    def test_array_index_segment(self):
        doc = '{"users": [{"name": "Ada"}, {"name": "Bob"}]}'
        out = apply_field_updates(doc, ["users", 1], {"name": "Rob"})
        assert json.loads(out) == {"users": [{"name": "Ada"}, {"name": "Rob"}]}

    @pytest.mark.parametrize("doc,path", DOCUMENTS)
    def test_empty_update_is_noop(self, doc, path):
        assert json.loads(apply_field_updates(doc, path, {})) == json.loads(doc)

    @pytest.mark.parametrize("doc,path", DOCUMENTS)
    def test_repeated_update_is_idempotent(self, doc, path):
        updates = {"flag": True, "note": "edited"}
        once = apply_field_updates(doc, path, updates)
        twice = apply_field_updates(once, path, updates)
        assert json.loads(twice) == json.loads(once)

    def test_siblings_untouched(self):
        doc = '{"a": {"b": 1, "nested": {"q": [1, 2]}}, "other": [true, null]}'
        out = json.loads(apply_field_updates(doc, ["a"], {"b": "changed"}))
        assert out["a"]["nested"] == {"q": [1, 2]}
        assert out["other"] == [True, None]

    def test_existing_keys_keep_position(self):
        doc = '{"first": 1, "second": 2, "third": 3}'
        out = json.loads(apply_field_updates(doc, [], {"second": 20, "fourth": 4}))
        assert list(out) == ["first", "second", "third", "fourth"]

    def test_output_format(self):
        out = apply_field_updates('{"a":{"b":1}}', ["a"], {"b": "é"})
        assert out == '{\n  "a": {\n    "b": "é"\n  }\n}'

    def test_inputs_not_modified(self):
        path = ["a"]
        updates = {"b": 2}
        apply_field_updates('{"a": {"b": 1}}', path, updates)
        assert path == ["a"]
        assert updates == {"b": 2}

    def test_tuple_path(self):
        out = apply_field_updates('{"a": [{"b": 1}]}', ("a", 0), {"b": 2})
        assert json.loads(out) == {"a": [{"b": 2}]}


# ═══════════════════════════════════════════════════════════════════
#  §4  ERROR TAXONOMY
# ═══════════════════════════════════════════════════════════════════

class TestMutationErrors:

    def test_target_is_array(self):
        with pytest.raises(NotObjectError) as info:
            apply_field_updates('{"a": [1,2,3]}', ["a"], {"b": 1})
        assert isinstance(info.value, MutationError)
        assert info.value.reason == "target is not an object"
        assert info.value.path == ("a",)

    @pytest.mark.parametrize("doc,path", [
        ('{"a": 5}', ["a"]),
        ('"text"', []),
        ('[1, 2]', []),
        ('{"a": null}', ["a"]),
    ])
    def test_non_object_targets(self, doc, path):
        with pytest.raises(NotObjectError):
            apply_field_updates(doc, path, {"k": 1})

    @pytest.mark.parametrize("path", [[], ["a"], ["x", 0]])
    def test_malformed_document(self, path):
        with pytest.raises(ParseError) as info:
            apply_field_updates('{"a": ', path, {"b": 1})
        assert info.value.reason == "parse failed"
        assert isinstance(info.value, MutationError)

    @pytest.mark.parametrize("doc", ['{"a": NaN}', '{"a": Infinity}', '', 'not json'])
    def test_non_standard_json_rejected(self, doc):
        with pytest.raises(ParseError):
            apply_field_updates(doc, [], {})

    @pytest.mark.parametrize("doc,path", [
        ('{"a": {}}', ["missing"]),
        ('{"a": [{"b": 1}]}', ["a", 1]),
        ('{"a": [{"b": 1}]}', ["a", -1]),
        ('{"a": [{"b": 1}]}', ["a", "0"]),
        ('{"0": {"b": 1}}', [0]),
        ('{"a": 1}', ["a", "b"]),
        ('{"a": [{"b": 1}]}', ["a", True]),
    ])
    def test_path_not_found(self, doc, path):
        with pytest.raises(PathResolutionError) as info:
            apply_field_updates(doc, path, {"b": 2})
        assert info.value.reason == "path not found"

    def test_unserializable_value(self):
        with pytest.raises(SerializeError):
            apply_field_updates('{"a": 1}', [], {"a": object()})

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            apply_field_updates("{", [], {})
