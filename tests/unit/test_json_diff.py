"""Tests for the structural JSON differ and path helpers.

All tests are hermetic: values are built in memory, no database or disk I/O.
"""

from __future__ import annotations

import copy
import unittest

from cursor_settings.core.canon import parse_json_strict, pretty_json
from cursor_settings.core.json_diff import json_diff
from cursor_settings.core.paths import format_path, is_under, normalize_path, parse_path
from cursor_settings.core.types import (
    CompareConfig,
    DiffKind,
    JsonKind,
    OnlyInLeft,
    OnlyInRight,
    TypeMismatch,
    ValueDiff,
    json_kind,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _diff(left, right, ignore=None, unordered=None):
    config = CompareConfig.from_paths(ignore=ignore, unordered=unordered)
    return json_diff(left, right, config)


def _summary(diffs):
    return [(d.kind, d.path_str) for d in diffs]


NESTED = {
    "theme": "dark",
    "editor": {"fontSize": 14, "rulers": [80, 120], "minimap": {"enabled": False}},
    "recent": [{"path": "/a", "pinned": True}, {"path": "/b", "pinned": None}],
    "empty_obj": {},
    "empty_arr": [],
    "ratio": 0.75,
}


# ============================================================================
# Paths
# ============================================================================


class TestPaths(unittest.TestCase):
    def test_format_keys_and_indices(self):
        self.assertEqual(format_path(("a", "b", 2, "c")), "a.b[2].c")

    def test_format_root_is_empty(self):
        self.assertEqual(format_path(()), "")

    def test_format_leading_index(self):
        self.assertEqual(format_path((0, "a")), "[0].a")

    def test_parse_matches_format(self):
        self.assertEqual(parse_path("a.b[2].c"), ("a", "b", 2, "c"))
        self.assertEqual(parse_path("[3][1]"), (3, 1))

    def test_normalize_drops_stray_dots(self):
        self.assertEqual(normalize_path("a.[0]"), "a[0]")
        self.assertEqual(normalize_path(" a.b "), "a.b")

    def test_is_under_matches_ancestors(self):
        roots = {("a", "b")}
        self.assertTrue(is_under(("a", "b"), roots))
        self.assertTrue(is_under(("a", "b", 0, "c"), roots))
        self.assertFalse(is_under(("a",), roots))
        self.assertFalse(is_under(("a", "bc"), roots))

    def test_is_under_handles_index_ancestors(self):
        self.assertTrue(is_under(("list", 0, "x"), {("list", 0)}))

    def test_is_under_compares_segments(self):
        self.assertFalse(is_under(("a.b",), {("a", "b")}))
        self.assertFalse(is_under(("", "b"), {("b",)}))
        self.assertTrue(is_under(("", "b"), {("",)}))

    def test_root_never_under(self):
        self.assertFalse(is_under((), {()}))


# ============================================================================
# Kinds
# ============================================================================


class TestJsonKind(unittest.TestCase):
    def test_bool_is_not_number(self):
        self.assertEqual(json_kind(True), JsonKind.BOOLEAN)
        self.assertEqual(json_kind(1), JsonKind.NUMBER)
        self.assertEqual(json_kind(1.5), JsonKind.NUMBER)

    def test_all_kinds(self):
        self.assertEqual(json_kind(None), JsonKind.NULL)
        self.assertEqual(json_kind("x"), JsonKind.STRING)
        self.assertEqual(json_kind([]), JsonKind.ARRAY)
        self.assertEqual(json_kind({}), JsonKind.OBJECT)


# ============================================================================
# Differ basics
# ============================================================================


class TestJsonDiff(unittest.TestCase):
    def test_equal_primitives(self):
        self.assertEqual(json_diff(1, 1), [])
        self.assertEqual(json_diff("a", "a"), [])
        self.assertEqual(json_diff(True, True), [])
        self.assertEqual(json_diff(None, None), [])

    def test_value_diff_in_object(self):
        diffs = json_diff({"a": 1, "b": 2}, {"a": 1, "b": 3})
        self.assertEqual(diffs, [ValueDiff(path=("b",), left=2, right=3)])
        self.assertEqual(
            diffs[0].to_dict(),
            {"type": "valueDiff", "path": "b", "db": 2, "file": 3},
        )

    def test_keys_only_on_one_side(self):
        diffs = json_diff({"a": 1}, {"b": 2})
        self.assertEqual(
            diffs,
            [OnlyInLeft(path=("a",), value=1), OnlyInRight(path=("b",), value=2)],
        )

    def test_key_order_left_then_new_right_keys(self):
        diffs = json_diff({"z": 1, "a": 1, "m": 1}, {"q": 2, "a": 2, "z": 2})
        self.assertEqual(
            [d.path_str for d in diffs],
            ["z", "a", "m", "q"],
        )

    def test_root_type_mismatch(self):
        diffs = json_diff(1, "1")
        self.assertEqual(len(diffs), 1)
        self.assertIsInstance(diffs[0], TypeMismatch)
        self.assertEqual(diffs[0].path_str, "")
        self.assertEqual(diffs[0].left_kind, "number")
        self.assertEqual(diffs[0].right_kind, "string")

    def test_arrays_positional_by_default(self):
        diffs = json_diff([1, 2], [2, 1])
        self.assertEqual(
            _summary(diffs),
            [(DiffKind.VALUE_DIFF, "[0]"), (DiffKind.VALUE_DIFF, "[1]")],
        )

    def test_trailing_elements_reported_whole(self):
        left = [1, {"deep": {"x": 1}}]
        right = [1]
        self.assertEqual(
            json_diff(left, right),
            [OnlyInLeft(path=(1,), value={"deep": {"x": 1}})],
        )
        self.assertEqual(
            json_diff(right, left),
            [OnlyInRight(path=(1,), value={"deep": {"x": 1}})],
        )

    def test_nested_paths(self):
        left = {"a": {"list": [{"k": 1}, {"k": 2}]}}
        right = {"a": {"list": [{"k": 1}, {"k": 3}]}}
        self.assertEqual(_summary(json_diff(left, right)), [(DiffKind.VALUE_DIFF, "a.list[1].k")])

    def test_int_and_float_same_number(self):
        self.assertEqual(json_diff({"n": 1}, {"n": 1.0}), [])
        self.assertEqual(_summary(json_diff({"n": 1}, {"n": 1.5})), [(DiffKind.VALUE_DIFF, "n")])

    def test_bool_vs_number_is_type_mismatch(self):
        diffs = json_diff({"flag": True}, {"flag": 1})
        self.assertEqual(_summary(diffs), [(DiffKind.TYPE_MISMATCH, "flag")])

    def test_null_vs_object_is_type_mismatch(self):
        diffs = json_diff({"a": None}, {"a": {}})
        self.assertEqual(diffs[0].left_kind, "null")
        self.assertEqual(diffs[0].right_kind, "object")

    def test_inputs_not_mutated(self):
        left = {"x": [3, 1, 2], "y": {"b": 1}}
        right = {"x": [2, 3, 1], "y": {"b": 2}}
        left_copy = copy.deepcopy(left)
        right_copy = copy.deepcopy(right)
        _diff(left, right, unordered=["x"])
        self.assertEqual(left, left_copy)
        self.assertEqual(right, right_copy)
        self.assertEqual(left["x"], [3, 1, 2])

    def test_tolerates_non_json_values(self):
        diffs = json_diff({"a": b"raw"}, {"a": 1})
        self.assertEqual(len(diffs), 1)
        self.assertEqual(diffs[0].kind, DiffKind.TYPE_MISMATCH)
        self.assertEqual(diffs[0].left_kind, "bytes")


# ============================================================================
# Properties
# ============================================================================


class TestDiffProperties(unittest.TestCase):
    def test_reflexive(self):
        for value in [NESTED, {}, [], [[[]]], {"a": {"b": {"c": {}}}}, None, 0, "", False]:
            self.assertEqual(json_diff(value, copy.deepcopy(value)), [], value)

    def test_symmetry_of_detection(self):
        left = {"a": 1, "b": [1, 2, 3], "c": {"d": "x"}, "e": None, "f": "s"}
        right = {"a": 2, "b": [1, 2], "c": {"d": "x", "g": True}, "f": 5}
        forward = json_diff(left, right)
        backward = json_diff(right, left)
        swap = {
            DiffKind.ONLY_IN_LEFT: DiffKind.ONLY_IN_RIGHT,
            DiffKind.ONLY_IN_RIGHT: DiffKind.ONLY_IN_LEFT,
            DiffKind.VALUE_DIFF: DiffKind.VALUE_DIFF,
            DiffKind.TYPE_MISMATCH: DiffKind.TYPE_MISMATCH,
        }
        self.assertEqual(
            {(swap[d.kind], d.path_str) for d in forward},
            {(d.kind, d.path_str) for d in backward},
        )
        by_path = {d.path_str: d for d in backward}
        for d in forward:
            other = by_path[d.path_str]
            if d.kind in (DiffKind.VALUE_DIFF, DiffKind.TYPE_MISMATCH):
                self.assertEqual((d.left, d.right), (other.right, other.left))
            else:
                self.assertEqual(d.value, other.value)

    def test_presence_vs_value(self):
        self.assertEqual(json_diff({"a": None}, {}), [OnlyInLeft(path=("a",), value=None)])
        self.assertEqual(json_diff({}, {"a": None}), [OnlyInRight(path=("a",), value=None)])
        self.assertEqual(json_diff({"a": None}, {"a": None}), [])

    def test_kind_mismatch_precedence(self):
        for left, right in [({}, []), (1, "1"), ([1], {"0": 1}), ([], 0), ({}, None)]:
            diffs = json_diff(left, right)
            self.assertEqual(len(diffs), 1, (left, right))
            self.assertEqual(diffs[0].kind, DiffKind.TYPE_MISMATCH)

    def test_empty_objects_equal(self):
        self.assertEqual(json_diff({}, {}), [])

    def test_pretty_print_round_trip(self):
        self.assertEqual(json_diff(NESTED, parse_json_strict(pretty_json(NESTED))), [])


# ============================================================================
# Ignore and unordered rules
# ============================================================================


class TestCompareConfig(unittest.TestCase):
    def test_ignore_nested_path(self):
        diffs = _diff({"a": {"b": 1, "c": 2}}, {"a": {"b": 9, "c": 2}}, ignore=["a.b"])
        self.assertEqual(diffs, [])

    def test_ignore_covers_descendants(self):
        left = {"a": {"b": {"x": [1, 2], "y": "s"}}, "keep": 1}
        right = {"a": {"b": ["totally", "different"]}, "keep": 2}
        diffs = _diff(left, right, ignore=["a.b"])
        self.assertEqual(_summary(diffs), [(DiffKind.VALUE_DIFF, "keep")])

    def test_ignored_key_never_reported_as_presence(self):
        self.assertEqual(_diff({"a": {}}, {"a": {"b": 1}}, ignore=["a.b"]), [])
        self.assertEqual(_diff({"a": 1}, {}, ignore=["a"]), [])

    def test_ignore_array_element(self):
        diffs = _diff({"l": [1, 2, 3]}, {"l": [1, 9, 3, 4]}, ignore=["l[1]", "l[3]"])
        self.assertEqual(diffs, [])

    def test_unordered_array(self):
        self.assertEqual(_diff({"x": [1, 2]}, {"x": [2, 1]}, unordered=["x"]), [])

    def test_unordered_objects_in_array(self):
        left = {"x": [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}]}
        right = {"x": [{"v": "b", "id": 2}, {"v": "a", "id": 1}]}
        self.assertEqual(_diff(left, right, unordered=["x"]), [])

    def test_unordered_only_at_exact_path(self):
        left = {"x": [[1, 2], [3, 4]]}
        right = {"x": [[3, 4], [2, 1]]}
        diffs = _diff(left, right, unordered=["x"])
        self.assertEqual(
            _summary(diffs),
            [(DiffKind.VALUE_DIFF, "x[0][0]"), (DiffKind.VALUE_DIFF, "x[0][1]")],
        )

    def test_unordered_multiset_difference_still_reported(self):
        diffs = _diff({"x": [1, 1, 2]}, {"x": [1, 2, 2]}, unordered=["x"])
        self.assertEqual(len(diffs), 1)
        self.assertEqual(diffs[0].kind, DiffKind.VALUE_DIFF)

    def test_unordered_path_spelling_normalized(self):
        left = {"a": [{"tags": ["b", "a"]}]}
        right = {"a": [{"tags": ["a", "b"]}]}
        self.assertEqual(_diff(left, right, unordered=["a.[0].tags"]), [])

    def test_rules_are_segment_tuples(self):
        config = CompareConfig.from_paths(ignore=["a.b", "l[0]"], unordered=["x"])
        self.assertEqual(config.ignored, frozenset({("a", "b"), ("l", 0)}))
        self.assertEqual(config.unordered, frozenset({("x",)}))

    def test_ignore_does_not_match_under_empty_key(self):
        diffs = _diff({"": {"b": 1}}, {"": {"b": 2}}, ignore=["b"])
        self.assertEqual(len(diffs), 1)
        self.assertEqual(diffs[0].kind, DiffKind.VALUE_DIFF)
        self.assertEqual(diffs[0].path, ("", "b"))

    def test_ignore_does_not_match_dotted_key(self):
        diffs = _diff({"a.b": 1}, {"a.b": 2}, ignore=["a.b"])
        self.assertEqual(_summary(diffs), [(DiffKind.VALUE_DIFF, "a.b")])
        self.assertEqual(diffs[0].path, ("a.b",))
        self.assertEqual(_diff({"a": {"b": 1}}, {"a": {"b": 2}}, ignore=["a.b"]), [])

    def test_unordered_does_not_match_dotted_key(self):
        diffs = _diff({"a.b": [1, 2]}, {"a.b": [2, 1]}, unordered=["a.b"])
        self.assertEqual(len(diffs), 2)
        nested = _diff({"a": {"b": [1, 2]}}, {"a": {"b": [2, 1]}}, unordered=["a.b"])
        self.assertEqual(nested, [])

    def test_blank_rules_ignored(self):
        config = CompareConfig.from_paths(ignore=["", None], unordered=["", " ", "."])
        self.assertEqual(config.ignored, frozenset())
        self.assertEqual(config.unordered, frozenset())


if __name__ == "__main__":
    unittest.main()
