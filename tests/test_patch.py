import copy

import pytest

from jsonweave.patch import (
    Operation,
    PatchError,
    add_patch,
    apply_patch,
    apply_patches,
    generate_patches,
)

SPEC_CASES = [
    (
        {"foo": "bar"},
        [{"op": "add", "path": "/baz", "value": "qux"}],
        {"baz": "qux", "foo": "bar"},
    ),
    (
        {"foo": ["bar", "baz"]},
        [{"op": "add", "path": "/foo/1", "value": "qux"}],
        {"foo": ["bar", "qux", "baz"]},
    ),
    (
        {"baz": "qux", "foo": "bar"},
        [{"op": "remove", "path": "/baz"}],
        {"foo": "bar"},
    ),
    (
        {"foo": ["bar", "qux", "baz"]},
        [{"op": "remove", "path": "/foo/1"}],
        {"foo": ["bar", "baz"]},
    ),
    (
        {"baz": "qux", "foo": "bar"},
        [{"op": "replace", "path": "/baz", "value": "boo"}],
        {"baz": "boo", "foo": "bar"},
    ),
    (
        {"foo": {"bar": "baz", "waldo": "fred"}, "qux": {"corge": "grault"}},
        [{"op": "move", "from": "/foo/waldo", "path": "/qux/thud"}],
        {"foo": {"bar": "baz"}, "qux": {"corge": "grault", "thud": "fred"}},
    ),
    (
        {"foo": ["all", "grass", "cows", "eat"]},
        [{"op": "move", "from": "/foo/1", "path": "/foo/3"}],
        {"foo": ["all", "cows", "eat", "grass"]},
    ),
    (
        {"baz": "qux", "foo": ["a", 2, "c"]},
        [
            {"op": "test", "path": "/baz", "value": "qux"},
            {"op": "test", "path": "/foo/1", "value": 2},
        ],
        {"baz": "qux", "foo": ["a", 2, "c"]},
    ),
    (
        {"foo": "bar"},
        [{"op": "add", "path": "/child", "value": {"grandchild": {}}}],
        {"foo": "bar", "child": {"grandchild": {}}},
    ),
    (
        {"/": 9, "~1": 10},
        [{"op": "test", "path": "/~01", "value": 10}],
        {"/": 9, "~1": 10},
    ),
    (
        {"foo": ["bar"]},
        [{"op": "add", "path": "/foo/-", "value": ["abc", "def"]}],
        {"foo": ["bar", ["abc", "def"]]},
    ),
    (
        {"foo": 1},
        [{"op": "copy", "from": "/foo", "path": "/bar"}],
        {"foo": 1, "bar": 1},
    ),
]


@pytest.mark.parametrize("doc, patches, expected", SPEC_CASES)
def test_spec_examples_apply(doc, patches, expected):
    result = apply_patches(copy.deepcopy(doc), copy.deepcopy(patches), True)
    assert result == expected


@pytest.mark.parametrize("doc, patches, expected", SPEC_CASES)
def test_generated_patches_reproduce_expected(doc, patches, expected):
    source = copy.deepcopy(doc)
    target = copy.deepcopy(expected)
    generated = generate_patches(copy.deepcopy(doc), target, True)
    assert apply_patches(source, generated, True) == expected


@pytest.mark.parametrize(
    "doc, patch, status",
    [
        ({"baz": "qux"}, {"op": "test", "path": "/baz", "value": "bar"}, 1),
        ({"/": 9, "~1": 10}, {"op": "test", "path": "/~01", "value": "10"}, 1),
        ({"foo": "bar"}, {"op": "test", "path": "/missing", "value": 1}, 1),
        ({"foo": "bar"}, {"op": "add", "value": 1}, 2),
        ({"foo": "bar"}, {"op": "add", "path": 5, "value": 1}, 2),
        ({"foo": "bar"}, {"op": "frobnicate", "path": "/foo"}, 3),
        ({"foo": "bar"}, {"path": "/foo"}, 3),
        ({"foo": "bar"}, {"op": "move", "path": "/baz"}, 4),
        ({"foo": "bar"}, {"op": "copy", "from": "/nope", "path": "/baz"}, 5),
        ({"foo": "bar"}, {"op": "add", "path": "/baz"}, 7),
        ({"foo": "bar"}, {"op": "add", "path": "/baz/bat", "value": "qux"}, 9),
        ({"foo": "bar"}, {"op": "add", "path": "baz", "value": 1}, 9),
        ({"foo": [1]}, {"op": "add", "path": "/foo/5", "value": 2}, 10),
        ({"foo": [1]}, {"op": "add", "path": "/foo/01", "value": 2}, 11),
        ({"foo": [1]}, {"op": "add", "path": "/foo/x", "value": 2}, 11),
        ({"foo": "bar"}, {"op": "remove", "path": "/baz"}, 13),
        ({"foo": [1]}, {"op": "replace", "path": "/foo/3", "value": 2}, 13),
    ],
)
def test_apply_errors_report_status(doc, patch, status):
    with pytest.raises(PatchError) as info:
        apply_patch(doc, patch, True)
    assert info.value.status == status


def test_apply_patches_requires_array():
    with pytest.raises(PatchError) as info:
        apply_patches({"a": 1}, None)
    assert info.value.status == 1


def test_apply_patches_is_not_atomic():
    doc = {"a": 1}
    patches = [
        {"op": "add", "path": "/b", "value": 2},
        {"op": "remove", "path": "/missing"},
    ]
    with pytest.raises(PatchError):
        apply_patches(doc, patches)
    assert doc == {"a": 1, "b": 2}


def test_replace_root_returns_new_document():
    result = apply_patch({"a": 1}, {"op": "replace", "path": "", "value": [1, 2]})
    assert result == [1, 2]


def test_remove_root_returns_none():
    assert apply_patch({"a": 1}, {"op": "remove", "path": ""}) is None


def test_added_value_is_copied():
    value = {"inner": [1]}
    doc = apply_patch({}, {"op": "add", "path": "/x", "value": value})
    doc["x"]["inner"].append(2)
    assert value == {"inner": [1]}


def test_add_replaces_member_case_insensitively_by_default():
    result = apply_patch({"Foo": 1}, {"op": "add", "path": "/foo", "value": 2})
    assert result == {"foo": 2}


def test_add_keeps_other_case_member_when_case_sensitive():
    result = apply_patch({"Foo": 1}, {"op": "add", "path": "/foo", "value": 2}, True)
    assert result == {"Foo": 1, "foo": 2}


def test_patch_member_names_match_ignoring_case():
    result = apply_patch({"a": 1}, {"OP": "replace", "Path": "/a", "VALUE": 5})
    assert result == {"a": 5}


def test_move_to_root_fails_after_detaching():
    doc = {"a": 1, "b": 2}
    with pytest.raises(PatchError) as info:
        apply_patch(doc, {"op": "move", "from": "/a", "path": ""})
    assert info.value.status == 9
    assert doc == {"b": 2}


def test_add_patch_with_value():
    patches = []
    add_patch(patches, "add", "/x", {"y": 1})
    assert patches == [{"op": "add", "path": "/x", "value": {"y": 1}}]


def test_add_patch_without_value_and_enum_operation():
    patches = []
    add_patch(patches, Operation.REMOVE, "/x")
    assert patches == [{"op": "remove", "path": "/x"}]


def test_add_patch_keeps_null_value():
    patches = []
    add_patch(patches, Operation.REPLACE, "/x", None)
    assert patches == [{"op": "replace", "path": "/x", "value": None}]


def test_generate_replaces_changed_number():
    assert generate_patches({"a": 1}, {"a": 2}) == [
        {"op": "replace", "path": "/a", "value": 2}
    ]


def test_generate_nothing_for_equal_documents():
    assert generate_patches({"a": [1, "x", None]}, {"a": [1, "x", None]}) == []


def test_generate_removes_trailing_array_elements_at_same_index():
    assert generate_patches([1, 2, 3], [1]) == [
        {"op": "remove", "path": "/1"},
        {"op": "remove", "path": "/1"},
    ]


def test_generate_appends_new_array_elements():
    assert generate_patches([1], [1, 2]) == [{"op": "add", "path": "/-", "value": 2}]


def test_generate_object_members_in_key_order():
    assert generate_patches({"b": 2, "a": 1}, {"c": 3, "b": 2}) == [
        {"op": "remove", "path": "/a"},
        {"op": "add", "path": "/c", "value": 3},
    ]


def test_generate_escapes_keys():
    assert generate_patches({}, {"a/b": 1, "m~n": 2}) == [
        {"op": "add", "path": "/a~1b", "value": 1},
        {"op": "add", "path": "/m~0n", "value": 2},
    ]


def test_generate_replaces_on_type_change():
    assert generate_patches(True, False) == [
        {"op": "replace", "path": "", "value": False}
    ]


@pytest.mark.parametrize(
    "source, target",
    [
        ({"a": {"b": [1, 2, {"c": "d"}]}}, {"a": {"b": [1, {"c": "e"}]}, "z": None}),
        ([{"x": 1}, 2, "three"], [{"y": 1}, 2, "three", 4]),
        ({"Key": 1}, {"key": 1}),
        ("text", {"now": "object"}),
    ],
)
def test_generate_then_apply_round_trip(source, target):
    work = copy.deepcopy(source)
    patches = generate_patches(copy.deepcopy(source), copy.deepcopy(target), True)
    assert apply_patches(work, patches, True) == target