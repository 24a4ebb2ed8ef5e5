# jsonweave

Tools for working with JSON documents held as ordinary Python values, the kind
`json.loads` returns (`dict`, `list`, `str`, `int`, `float`, `True`/`False`, `None`):

- `jsonweave.pointer`: **JSON Pointer** (RFC 6901). Look up a value by path, and
  find the path to a given object.
- `jsonweave.patch`: **JSON Patch** (RFC 6902). Apply patches, and generate the
  patches that turn one document into another.
- `jsonweave.merge`: **JSON Merge Patch** (RFC 7396). Merge a patch into a document,
  and generate a merge patch between two documents.
- `jsonweave.compare`: **structural comparison**. Compare values, compare numbers
  within double precision, order keys, and sort an object's members by key.

Most functions take `case_sensitive`, which defaults to `False`. With it off, object
keys are matched ignoring ASCII letter case. String *values* are always compared
exactly.

## Installation

```
pip install jsonweave
```

## JSON Pointer

```python
from jsonweave.pointer import get_pointer, find_pointer, encode_token, decode_token

doc = {"foo": ["bar", "baz"], "a/b": 1, "m~n": 8}

get_pointer(doc, "/foo/1", case_sensitive=True)   # "baz"
get_pointer(doc, "/a~1b", case_sensitive=True)    # 1
get_pointer(doc, "/FOO/0")                        # "bar"
get_pointer(doc, "")                              # doc itself

find_pointer(doc, doc["foo"])                     # "/foo"
find_pointer(doc, ["bar", "baz"])                 # None: not the same object
encode_token("m~n")                               # "m~0n"
decode_token("a~1b")                              # "a/b"
```

A pointer that does not start with `/` refers to the whole document. When a path
cannot be followed, `get_pointer` raises `KeyError` (no such member), `IndexError`
(index past the end of an array) or `LookupError` (a bad array index, or a step into
a scalar). `decode_array_index` accepts decimal digits without leading zeroes and
raises `ValueError` otherwise.

`find_pointer` looks for the target by identity, not by equality, and returns
`None` when it is not inside the document.

## JSON Patch

```python
from jsonweave.patch import apply_patches, generate_patches, add_patch, PatchError

doc = {"foo": "bar"}
patches = []
add_patch(patches, "add", "/baz", "qux")
add_patch(patches, "remove", "/foo")      # no value for remove

doc = apply_patches(doc, patches, case_sensitive=True)
# {"baz": "qux"}

generate_patches({"a": 1, "b": [1, 2]}, {"a": 2, "b": [1]}, case_sensitive=True)
# [{"op": "replace", "path": "/a", "value": 2},
#  {"op": "remove", "path": "/b/1"}]
```

`add_patch` takes the operation as a string or as an `Operation` member (`ADD`,
`REMOVE`, `REPLACE`, `MOVE`, `COPY`, `TEST`), and copies the value it is given.

`apply_patch` applies one entry and `apply_patches` applies a list of them. Both
change the document in place where they can and return the resulting document;
operations on the root path `""` replace the document (removing it returns `None`),
so always use the returned value.

A patch that is malformed, whose test fails, or whose path cannot be followed raises
`PatchError`; its `status` attribute is a number telling which step failed. The
patches in a list are not applied atomically: earlier changes stay in place. For
all-or-nothing, apply them to a `copy.deepcopy` of the document.

`generate_patches` sorts the objects of both documents by key, in place.

## JSON Merge Patch

```python
from jsonweave.merge import merge_patch, generate_merge_patch

merge_patch({"a": "b", "b": "c"}, {"a": None}, case_sensitive=True)
# {"b": "c"}

generate_merge_patch({"a": "b"}, {"a": "c"}, case_sensitive=True)
# {"a": "c"}
```

`merge_patch` changes an object target in place and returns the result. A `None`
member in the patch removes that member. A patch that is not an object replaces the
target with a copy of itself.

`generate_merge_patch` returns an empty object when two objects do not differ, and
sorts the objects of both documents by key, in place.

## Comparison

```python
from jsonweave.compare import compare, compare_keys, numbers_equal, sort_object

compare({"A": 1}, {"a": 1})                  # True
compare({"A": 1}, {"a": 1}, case_sensitive=True)  # False
numbers_equal(1e100, 10e99)                  # True
compare_keys("a", "B")                       # -1

obj = {"b": 1, "a": 2}
sort_object(obj, case_sensitive=True)        # returns None
obj                                          # {"a": 2, "b": 1}
```

`compare` sorts the objects it compares in place. It raises `TypeError` for values
that are not JSON values.

## What it does not do

jsonweave works only on values already in memory. It has no parser or printer of its
own (use the `json` module for that) and no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```