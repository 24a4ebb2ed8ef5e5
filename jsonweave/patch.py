"""JSON Patch (RFC 6902): applying and generating patches over plain JSON values.

Documents and patches are the values produced by :func:`json.loads`. Patches
are applied in place where the document allows it; operations on the root
replace the document, so the functions always return the resulting document.
Applying a list of patches is not atomic: a failure leaves the changes made
by earlier patches in place.
"""

from __future__ import annotations

import copy
from enum import Enum
from typing import Any

from jsonweave.compare import compare, compare_keys, numbers_equal, sort_object
from jsonweave.pointer import decode_array_index, decode_token, encode_token, get_pointer

__all__ = [
    "PatchError",
    "Operation",
    "add_patch",
    "apply_patch",
    "apply_patches",
    "generate_patches",
]

_MISSING: Any = object()


class PatchError(Exception):
    """A patch could not be applied; ``status`` tells which step failed."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status


class Operation(str, Enum):
    """The operations a JSON Patch entry may name."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


def _find_key(obj: dict, name: str, case_sensitive: bool) -> Any:
    if case_sensitive:
        return name if name in obj else _MISSING
    return next(
        (key for key in obj if compare_keys(key, name, False) == 0),
        _MISSING,
    )


def _member(obj: Any, name: str, case_sensitive: bool) -> Any:
    if not isinstance(obj, dict):
        return _MISSING
    key = _find_key(obj, name, case_sensitive)
    return _MISSING if key is _MISSING else obj[key]


def _lookup(document: Any, pointer: Any, case_sensitive: bool) -> Any:
    try:
        return get_pointer(document, pointer, case_sensitive)
    except (LookupError, TypeError):
        return _MISSING


def _decode(token: str) -> str:
    try:
        return decode_token(token)
    except ValueError:
        return token


def _split(path: str) -> tuple[str, str] | None:
    slash = path.rfind("/")
    if slash < 0:
        return None
    return path[:slash], path[slash + 1 :]


def _detach(document: Any, path: str, case_sensitive: bool) -> Any:
    parts = _split(path)
    if parts is None:
        return _MISSING
    parent_pointer, child = parts
    parent = _lookup(document, parent_pointer, case_sensitive)
    child = _decode(child)

    if isinstance(parent, list):
        try:
            index = decode_array_index(child)
        except ValueError:
            return _MISSING
        if index >= len(parent):
            return _MISSING
        return parent.pop(index)
    if isinstance(parent, dict):
        # Members are detached by a case-insensitive match in either mode.
        key = _find_key(parent, child, False)
        return _MISSING if key is _MISSING else parent.pop(key)
    return _MISSING


def _decode_operation(patch: Any, case_sensitive: bool) -> Operation:
    name = _member(patch, "op", case_sensitive)
    if not isinstance(name, str):
        raise PatchError(3, "patch has no valid operation")
    try:
        return Operation(name)
    except ValueError:
        raise PatchError(3, f"unknown patch operation {name!r}") from None


def _value_of(patch: Any, case_sensitive: bool) -> Any:
    value = _member(patch, "value", case_sensitive)
    if value is _MISSING:
        raise PatchError(7, "missing 'value' for add/replace")
    return copy.deepcopy(value)


def apply_patch(document: Any, patch: Any, case_sensitive: bool = False) -> Any:
    """Apply one patch entry to *document* and return the resulting document.

    Removing the root leaves nothing and returns None.
    Raises PatchError when the patch is malformed, a test fails or the
    path cannot be followed.
    """
    path = _member(patch, "path", case_sensitive)
    if not isinstance(path, str):
        raise PatchError(2, "patch has no 'path' string")

    operation = _decode_operation(patch, case_sensitive)
    if operation is Operation.TEST:
        actual = _lookup(document, path, case_sensitive)
        expected = _member(patch, "value", case_sensitive)
        if (
            actual is _MISSING
            or expected is _MISSING
            or not compare(actual, expected, case_sensitive)
        ):
            raise PatchError(1, f"test failed at {path!r}")
        return document

    if path == "":
        if operation is Operation.REMOVE:
            return None
        if operation in (Operation.REPLACE, Operation.ADD):
            return _value_of(patch, case_sensitive)

    if operation in (Operation.REMOVE, Operation.REPLACE):
        if _detach(document, path, case_sensitive) is _MISSING:
            raise PatchError(13, f"nothing to {operation.value} at {path!r}")
        if operation is Operation.REMOVE:
            return document

    if operation in (Operation.MOVE, Operation.COPY):
        source = _member(patch, "from", case_sensitive)
        if source is _MISSING:
            raise PatchError(4, "missing 'from' for copy/move")
        if not isinstance(source, str):
            value = _MISSING
        elif operation is Operation.MOVE:
            value = _detach(document, source, case_sensitive)
        else:
            value = _lookup(document, source, case_sensitive)
        if value is _MISSING:
            raise PatchError(5, f"nothing to {operation.value} from {source!r}")
        if operation is Operation.COPY:
            value = copy.deepcopy(value)
    else:
        value = _value_of(patch, case_sensitive)

    parts = _split(path)
    if parts is None:
        raise PatchError(9, f"no parent to add to at {path!r}")
    parent_pointer, child = parts
    parent = _lookup(document, parent_pointer, case_sensitive)
    child = _decode(child)

    if isinstance(parent, list):
        if child == "-":
            parent.append(value)
            return document
        try:
            index = decode_array_index(child)
        except ValueError:
            raise PatchError(11, f"invalid array index {child!r}") from None
        if index > len(parent):
            raise PatchError(10, f"array index {index} is past the end")
        parent.insert(index, value)
    elif isinstance(parent, dict):
        existing = _find_key(parent, child, case_sensitive)
        if existing is not _MISSING:
            del parent[existing]
        parent[child] = value
    else:
        raise PatchError(9, f"no parent to add to at {path!r}")
    return document


def apply_patches(document: Any, patches: Any, case_sensitive: bool = False) -> Any:
    """Apply every patch in the list *patches* in turn; return the result."""
    if not isinstance(patches, list):
        raise PatchError(1, "patches must be an array")
    for patch in patches:
        document = apply_patch(document, patch, case_sensitive)
    return document


def add_patch(patches: list, operation: Operation | str, path: str, value: Any = _MISSING) -> None:
    """Append a patch entry to *patches*; omit *value* for operations without one."""
    name = operation.value if isinstance(operation, Operation) else operation
    patch: dict[str, Any] = {"op": name, "path": path}
    if value is not _MISSING:
        patch["value"] = copy.deepcopy(value)
    patches.append(patch)


def _compose(patches: list, operation: Operation, path: str, suffix: str | None = None,
             value: Any = _MISSING) -> None:
    full_path = path if suffix is None else f"{path}/{encode_token(suffix)}"
    add_patch(patches, operation, full_path, value)


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def _create(patches: list, path: str, source: Any, target: Any, case_sensitive: bool) -> None:
    kind = _kind(source)
    if kind != _kind(target):
        _compose(patches, Operation.REPLACE, path, value=target)
        return

    if kind == "number":
        if not numbers_equal(source, target):
            _compose(patches, Operation.REPLACE, path, value=target)
    elif kind == "string":
        if source != target:
            _compose(patches, Operation.REPLACE, path, value=target)
    elif kind == "array":
        common = min(len(source), len(target))
        for index, (old, new) in enumerate(zip(source, target)):
            _create(patches, f"{path}/{index}", old, new, case_sensitive)
        for _ in source[common:]:
            _compose(patches, Operation.REMOVE, path, str(common))
        for new in target[common:]:
            _compose(patches, Operation.ADD, path, "-", new)
    elif kind == "object":
        sort_object(source, case_sensitive)
        sort_object(target, case_sensitive)
        old_items = list(source.items())
        new_items = list(target.items())
        i = j = 0
        while i < len(old_items) or j < len(new_items):
            if i == len(old_items):
                diff = 1
            elif j == len(new_items):
                diff = -1
            else:
                diff = compare_keys(old_items[i][0], new_items[j][0], case_sensitive)

            if diff == 0:
                key, old = old_items[i]
                _create(patches, f"{path}/{encode_token(key)}", old, new_items[j][1],
                        case_sensitive)
                i += 1
                j += 1
            elif diff < 0:
                _compose(patches, Operation.REMOVE, path, old_items[i][0])
                i += 1
            else:
                key, new = new_items[j]
                _compose(patches, Operation.ADD, path, key, new)
                j += 1


def generate_patches(source: Any, target: Any, case_sensitive: bool = False) -> list:
    """Return the list of patches that turns *source* into *target*.

    Objects in both documents are sorted by key in place as a side effect.
    """
    patches: list = []
    _create(patches, "", source, target, case_sensitive)
    return patches