"""JSON Merge Patch (RFC 7396): applying and generating merge patches.

Documents and patches are the values produced by :func:`json.loads`. A
``None`` member in a patch object removes that member from the target.
"""

from __future__ import annotations

import copy
from typing import Any

from jsonweave.compare import compare, compare_keys, sort_object

__all__ = ["merge_patch", "generate_merge_patch"]

_MISSING: Any = object()


def _find_key(obj: dict, name: str, case_sensitive: bool) -> Any:
    if case_sensitive:
        return name if name in obj else _MISSING
    return next(
        (key for key in obj if compare_keys(key, name, False) == 0),
        _MISSING,
    )


def _merge(target: Any, patch: Any, case_sensitive: bool) -> Any:
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)

    if not isinstance(target, dict):
        target = {}

    for name, value in patch.items():
        key = _find_key(target, name, case_sensitive)
        if value is None:
            if key is not _MISSING:
                del target[key]
            continue
        current = target.pop(key) if key is not _MISSING else _MISSING
        target[name] = _merge(current, value, case_sensitive)
    return target


def merge_patch(target: Any, patch: Any, case_sensitive: bool = False) -> Any:
    """Apply the merge patch *patch* to *target* and return the result.

    An object *target* is changed in place. Members are matched ignoring
    ASCII case unless *case_sensitive* is set; replaced members move to the
    end of the object under the key spelled as in the patch.
    """
    return _merge(target, patch, case_sensitive)


def _key_order(first: str, second: str) -> int:
    if first == second:
        return 0
    return -1 if first < second else 1


def generate_merge_patch(source: Any, target: Any, case_sensitive: bool = False) -> Any:
    """Return a merge patch that turns *source* into *target*.

    When both are objects and nothing differs, the patch is an empty object.
    Objects in both documents are sorted by key in place as a side effect.
    """
    if not isinstance(target, dict) or not isinstance(source, dict):
        return copy.deepcopy(target)

    sort_object(source, case_sensitive)
    sort_object(target, case_sensitive)

    old_items = list(source.items())
    new_items = list(target.items())
    patch: dict[str, Any] = {}
    i = j = 0
    while i < len(old_items) or j < len(new_items):
        if i == len(old_items):
            diff = 1
        elif j == len(new_items):
            diff = -1
        else:
            diff = _key_order(old_items[i][0], new_items[j][0])

        if diff < 0:
            patch[old_items[i][0]] = None
            i += 1
        elif diff > 0:
            key, value = new_items[j]
            patch[key] = copy.deepcopy(value)
            j += 1
        else:
            old = old_items[i][1]
            key, new = new_items[j]
            if not compare(old, new, case_sensitive):
                sub_patch = generate_merge_patch(old, new, case_sensitive)
                both_objects = isinstance(old, dict) and isinstance(new, dict)
                if not (both_objects and sub_patch == {}):
                    patch[key] = sub_patch
            i += 1
            j += 1
    return patch