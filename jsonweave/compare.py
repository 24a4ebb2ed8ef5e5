"""Structural comparison and key ordering of plain Python JSON values.

Documents are the values produced by :func:`json.loads`. Object comparison
sorts the members of both objects in place, so the key order of the dicts
passed in may change.
"""

from __future__ import annotations

import math
import string
import sys
from itertools import pairwise
from typing import Any

__all__ = ["compare_keys", "numbers_equal", "sort_object", "compare"]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_INT_MAX = 2**31 - 1
_INT_MIN = -(2**31)


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def compare_keys(first: str, second: str, case_sensitive: bool = False) -> int:
    """Order two object keys: negative, zero or positive like ``strcmp``.

    Without *case_sensitive*, ASCII letters are compared ignoring case.
    """
    if not case_sensitive:
        first, second = _ascii_lower(first), _ascii_lower(second)
    if first == second:
        return 0
    return -1 if first < second else 1


def _integer_part(value: float) -> int:
    if value >= _INT_MAX:
        return _INT_MAX
    if value <= _INT_MIN:
        return _INT_MIN
    return int(value)


def numbers_equal(a: int | float, b: int | float) -> bool:
    """Tell whether two numbers are equal within double precision.

    Both the values (to a relative tolerance of machine epsilon) and their
    integer parts, clamped to the 32-bit range, must agree.
    """
    try:
        x, y = float(a), float(b)
    except OverflowError:
        return a == b
    largest = max(abs(x), abs(y))
    if not abs(x - y) <= largest * sys.float_info.epsilon:
        return False
    if math.isnan(x) or math.isnan(y):
        return False
    return _integer_part(x) == _integer_part(y)


def _merge_sort(items: list[tuple[str, Any]], case_sensitive: bool) -> list[tuple[str, Any]]:
    if len(items) < 2:
        return items
    if all(compare_keys(a[0], b[0], case_sensitive) < 0 for a, b in pairwise(items)):
        return items

    middle = (len(items) + 1) // 2
    first = _merge_sort(items[:middle], case_sensitive)
    second = _merge_sort(items[middle:], case_sensitive)

    merged: list[tuple[str, Any]] = []
    i = j = 0
    while i < len(first) and j < len(second):
        if compare_keys(first[i][0], second[j][0], case_sensitive) < 0:
            merged.append(first[i])
            i += 1
        else:
            merged.append(second[j])
            j += 1
    merged.extend(first[i:])
    merged.extend(second[j:])
    return merged


def sort_object(obj: dict | None, case_sensitive: bool = False) -> None:
    """Reorder the members of *obj* in place by key; ``None`` is left alone."""
    if obj is None:
        return
    if not isinstance(obj, dict):
        raise TypeError("only objects can be sorted")
    ordered = _merge_sort(list(obj.items()), case_sensitive)
    obj.clear()
    obj.update(ordered)


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


def compare(a: Any, b: Any, case_sensitive: bool = False) -> bool:
    """Tell whether two JSON values are structurally equal.

    Object keys are matched ignoring ASCII case unless *case_sensitive* is
    set; string values are always compared exactly. Objects are sorted in
    place as a side effect.
    """
    kind = _kind(a)
    if kind != _kind(b):
        return False
    if kind == "number":
        return numbers_equal(a, b)
    if kind == "string":
        return a == b
    if kind == "array":
        return len(a) == len(b) and all(
            compare(x, y, case_sensitive) for x, y in zip(a, b)
        )
    if kind == "object":
        sort_object(a, case_sensitive)
        sort_object(b, case_sensitive)
        if len(a) != len(b):
            return False
        return all(
            compare_keys(key_a, key_b, case_sensitive) == 0
            and compare(value_a, value_b, case_sensitive)
            for (key_a, value_a), (key_b, value_b) in zip(a.items(), b.items())
        )
    return True