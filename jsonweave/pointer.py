"""JSON Pointer (RFC 6901) lookup and construction over plain Python JSON values.

Documents are the values produced by :func:`json.loads`: ``dict``, ``list``,
``str``, ``int``, ``float``, ``bool`` and ``None``.
"""

from __future__ import annotations

import string
from typing import Any

__all__ = [
    "encode_token",
    "decode_token",
    "decode_array_index",
    "get_pointer",
    "find_pointer",
]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_MISSING = object()


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def encode_token(token: str) -> str:
    """Escape ``~`` as ``~0`` and ``/`` as ``~1`` so *token* fits in a pointer."""
    return token.replace("~", "~0").replace("/", "~1")


def decode_token(token: str) -> str:
    """Undo :func:`encode_token`; raise ValueError on an invalid ``~`` escape."""
    parts: list[str] = []
    chars = iter(token)
    for char in chars:
        if char != "~":
            parts.append(char)
            continue
        escape = next(chars, "")
        if escape == "0":
            parts.append("~")
        elif escape == "1":
            parts.append("/")
        else:
            raise ValueError(f"invalid escape sequence in pointer token {token!r}")
    return "".join(parts)


def decode_array_index(token: str) -> int:
    """Parse an array index token: decimal digits without leading zeroes.

    An empty token denotes index 0. Anything else raises ValueError.
    """
    if token.startswith("0") and len(token) > 1:
        raise ValueError(f"leading zeroes are not permitted in array index {token!r}")
    digits = token
    if digits and not all("0" <= char <= "9" for char in digits):
        raise ValueError(f"invalid array index {token!r}")
    return int(digits) if digits else 0


def _keys_equal(name: str, key: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return name == key
    return _ascii_lower(name) == _ascii_lower(key)


def _object_member(obj: dict, token: str, case_sensitive: bool) -> Any:
    try:
        key = decode_token(token)
    except ValueError as error:
        raise KeyError(token) from error
    found = next(
        (name for name in obj if _keys_equal(name, key, case_sensitive)),
        _MISSING,
    )
    if found is _MISSING:
        raise KeyError(key)
    return obj[found]


def get_pointer(document: Any, pointer: str, case_sensitive: bool = False) -> Any:
    """Return the value of *document* that *pointer* refers to.

    Object keys are matched ignoring ASCII case unless *case_sensitive* is set.
    A pointer that does not start with ``/`` refers to the whole document.
    Raises KeyError, IndexError or LookupError when the path cannot be followed.
    """
    if not isinstance(pointer, str):
        raise TypeError("pointer must be a string")
    if not pointer.startswith("/"):
        return document

    current = document
    for token in pointer[1:].split("/"):
        if isinstance(current, list):
            try:
                index = decode_array_index(token)
            except ValueError as error:
                raise LookupError(str(error)) from error
            if index >= len(current):
                raise IndexError(f"array index {index} out of range")
            current = current[index]
        elif isinstance(current, dict):
            current = _object_member(current, token, case_sensitive)
        else:
            raise LookupError(f"cannot descend into a scalar with token {token!r}")
    return current


def find_pointer(document: Any, target: Any) -> str | None:
    """Build the pointer from *document* to the object *target* (by identity).

    Returns None when *target* is not inside *document*.
    """
    if document is target:
        return ""
    if isinstance(document, list):
        children = ((str(index), child) for index, child in enumerate(document))
    elif isinstance(document, dict):
        children = ((encode_token(key), child) for key, child in document.items())
    else:
        return None
    for token, child in children:
        sub_pointer = find_pointer(child, target)
        if sub_pointer is not None:
            return f"/{token}{sub_pointer}"
    return None