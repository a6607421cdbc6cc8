# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON envelope helpers for success responses.

Decoding is all-or-nothing: any shape mismatch raises ResponseDecodeError and
the caller never sees a partially populated value. A missing or ``null``
envelope key decodes as empty, matching how the API omits empty collections.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, TypeVar

from .errors import ResponseDecodeError

T = TypeVar("T")


class ShapeError(ValueError):
    """Raised by model ``from_dict`` helpers; converted to ResponseDecodeError here."""


def load_object(body: bytes, url: str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise ResponseDecodeError(f"invalid JSON: {exc}", url=url, body=body) from exc
    if not isinstance(data, dict):
        raise ResponseDecodeError(f"expected a JSON object, got {type(data).__name__}", url=url, body=body)
    return data


def require_object(envelope: dict[str, Any], key: str, *, url: str, body: bytes) -> dict[str, Any]:
    value = envelope.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ResponseDecodeError(f"{key!r} must be an object", url=url, body=body)
    return value


def require_list(envelope: dict[str, Any], key: str, *, url: str, body: bytes) -> list[Any]:
    value = envelope.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ResponseDecodeError(f"{key!r} must be an array", url=url, body=body)
    return value


def decode_items(items: list[Any], factory: Callable[[dict[str, Any]], T], *, url: str, body: bytes) -> list[T]:
    """Apply ``factory`` to every element, failing the whole decode on the first bad one."""
    out: list[T] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ResponseDecodeError(f"item {index} must be an object", url=url, body=body)
        out.append(decode_with(factory, item, url=url, body=body))
    return out


def decode_with(factory: Callable[[dict[str, Any]], T], data: dict[str, Any], *, url: str, body: bytes) -> T:
    try:
        return factory(data)
    except (ShapeError, TypeError, ValueError) as exc:
        raise ResponseDecodeError(str(exc), url=url, body=body) from exc


def as_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ShapeError(f"{key!r} must be a string")
    return value


def as_int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ShapeError(f"{key!r} must be an integer")
    return value


def as_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ShapeError(f"{key!r} must be a boolean")
    return value


__all__ = [
    "ShapeError",
    "as_bool",
    "as_int",
    "as_str",
    "decode_items",
    "decode_with",
    "load_object",
    "require_list",
    "require_object",
]
