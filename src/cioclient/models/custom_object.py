# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Custom object type metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..decoding import ShapeError, as_bool, as_str


@dataclass(frozen=True)
class CustomObject:
    """
    Describes a custom object *type*, not an instance.

    Instances are addressed by ``(object_type_id, object_id)`` and carry an
    open attribute map instead of a model of their own.
    """

    id: str = ""
    name: str = ""
    enabled: bool = False
    singular_name: str = ""
    slug: str = ""
    singular_slug: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomObject:
        raw_id = data.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int, type(None))):
            raise ShapeError("'id' must be a string")
        return cls(
            id="" if raw_id is None else str(raw_id),
            name=as_str(data, "name"),
            enabled=as_bool(data, "enabled"),
            singular_name=as_str(data, "singular_name"),
            slug=as_str(data, "slug"),
            singular_slug=as_str(data, "singular_slug"),
        )
