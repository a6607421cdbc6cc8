# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Segment model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..decoding import as_int, as_str


@dataclass(frozen=True)
class Segment:
    """Read-only projection of a remote segment."""

    id: int = 0
    name: str = ""
    description: str = ""
    state: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Segment:
        return cls(
            id=as_int(data, "id"),
            name=as_str(data, "name"),
            description=as_str(data, "description"),
            state=as_str(data, "state"),
            type=as_str(data, "type"),
        )
