# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Account region lookup result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..decoding import as_int, as_str


@dataclass(frozen=True)
class AccountRegion:
    url: str = ""
    region: str = ""
    environment_id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccountRegion:
        return cls(
            url=as_str(data, "url"),
            region=as_str(data, "region"),
            environment_id=as_int(data, "environment_id"),
        )
