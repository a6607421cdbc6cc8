# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models shared by HttpClient implementations."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    ``ok`` reports transport-level success only: a 500 answer is ``ok=True``
    with ``status_code=500``. When ``ok`` is False the original exception is
    kept in ``error`` so callers can chain it.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: str | None = None
    error: BaseException | None = field(default=None, repr=False, compare=False)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @classmethod
    def json_response(cls, status_code: int, payload: Any, *, url: str | None = None) -> HttpResponse:
        """Helper to build a canned JSON response (stub clients, fixtures)."""
        return cls(
            ok=True,
            status_code=status_code,
            headers={"content-type": "application/json"},
            content=json.dumps(payload).encode("utf-8"),
            url=url,
        )


__all__ = ["Headers", "HttpRequest", "HttpResponse"]
