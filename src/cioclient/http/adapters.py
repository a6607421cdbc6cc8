# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Responses are keyed by ``(method, url)``; a plain URL key matches any method.
    Every request is recorded in ``requests``.
    """

    def __init__(self, responses: dict[str | tuple[str, str], HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse, *, method: str | None = None) -> None:
        key = (method.upper(), url) if method else url
        self._responses[key] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        for key in ((request.method.upper(), request.url), request.url):
            if key in self._responses:
                return self._responses[key]
        return HttpResponse(
            ok=False,
            url=request.url,
            error_message="No stubbed response configured",
            error_type="LookupError",
        )

    def close(self) -> None:
        self.closed = True


__all__ = ["StubHttpClient"]
