# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shared request pipeline.

RequestExecutor performs exactly one authenticated HTTP round trip per call and
classifies the outcome: a raw body on success, or a typed exception. It never
retries, caches, or queues.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from .auth import Credentials
from .config import ClientSettings
from .context import get_request_context
from .errors import APIError, CustomerIOError, ErrorCategory, SerializationError, TransportError
from .http.client import HttpClient
from .http.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_NOT_FOUND = 404


def encode_json(payload: Any) -> bytes:
    """Serialize a request payload; NaN/Infinity and non-JSON types are rejected."""
    try:
        return json.dumps(payload, separators=(",", ":"), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"payload is not JSON serializable: {exc}") from exc


class RequestExecutor:
    """Builds, sends, and classifies requests for one set of credentials."""

    def __init__(self, credentials: Credentials, settings: ClientSettings, http_client: HttpClient):
        self.credentials = credentials
        self.settings = settings
        self.http_client = http_client

    def build_request(self, method: str, url: str, payload: Any = None, *, timeout: float | None = None) -> HttpRequest:
        headers = {"User-Agent": self.settings.user_agent}
        body: bytes | None = None
        if payload is not None:
            body = encode_json(payload)
            headers["Content-Type"] = "application/json"
            headers["Content-Length"] = str(len(body))
        headers["Authorization"] = self.credentials.authorization_header()

        if timeout is None:
            timeout = get_request_context().timeout
        if timeout is None:
            timeout = self.settings.timeout

        return HttpRequest(url=url, method=method, headers=headers, body=body, timeout=timeout)

    def send(self, method: str, url: str, payload: Any = None, *, timeout: float | None = None) -> HttpResponse:
        """Execute one round trip; raises TransportError when no HTTP response was received."""
        request = self.build_request(method, url, payload, timeout=timeout)
        response = self.http_client.request(request)

        if not response.ok or response.status_code is None:
            category = ErrorCategory(response.error_category or ErrorCategory.UNKNOWN_ERROR.value)
            logger.debug("%s %s failed: %s", method, url, category.value)
            raise TransportError(
                response.error_message or "request failed",
                url=url,
                category=category,
            ) from response.error

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def request(
        self,
        method: str,
        url: str,
        payload: Any = None,
        *,
        timeout: float | None = None,
        not_found: Callable[[str], CustomerIOError] | None = None,
    ) -> bytes:
        """
        Execute one round trip and return the raw body of a 200 response.

        ``not_found`` turns a 404 into the given sentinel exception instead of APIError.
        """
        response = self.send(method, url, payload, timeout=timeout)
        status = response.status_code
        if status == HTTP_OK:
            return response.content
        if status == HTTP_NOT_FOUND and not_found is not None:
            raise not_found(url)
        raise APIError(status, url, response.content)


__all__ = ["RequestExecutor", "encode_json"]
