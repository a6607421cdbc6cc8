# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx transport exceptions to ErrorCategory.

    httpx wraps the low-level socket errors, so the chained cause is inspected
    as well before settling on a broad connection error.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ssl.SSLError):
            return ErrorCategory.SSL_ERROR
        if isinstance(current, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        if isinstance(current, TimeoutError):
            return ErrorCategory.TIMEOUT
        current = current.__cause__ or current.__context__

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class CustomerIOError(Exception):
    """Base class for every error raised by cioclient."""


class LocalValidationError(CustomerIOError, ValueError):
    """Input rejected before any network activity."""


class ParamError(LocalValidationError):
    """A required parameter was missing or invalid."""

    def __init__(self, param: str):
        self.param = param
        super().__init__(f"{param}: missing")


class BatchSizeError(LocalValidationError):
    """Too many items were supplied for a single request."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"can only look up {limit} customers at a time, got {size}")


class SerializationError(CustomerIOError):
    """A request payload could not be encoded as JSON."""


class TransportError(CustomerIOError):
    """The HTTP round trip itself failed; the original exception is chained as the cause."""

    def __init__(self, message: str, *, url: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        self.url = url
        self.category = category
        super().__init__(f"{category.value}: {url}: {message}")


class APIError(CustomerIOError):
    """The remote service answered with a non-success status."""

    def __init__(self, status: int, url: str, body: bytes):
        self.status = status
        self.url = url
        self.body = body
        super().__init__(f"{status}: {url} {body.decode('utf-8', errors='replace')}")

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class CustomerNotFoundError(CustomerIOError):
    """Customer lookup answered 404."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("customer not found")


class ResponseDecodeError(CustomerIOError):
    """A success response did not have the expected JSON shape."""

    def __init__(self, message: str, *, url: str, body: bytes):
        self.url = url
        self.body = body
        super().__init__(f"{url}: {message}")


__all__ = [
    "APIError",
    "BatchSizeError",
    "CustomerIOError",
    "CustomerNotFoundError",
    "ErrorCategory",
    "LocalValidationError",
    "ParamError",
    "ResponseDecodeError",
    "SerializationError",
    "TransportError",
    "categorize_exception",
]
