# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
cioclient package entrypoint.

Typed clients for the Customer.io Track API (identity and event ingestion) and
App API (customers, segments, custom objects). HTTP behavior is abstracted
behind an injectable client interface, and domain objects are modeled with
typed dataclasses.
"""

from .api import APIClient
from .auth import Credentials
from .config import DEFAULT_USER_AGENT, ClientSettings, Region, load_client_settings
from .context import request_context
from .errors import (
    APIError,
    BatchSizeError,
    CustomerIOError,
    CustomerNotFoundError,
    ErrorCategory,
    LocalValidationError,
    ParamError,
    ResponseDecodeError,
    SerializationError,
    TransportError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, StubHttpClient, create_default_http_client
from .log import setup_logging
from .models import AccountRegion, CustomObject, Customer, Identifier, IdentifierType, Segment
from .track import TrackClient
from .version import __version__

__all__ = [
    "APIClient",
    "APIError",
    "AccountRegion",
    "BatchSizeError",
    "ClientSettings",
    "Credentials",
    "CustomObject",
    "Customer",
    "CustomerIOError",
    "CustomerNotFoundError",
    "DEFAULT_USER_AGENT",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "Identifier",
    "IdentifierType",
    "LocalValidationError",
    "ParamError",
    "Region",
    "ResponseDecodeError",
    "Segment",
    "SerializationError",
    "StubHttpClient",
    "TrackClient",
    "TransportError",
    "create_default_http_client",
    "load_client_settings",
    "request_context",
    "setup_logging",
    "__version__",
]
