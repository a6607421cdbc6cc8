# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Plumbing shared by TrackClient and APIClient."""

from __future__ import annotations

from urllib.parse import quote

from .auth import Credentials
from .config import ClientSettings, load_client_settings
from .errors import ParamError
from .executor import RequestExecutor
from .http.client import HttpClient, create_default_http_client


def path_escape(value: str | int) -> str:
    """Percent-escape a single URL path segment, including ``/``."""
    return quote(str(value), safe="")


def require(param: str, value: str | None) -> str:
    """Return ``value`` or raise ParamError when it is empty."""
    if not value:
        raise ParamError(param)
    return value


class BaseClient:
    """
    Wires credentials, settings, and an HttpClient into one RequestExecutor.

    The HttpClient is created from the settings unless one is injected; only an
    owned client is closed by ``close()``. Configuration is read-only after
    construction, so one instance may serve concurrent callers.
    """

    def __init__(
        self,
        site_id: str,
        api_key: str,
        *,
        settings: ClientSettings | None = None,
        http_client: HttpClient | None = None,
    ):
        self.settings = settings or load_client_settings()
        self._owns_http_client = http_client is None
        self.http_client = http_client or create_default_http_client(self.settings)
        self.executor = RequestExecutor(Credentials(site_id, api_key), self.settings, self.http_client)

    def close(self) -> None:
        if self._owns_http_client and hasattr(self.http_client, "close"):
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["BaseClient", "path_escape", "require"]
