# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for cioclient."""

import os
from dataclasses import dataclass, replace
from enum import Enum

from .version import __version__

DEFAULT_USER_AGENT = f"Customer.io Python Client/{__version__}"


class Region(str, Enum):
    """Data-residency regions and their base URLs."""

    US = "us"
    EU = "eu"

    @property
    def track_url(self) -> str:
        return "https://track.customer.io" if self is Region.US else "https://track-eu.customer.io"

    @property
    def api_url(self) -> str:
        return "https://api.customer.io" if self is Region.US else "https://api-eu.customer.io"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _region_env(name: str, default: Region) -> Region:
    value = (os.getenv(name) or "").strip().lower()
    try:
        return Region(value) if value else default
    except ValueError:
        return default


@dataclass(frozen=True)
class ClientSettings:
    """Client defaults, fixed before the first request is issued."""

    track_url: str = Region.US.track_url
    api_url: str = Region.US.api_url
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 10.0
    max_idle_connections: int = 100
    verify_ssl: bool = True

    @classmethod
    def for_region(cls, region: Region | str, **overrides) -> "ClientSettings":
        """Settings pointing at the base URLs of ``region``."""
        region = Region(region)
        return cls(track_url=region.track_url, api_url=region.api_url, **overrides)

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        region = _region_env("CIO_REGION", Region.US)
        max_idle = _int_env("CIO_HTTP_MAX_IDLE_CONNECTIONS", cls.max_idle_connections)
        if max_idle <= 0:
            max_idle = cls.max_idle_connections
        return cls(
            track_url=os.getenv("CIO_TRACK_URL", region.track_url),
            api_url=os.getenv("CIO_API_URL", region.api_url),
            user_agent=os.getenv("CIO_USER_AGENT", cls.user_agent),
            timeout=_float_env("CIO_HTTP_TIMEOUT", cls.timeout),
            max_idle_connections=max_idle,
            verify_ssl=_bool_env("CIO_HTTP_VERIFY_SSL", cls.verify_ssl),
        )

    def with_overrides(self, **overrides) -> "ClientSettings":
        """Return a copy with the given fields replaced; None values are ignored."""
        filtered = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **filtered) if filtered else self


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
