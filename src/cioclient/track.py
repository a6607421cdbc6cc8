# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Track API client: identity and event ingestion."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlencode

from .base import BaseClient, path_escape, require
from .decoding import decode_with, load_object
from .errors import ParamError
from .models.customer import Customer, Identifier, IdentifierType, epoch_seconds
from .models.region import AccountRegion


class TrackClient(BaseClient):
    """
    Client for the Track API, authenticated with a tracking site id and API key.

    Mutating calls return None on success. Every method raises ParamError for
    a blank required argument before anything is sent.
    """

    def _url(self, path: str) -> str:
        return f"{self.settings.track_url}{path}"

    def identify(self, customer_id: str, attributes: Mapping[str, Any] | None = None, *, timeout: float | None = None) -> None:
        """Create or update a customer and set its attributes."""
        require("customer_id", customer_id)
        self.executor.request(
            "PUT",
            self._url(f"/api/v1/customers/{path_escape(customer_id)}"),
            dict(attributes or {}),
            timeout=timeout,
        )

    def add_or_update(self, customer_id: str, customer: Customer, *, timeout: float | None = None) -> None:
        """Identify from a Customer; only fields that are set are sent."""
        require("customer_id", customer_id)
        payload: dict[str, Any] = dict(customer.attributes)
        if customer.created_at is not None:
            payload["created_at"] = epoch_seconds(customer.created_at)
        if customer.email:
            payload["email"] = customer.email
        if customer.id:
            payload["id"] = customer.id
        if customer.unsubscribed is not None:
            payload["unsubscribed"] = customer.unsubscribed
        self.executor.request(
            "PUT",
            self._url(f"/api/v1/customers/{path_escape(customer_id)}"),
            payload,
            timeout=timeout,
        )

    def track(
        self,
        customer_id: str,
        event_name: str,
        data: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        """Send a single named event for a customer."""
        require("customer_id", customer_id)
        require("event_name", event_name)
        self.executor.request(
            "POST",
            self._url(f"/api/v1/customers/{path_escape(customer_id)}/events"),
            {"name": event_name, "data": dict(data or {})},
            timeout=timeout,
        )

    def track_anonymous(
        self,
        anonymous_id: str,
        event_name: str,
        data: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        """Send an event with no customer; ``anonymous_id`` is optional."""
        require("event_name", event_name)
        payload: dict[str, Any] = {"name": event_name, "data": dict(data or {})}
        if anonymous_id:
            payload["anonymous_id"] = anonymous_id
        self.executor.request("POST", self._url("/api/v1/events"), payload, timeout=timeout)

    def delete(self, customer_id: str, *, timeout: float | None = None) -> None:
        require("customer_id", customer_id)
        self.executor.request("DELETE", self._url(f"/api/v1/customers/{path_escape(customer_id)}"), timeout=timeout)

    def add_device(
        self,
        customer_id: str,
        device_id: str,
        platform: str,
        data: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        """Register a device; ``data`` keys are merged into the device object and may override id or platform."""
        require("customer_id", customer_id)
        require("device_id", device_id)
        require("platform", platform)
        device: dict[str, Any] = {"id": device_id, "platform": platform}
        device.update(data or {})
        self.executor.request(
            "PUT",
            self._url(f"/api/v1/customers/{path_escape(customer_id)}/devices"),
            {"device": device},
            timeout=timeout,
        )

    def delete_device(self, customer_id: str, device_id: str, *, timeout: float | None = None) -> None:
        require("customer_id", customer_id)
        require("device_id", device_id)
        self.executor.request(
            "DELETE",
            self._url(f"/api/v1/customers/{path_escape(customer_id)}/devices/{path_escape(device_id)}"),
            timeout=timeout,
        )

    def merge_customers(self, primary: Identifier, secondary: Identifier, *, timeout: float | None = None) -> None:
        """Merge ``secondary`` into ``primary``. Both must be id, email or cio_id with a non-blank value."""
        if not primary.is_mergeable():
            raise ParamError("primary")
        if not secondary.is_mergeable():
            raise ParamError("secondary")
        self.executor.request(
            "POST",
            self._url("/api/v1/merge_customers"),
            {"primary": primary.to_dict(), "secondary": secondary.to_dict()},
            timeout=timeout,
        )

    def region(self, *, timeout: float | None = None) -> AccountRegion:
        """Resolve the account's data-residency region."""
        url = self._url("/api/v1/accounts/region")
        body = self.executor.request("GET", url, timeout=timeout)
        return decode_with(AccountRegion.from_dict, load_object(body, url), url=url, body=body)

    def add_customers_to_segment(
        self,
        segment_id: int,
        customers: Iterable[Customer],
        id_type: IdentifierType | str,
        *,
        timeout: float | None = None,
    ) -> int:
        """
        Add customers to a manual segment, addressed by ``id_type``.

        Customers without a value for that identifier are skipped. Returns the
        number of identifiers submitted.
        """
        try:
            id_type = IdentifierType(id_type)
        except ValueError:
            raise ParamError("id_type") from None
        ids = [value for value in (customer.identifier_value(id_type) for customer in customers) if value]
        query = urlencode({"id_type": id_type.value})
        self.executor.request(
            "POST",
            self._url(f"/api/v1/segments/{path_escape(segment_id)}/add_customers?{query}"),
            {"ids": ids},
            timeout=timeout,
        )
        return len(ids)

    def track_batch(self, actions: Iterable[Mapping[str, Any]], *, timeout: float | None = None) -> None:
        """Submit pre-shaped actions as one batch; the API enforces any size limit."""
        self.executor.request(
            "POST",
            self._url("/api/v2/batch"),
            {"batch": [dict(action) for action in actions]},
            timeout=timeout,
        )


__all__ = ["TrackClient"]
