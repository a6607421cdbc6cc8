# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""App API client: read access to customers, segments, and custom objects."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlencode

from .base import BaseClient, path_escape, require
from .decoding import ShapeError, as_str, decode_items, decode_with, load_object, require_list, require_object
from .errors import BatchSizeError, CustomerNotFoundError, ParamError, ResponseDecodeError
from .models.custom_object import CustomObject
from .models.customer import Attributes, Customer, IdentifierType, customer_from_attributes_response
from .models.segment import Segment

MAX_LOOKUP_IDS = 1000


def eq_condition(field: str, value: str) -> dict[str, Any]:
    """An equality attribute condition for customer search filters."""
    return {"attribute": {"field": field, "operator": "eq", "value": value}}


def _id_string(value: Any, what: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ShapeError(f"{what} must be a string")
    return str(value)


class APIClient(BaseClient):
    """
    Client for the App API.

    Customer lookups raise CustomerNotFoundError on 404; every other non-200
    status raises APIError.
    """

    def _url(self, path: str) -> str:
        return f"{self.settings.api_url}{path}"

    def get_customer(
        self,
        customer_id: str,
        id_type: IdentifierType | str = IdentifierType.ID,
        *,
        timeout: float | None = None,
    ) -> Customer:
        """Fetch a customer's attributes, addressing it by ``id_type``."""
        require("customer_id", customer_id)
        try:
            id_type = IdentifierType(id_type)
        except ValueError:
            raise ParamError("id_type") from None
        query = urlencode({"id_type": id_type.value})
        url = self._url(f"/v1/customers/{path_escape(customer_id)}/attributes?{query}")
        body = self.executor.request("GET", url, timeout=timeout, not_found=CustomerNotFoundError)
        return decode_with(customer_from_attributes_response, load_object(body, url), url=url, body=body)

    def lookup_customer_ids(
        self,
        ids: Sequence[str],
        id_type: IdentifierType | str,
        *,
        timeout: float | None = None,
    ) -> list[str]:
        """
        Resolve emails/ids/cio_ids to cio_ids in one search request.

        The result has the same length and order as ``ids``; unmatched entries
        are "". Emails are matched case-insensitively.
        """
        if len(ids) > MAX_LOOKUP_IDS:
            raise BatchSizeError(len(ids), MAX_LOOKUP_IDS)
        try:
            id_type = IdentifierType(id_type)
        except ValueError:
            raise ParamError("id_type") from None
        if not ids:
            return []

        field = id_type.value
        payload = {"filter": {"or": [eq_condition(field, value) for value in ids]}}
        url = self._url("/v1/customers?limit=1000")
        body = self.executor.request("POST", url, payload, timeout=timeout)
        envelope = load_object(body, url)

        fold = id_type is IdentifierType.EMAIL
        lookup: dict[str, str] = {}
        for index, result in enumerate(require_list(envelope, "identifiers", url=url, body=body)):
            if not isinstance(result, dict):
                raise ResponseDecodeError(f"identifier {index} must be an object", url=url, body=body)
            key, cio_id = result.get(field), result.get("cio_id")
            if key is None or cio_id is None:
                continue
            key = str(key)
            lookup[key.lower() if fold else key] = str(cio_id)

        return [lookup.get(value.lower() if fold else value, "") for value in ids]

    def lookup_customers_by_email(self, email: str, *, timeout: float | None = None) -> list[str]:
        """Return the cio_ids of every customer with ``email``."""
        require("email", email)
        url = self._url(f"/v1/customers?{urlencode({'email': email})}")
        body = self.executor.request("GET", url, timeout=timeout, not_found=CustomerNotFoundError)
        results = require_list(load_object(body, url), "results", url=url, body=body)
        return decode_items(results, lambda item: as_str(item, "cio_id"), url=url, body=body)

    def list_segments(self, *, timeout: float | None = None) -> list[Segment]:
        url = self._url("/v1/segments")
        body = self.executor.request("GET", url, timeout=timeout)
        segments = require_list(load_object(body, url), "segments", url=url, body=body)
        return decode_items(segments, Segment.from_dict, url=url, body=body)

    def get_segment(self, segment_id: int, *, timeout: float | None = None) -> Segment:
        url = self._url(f"/v1/segments/{path_escape(segment_id)}")
        body = self.executor.request("GET", url, timeout=timeout)
        segment = require_object(load_object(body, url), "segment", url=url, body=body)
        return decode_with(Segment.from_dict, segment, url=url, body=body)

    def list_custom_objects(self, *, timeout: float | None = None) -> list[CustomObject]:
        """List the custom object types defined in the workspace."""
        url = self._url("/v1/object_types")
        body = self.executor.request("GET", url, timeout=timeout)
        types = require_list(load_object(body, url), "types", url=url, body=body)
        return decode_items(types, CustomObject.from_dict, url=url, body=body)

    def find_custom_objects(
        self,
        object_type_id: str,
        filter: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> list[str]:
        """Return the ids of objects of ``object_type_id`` matching ``filter``."""
        require("object_type_id", object_type_id)
        url = self._url("/v1/objects")
        payload = {"object_type_id": object_type_id, "filter": dict(filter or {})}
        body = self.executor.request("POST", url, payload, timeout=timeout)
        ids = require_list(load_object(body, url), "ids", url=url, body=body)
        try:
            return [_id_string(value, f"ids[{index}]") for index, value in enumerate(ids)]
        except ShapeError as exc:
            raise ResponseDecodeError(str(exc), url=url, body=body) from exc

    def get_custom_object_attributes(
        self,
        object_type_id: str,
        object_id: str,
        *,
        timeout: float | None = None,
    ) -> Attributes:
        require("object_type_id", object_type_id)
        require("object_id", object_id)
        url = self._url(f"/v1/objects/{path_escape(object_type_id)}/{path_escape(object_id)}/attributes")
        body = self.executor.request("GET", url, timeout=timeout)
        obj = require_object(load_object(body, url), "object", url=url, body=body)
        return require_object(obj, "attributes", url=url, body=body)


__all__ = ["APIClient", "MAX_LOOKUP_IDS", "eq_condition"]
