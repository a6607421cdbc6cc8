# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Customer, identifier, and the customer attribute decoders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ..decoding import ShapeError, as_str

Attributes = dict[str, Any]


class IdentifierType(str, Enum):
    ID = "id"
    EMAIL = "email"
    CIO_ID = "cio_id"

    NAME = "name"
    CIO_OBJECT_ID = "cio_object_id"
    OBJECT_ID = "object_id"


MERGEABLE_IDENTIFIER_TYPES = frozenset({IdentifierType.ID, IdentifierType.EMAIL, IdentifierType.CIO_ID})


@dataclass(frozen=True)
class Identifier:
    """Addresses a customer by exactly one field."""

    type: IdentifierType
    value: str

    def to_dict(self) -> dict[str, str]:
        return {IdentifierType(self.type).value: self.value}

    def is_mergeable(self) -> bool:
        """True when the type may be used to merge profiles and the value is not blank."""
        try:
            id_type = IdentifierType(self.type)
        except ValueError:
            return False
        return id_type in MERGEABLE_IDENTIFIER_TYPES and bool(str(self.value or "").strip())


def epoch_seconds(value: datetime | None) -> int:
    """Integer seconds since the epoch; 0 when unset. Naive datetimes are taken as UTC."""
    if value is None:
        return 0
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def _from_epoch(seconds: float) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ShapeError(f"'created_at' is out of range: {seconds!r}") from exc


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a created_at value: epoch seconds (number or numeric string) or ISO-8601.

    0, "" and None decode as unset so an encoded unset value round-trips to unset.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ShapeError("'created_at' must be a timestamp")
    if isinstance(value, (int, float)):
        return _from_epoch(value) if value else None
    if isinstance(value, str):
        text = value.strip()
        try:
            seconds = int(text)
        except ValueError:
            pass
        else:
            return _from_epoch(seconds) if seconds else None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ShapeError(f"'created_at' is not a timestamp: {value!r}") from exc
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ShapeError("'created_at' must be a timestamp")


@dataclass
class Customer:
    """A customer profile as exchanged with the API. Created fresh on every decode."""

    attributes: Attributes = field(default_factory=dict)
    cio_id: str = ""
    id: str = ""
    email: str = ""
    created_at: datetime | None = None
    unsubscribed: bool | None = None

    def identifier_value(self, id_type: IdentifierType | str) -> str:
        """The value of the field selected by ``id_type``, or "" when the type has no customer field."""
        id_type = IdentifierType(id_type)
        if id_type is IdentifierType.ID:
            return self.id
        if id_type is IdentifierType.EMAIL:
            return self.email
        if id_type is IdentifierType.CIO_ID:
            return self.cio_id
        return ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "attributes": dict(self.attributes),
            "cio_id": self.cio_id,
            "created_at": epoch_seconds(self.created_at),
            "email": self.email,
            "id": self.id,
            "unsubscribed": self.unsubscribed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Customer:
        attributes = data.get("attributes")
        if attributes is None:
            attributes = {}
        if not isinstance(attributes, dict):
            raise ShapeError("'attributes' must be an object")
        unsubscribed = data.get("unsubscribed")
        if unsubscribed is not None and not isinstance(unsubscribed, bool):
            raise ShapeError("'unsubscribed' must be a boolean")
        return cls(
            attributes=attributes,
            cio_id=as_str(data, "cio_id"),
            id=as_str(data, "id"),
            email=as_str(data, "email"),
            created_at=parse_timestamp(data.get("created_at")),
            unsubscribed=unsubscribed,
        )


def decode_legacy_attributes(encoded: str) -> Attributes:
    """
    Decode the attribute map of the legacy customer attributes response.

    Legacy compatibility: the service sends the map as a JSON string whose
    content is itself an escaped JSON string. Stage one unescapes it, stage two
    parses the resulting object text. An empty field means no attributes.
    """
    if not encoded.strip():
        return {}
    try:
        stage = json.loads(encoded)
        if isinstance(stage, str):
            if not stage.strip():
                return {}
            stage = json.loads(stage)
    except ValueError as exc:
        raise ShapeError(f"'attributes' is not encoded JSON: {exc}") from exc
    if not isinstance(stage, dict):
        raise ShapeError("'attributes' must encode a JSON object")
    return stage


def customer_from_attributes_response(envelope: dict[str, Any]) -> Customer:
    """Build a Customer from ``{"customer": {"attributes": {...}}}``; created_at is string seconds here."""
    customer = envelope.get("customer") or {}
    if not isinstance(customer, dict):
        raise ShapeError("'customer' must be an object")
    fields = customer.get("attributes") or {}
    if not isinstance(fields, dict):
        raise ShapeError("'customer.attributes' must be an object")

    created_raw = as_str(fields, "created_at")
    created_at = None
    if created_raw:
        try:
            seconds = int(created_raw)
        except ValueError as exc:
            raise ShapeError(f"'created_at' is not epoch seconds: {created_raw!r}") from exc
        created_at = _from_epoch(seconds)

    return Customer(
        attributes=decode_legacy_attributes(as_str(fields, "attributes")),
        cio_id=as_str(fields, "cio_id"),
        id=as_str(fields, "id"),
        email=as_str(fields, "email"),
        created_at=created_at,
    )


__all__ = [
    "Attributes",
    "Customer",
    "Identifier",
    "IdentifierType",
    "MERGEABLE_IDENTIFIER_TYPES",
    "customer_from_attributes_response",
    "decode_legacy_attributes",
    "epoch_seconds",
    "parse_timestamp",
]
