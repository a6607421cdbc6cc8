# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for cioclient."""

from .custom_object import CustomObject
from .customer import Attributes, Customer, Identifier, IdentifierType
from .region import AccountRegion
from .segment import Segment

__all__ = [
    "AccountRegion",
    "Attributes",
    "CustomObject",
    "Customer",
    "Identifier",
    "IdentifierType",
    "Segment",
]
