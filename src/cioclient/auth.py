# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Site credentials and the Basic-Authentication header derived from them."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """A (site id, secret key) pair. Well-formedness is not checked here."""

    site_id: str
    api_key: str = field(repr=False)

    def token(self) -> str:
        raw = f"{self.site_id}:{self.api_key}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def authorization_header(self) -> str:
        return f"Basic {self.token()}"


__all__ = ["Credentials"]
