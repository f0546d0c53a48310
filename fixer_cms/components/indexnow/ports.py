"""
IndexNow component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol

from ._impl import IndexNowConfig
from .models import HttpResponse


class HttpClientPort(Protocol):
    """Outbound HTTP."""

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        *,
        headers: dict[str, str],
        timeout: float,
    ) -> HttpResponse:
        """POST a JSON body; raises HttpTransportError when no response arrives."""
        ...


class RulesPort(Protocol):
    def get_indexnow_config(self) -> IndexNowConfig:
        """Get endpoint, host, key and client settings."""
        ...
