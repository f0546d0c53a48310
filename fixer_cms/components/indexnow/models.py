"""
IndexNow component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class HttpTransportError(Exception):
    """The request never got an HTTP response (DNS, connect, timeout)."""


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    text: str = ""


@dataclass(frozen=True)
class NotifyInput:
    """Input for submitting URLs to IndexNow."""

    urls: list[str]


@dataclass(frozen=True)
class IndexNowResult:
    """Outcome of one IndexNow submission."""

    success: bool
    urls: list[str] = field(default_factory=list)
    status_code: int | None = None
    error: str | None = None
