"""
Paste component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

PasteSource = Literal["html", "text", "empty"]


@dataclass(frozen=True)
class PasteError:
    """Paste error."""

    code: str
    message: str


@dataclass(frozen=True)
class PasteInput:
    """Clipboard contents as offered by the browser."""

    html: str | None = None
    text: str | None = None


@dataclass(frozen=True)
class PasteOutput:
    """Sanitized fragment ready for insertion."""

    html: str
    source: PasteSource
    errors: list[PasteError] = field(default_factory=list)
    success: bool = True
