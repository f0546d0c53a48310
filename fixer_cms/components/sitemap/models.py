"""
Sitemap component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ._impl import SitemapEntry


@dataclass(frozen=True)
class GenerateSitemapInput:
    """Input for generating sitemap.xml."""

    today: date | None = None


@dataclass(frozen=True)
class SitemapOutput:
    """Output containing the sitemap entries and XML."""

    entries: list[SitemapEntry] = field(default_factory=list)
    xml: str = ""
    success: bool = True
