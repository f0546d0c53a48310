"""
Sitemap component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from fixer_cms.domain.entities import ContentRecord

from ._impl import SitemapConfig


class PublishedContentPort(Protocol):
    """Source of published records."""

    def list_published(self) -> list[ContentRecord]:
        """All published records, most recently updated first."""
        ...


class RulesPort(Protocol):
    def get_sitemap_config(self) -> SitemapConfig:
        """Get base URL, static pages and per-kind settings."""
        ...
