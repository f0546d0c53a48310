"""
Render component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from ._impl import SiteConfig


class SitePort(Protocol):
    """Port for site-wide settings."""

    def get_site_config(self) -> SiteConfig:
        """Get base URL, site name, locale and social defaults."""
        ...
