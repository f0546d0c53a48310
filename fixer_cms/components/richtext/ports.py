"""
Richtext component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class RulesPort(Protocol):
    """Port for accessing the editor allow-list."""

    def get_allowed_tags(self) -> frozenset[str]:
        """Get allowed HTML tags."""
        ...

    def get_allowed_attrs(self) -> frozenset[str]:
        """Get allowed attributes."""
        ...

    def get_url_schemes(self) -> frozenset[str]:
        """Get allowed URL schemes."""
        ...
