"""
Paste component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from fixer_cms.components.richtext.ports import RulesPort as RichTextRulesPort


class RulesPort(RichTextRulesPort, Protocol):
    """Port for paste heuristics plus the editor allow-list."""

    def get_heading_max_length(self) -> int:
        """Get the length under which a plain-text line reads as a heading."""
        ...
