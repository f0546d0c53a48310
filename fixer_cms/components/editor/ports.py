"""
Editor component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from fixer_cms.components.paste.ports import RulesPort as PasteRulesPort


class RulesPort(PasteRulesPort, Protocol):
    """Port for editor settings plus paste heuristics and the allow-list."""

    def get_history_limit(self) -> int:
        """Get the number of undo steps kept per session."""
        ...

    def get_locale(self) -> str:
        """Get the locale for user-facing messages."""
        ...
