"""
Content component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from fixer_cms.components.richtext.ports import RulesPort as RichTextRulesPort
from fixer_cms.domain.entities import ContentKind, ContentRecord, ContentStatus


class ContentRepoPort(Protocol):
    """Repository interface for content persistence."""

    def get_by_id(self, item_id: UUID) -> ContentRecord | None:
        """Get record by ID."""
        ...

    def get_by_slug(self, kind: ContentKind, slug: str) -> ContentRecord | None:
        """Get record by kind and slug."""
        ...

    def save(self, record: ContentRecord) -> ContentRecord:
        """Insert or overwrite a record."""
        ...

    def delete(self, item_id: UUID) -> None:
        """Delete record by ID."""
        ...

    def list(
        self,
        *,
        kind: ContentKind | None = None,
        status: ContentStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[ContentRecord], int]:
        """List records with filters. Returns (items, total_count)."""
        ...


class RulesPort(RichTextRulesPort, Protocol):
    """Port for content rules plus the editor allow-list."""

    def get_content_kinds(self) -> list[str]:
        """Get enabled content kinds."""
        ...

    def get_title_max_length(self) -> int:
        """Get maximum title length."""
        ...

    def get_excerpt_max_length(self) -> int:
        """Get maximum excerpt length."""
        ...


class TimePort(Protocol):
    """Port for time operations."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...


class PublishNotifierPort(Protocol):
    """Port told about every status change of a public path."""

    def on_status_change(
        self,
        path: str,
        old_status: ContentStatus | None,
        new_status: ContentStatus,
    ) -> None:
        """Handle a saved record's status; must not raise."""
        ...
