"""
Content component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from fixer_cms.domain.entities import ContentKind, ContentRecord, ContentStatus

# --- Validation Error ---


@dataclass(frozen=True)
class ContentValidationError:
    """Content validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CreateContentInput:
    """Input for creating a page, post, portfolio item or research paper."""

    kind: ContentKind
    title: str
    slug: str = ""
    excerpt: str = ""
    body: str = ""
    status: ContentStatus = "draft"
    meta_title: str = ""
    meta_description: str = ""
    featured_image: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UpdateContentInput:
    """Input for updating an existing record; body is replaced wholesale."""

    content_id: UUID
    updates: dict[str, Any]


@dataclass(frozen=True)
class GetContentInput:
    """Input for retrieving a record by id or by kind + slug."""

    content_id: UUID | None = None
    kind: ContentKind | None = None
    slug: str | None = None
    published_only: bool = False


@dataclass(frozen=True)
class ListContentInput:
    """Input for listing records with filters."""

    kind: ContentKind | None = None
    status: ContentStatus | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class SetStatusInput:
    """Input for publishing or unpublishing a record."""

    content_id: UUID
    status: ContentStatus


@dataclass(frozen=True)
class DeleteContentInput:
    """Input for deleting a record."""

    content_id: UUID


# --- Output Models ---


@dataclass(frozen=True)
class ContentOutput:
    """Output containing a single record."""

    content: ContentRecord | None
    errors: list[ContentValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContentListOutput:
    """Output containing a page of records."""

    items: list[ContentRecord]
    total: int
    limit: int
    offset: int
    errors: list[ContentValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContentOperationOutput:
    """Output for content operations (create, update, delete, status)."""

    content: ContentRecord | None = None
    errors: list[ContentValidationError] = field(default_factory=list)
    success: bool = True
