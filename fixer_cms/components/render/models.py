"""
Render component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fixer_cms.domain.entities import ContentRecord

from ._impl import PageMetadata

# --- Validation Error ---


@dataclass(frozen=True)
class RenderValidationError:
    """Render validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class RenderRecordMetadataInput:
    """Input for rendering a content record's page metadata."""

    record: ContentRecord


@dataclass(frozen=True)
class RenderStaticMetadataInput:
    """Input for rendering a hand-written page's metadata."""

    path: str = "/"
    title: str | None = None
    description: str = ""
    og_image_url: str | None = None
    faqs: list[tuple[str, str]] = field(default_factory=list)


# --- Output Models ---


@dataclass(frozen=True)
class RenderOutput:
    """Output containing page metadata and its head markup."""

    metadata: PageMetadata | None
    head_html: str = ""
    errors: list[RenderValidationError] = field(default_factory=list)
    success: bool = True
