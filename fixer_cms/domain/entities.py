from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
ContentKind = Literal["page", "post", "portfolio", "research"]
ContentStatus = Literal["draft", "published"]

CONTENT_KINDS: tuple[ContentKind, ...] = ("page", "post", "portfolio", "research")


def utc_now() -> datetime:
    return datetime.now(UTC)


# --- Content ---

class ContentRecord(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    kind: ContentKind
    title: str
    slug: str
    excerpt: str = ""
    # Sanitized Content Document; only ever written through the gate
    body: str = ""
    status: ContentStatus = "draft"

    meta_title: str = ""
    meta_description: str = ""
    featured_image: str | None = None
    tags: list[str] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    published_at: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.status == "published"
