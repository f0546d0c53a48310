"""
Public Content API Routes.

Only published records are served; drafts are indistinguishable from
missing records.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from fixer_cms.adapters.rules_adapter import RulesAdapter
from fixer_cms.adapters.sqlite.repos import SQLiteContentRepo
from fixer_cms.api.deps import get_content_repo, get_rules_adapter
from fixer_cms.components.content import GetContentInput, public_path, run_get
from fixer_cms.components.render import RenderRecordMetadataInput, run_record_metadata
from fixer_cms.domain.entities import CONTENT_KINDS

router = APIRouter()


@router.get(
    "/{kind}/{slug}",
    responses={404: {"description": "Content not found"}},
)
def get_published(
    kind: str,
    slug: str,
    repo: SQLiteContentRepo = Depends(get_content_repo),
    rules: RulesAdapter = Depends(get_rules_adapter),
) -> dict[str, Any]:
    """Published record with its page metadata and rendered <head> markup."""
    if kind not in CONTENT_KINDS:
        raise HTTPException(status_code=404, detail="Content not found")

    result = run_get(
        GetContentInput(kind=kind, slug=slug, published_only=True),  # type: ignore[arg-type]
        repo=repo,
    )
    if not result.success or result.content is None:
        raise HTTPException(status_code=404, detail="Content not found")

    record = result.content
    rendered = run_record_metadata(RenderRecordMetadataInput(record=record), site_port=rules)
    if not rendered.success or rendered.metadata is None:
        raise HTTPException(status_code=404, detail="Content not found")

    return {
        "content": {
            "id": str(record.id),
            "kind": record.kind,
            "title": record.title,
            "slug": record.slug,
            "path": public_path(record.kind, record.slug),
            "excerpt": record.excerpt,
            "body": record.body,
            "tags": record.tags,
            "featured_image": record.featured_image,
            "published_at": record.published_at.isoformat() if record.published_at else None,
            "updated_at": record.updated_at.isoformat(),
        },
        "metadata": asdict(rendered.metadata),
        "head_html": rendered.head_html,
    }
