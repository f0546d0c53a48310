"""
Admin Content API Routes.

CRUD for pages, blog posts, portfolio items and research papers. Bodies
are sanitized by the content component on every save; publish changes
ping IndexNow after the response is sent.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from fixer_cms.adapters.clock import SystemClock
from fixer_cms.adapters.rules_adapter import RulesAdapter
from fixer_cms.adapters.sqlite.repos import SQLiteContentRepo
from fixer_cms.api.deps import (
    get_clock,
    get_content_repo,
    get_publish_notifier,
    get_rules_adapter,
)
from fixer_cms.components.content import (
    ContentValidationError,
    CreateContentInput,
    DeleteContentInput,
    GetContentInput,
    ListContentInput,
    SetStatusInput,
    UpdateContentInput,
    public_path,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_set_status,
    run_update,
)
from fixer_cms.components.indexnow import PublishNotifier
from fixer_cms.domain.entities import ContentKind, ContentRecord, ContentStatus

router = APIRouter()


class CreateContentRequest(BaseModel):
    kind: ContentKind
    title: str
    slug: str = ""
    excerpt: str = ""
    body: str = ""
    status: ContentStatus = "draft"
    meta_title: str = ""
    meta_description: str = ""
    featured_image: str | None = None
    tags: list[str] = Field(default_factory=list)


class UpdateContentRequest(BaseModel):
    """Fields to overwrite; omitted fields are kept."""

    title: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    body: str | None = None
    status: ContentStatus | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    featured_image: str | None = None
    tags: list[str] | None = None


class SetStatusRequest(BaseModel):
    status: ContentStatus


class ContentResponse(BaseModel):
    id: str
    kind: str
    title: str
    slug: str
    path: str
    excerpt: str
    body: str
    status: str
    meta_title: str
    meta_description: str
    featured_image: str | None
    tags: list[str]
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None


class ContentListResponse(BaseModel):
    items: list[ContentResponse]
    total: int
    limit: int
    offset: int


# --- Helper Functions ---


class _DeferredNotifier:
    """Queues publish pings as background tasks."""

    def __init__(self, background_tasks: BackgroundTasks, notifier: PublishNotifier):
        self._tasks = background_tasks
        self._notifier = notifier

    def on_status_change(
        self,
        path: str,
        old_status: ContentStatus | None,
        new_status: ContentStatus,
    ) -> None:
        self._tasks.add_task(self._notifier.on_status_change, path, old_status, new_status)


def _to_response(record: ContentRecord) -> ContentResponse:
    return ContentResponse(
        id=str(record.id),
        kind=record.kind,
        title=record.title,
        slug=record.slug,
        path=public_path(record.kind, record.slug),
        excerpt=record.excerpt,
        body=record.body,
        status=record.status,
        meta_title=record.meta_title,
        meta_description=record.meta_description,
        featured_image=record.featured_image,
        tags=record.tags,
        created_at=record.created_at,
        updated_at=record.updated_at,
        published_at=record.published_at,
    )


def _serialize_errors(errors: list[ContentValidationError]) -> list[dict[str, Any]]:
    return [{"code": e.code, "message": e.message, "field": e.field} for e in errors]


def _raise_for_errors(errors: list[ContentValidationError]) -> None:
    if any(e.code == "not_found" for e in errors):
        raise HTTPException(status_code=404, detail="Content not found")
    status_code = 422 if any(e.code == "rejected_url" for e in errors) else 400
    raise HTTPException(status_code=status_code, detail={"errors": _serialize_errors(errors)})


# --- Routes ---


@router.get("", response_model=ContentListResponse)
def list_content(
    kind: ContentKind | None = None,
    status: ContentStatus | None = None,
    limit: int = 50,
    offset: int = 0,
    repo: SQLiteContentRepo = Depends(get_content_repo),
) -> ContentListResponse:
    """List records, most recently updated first."""
    result = run_list(
        ListContentInput(kind=kind, status=status, limit=limit, offset=offset), repo=repo
    )
    return ContentListResponse(
        items=[_to_response(r) for r in result.items],
        total=result.total,
        limit=result.limit,
        offset=result.offset,
    )


@router.post("", response_model=ContentResponse, status_code=201)
def create_content(
    request: CreateContentRequest,
    background_tasks: BackgroundTasks,
    repo: SQLiteContentRepo = Depends(get_content_repo),
    clock: SystemClock = Depends(get_clock),
    rules: RulesAdapter = Depends(get_rules_adapter),
    notifier: PublishNotifier = Depends(get_publish_notifier),
) -> ContentResponse:
    """Create a record; the body is sanitized before it is stored."""
    result = run_create(
        CreateContentInput(**request.model_dump()),
        repo=repo,
        time=clock,
        rules=rules,
        notifier=_DeferredNotifier(background_tasks, notifier),
    )
    if not result.success:
        _raise_for_errors(result.errors)

    assert result.content is not None
    return _to_response(result.content)


@router.get(
    "/{content_id}",
    response_model=ContentResponse,
    responses={404: {"description": "Content not found"}},
)
def get_content(
    content_id: UUID,
    repo: SQLiteContentRepo = Depends(get_content_repo),
) -> ContentResponse:
    result = run_get(GetContentInput(content_id=content_id), repo=repo)
    if not result.success:
        _raise_for_errors(result.errors)

    assert result.content is not None
    return _to_response(result.content)


@router.put("/{content_id}", response_model=ContentResponse)
def update_content(
    content_id: UUID,
    request: UpdateContentRequest,
    background_tasks: BackgroundTasks,
    repo: SQLiteContentRepo = Depends(get_content_repo),
    clock: SystemClock = Depends(get_clock),
    rules: RulesAdapter = Depends(get_rules_adapter),
    notifier: PublishNotifier = Depends(get_publish_notifier),
) -> ContentResponse:
    """Overwrite the given fields; the body is replaced wholesale."""
    updates = request.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No updates provided")

    result = run_update(
        UpdateContentInput(content_id=content_id, updates=updates),
        repo=repo,
        time=clock,
        rules=rules,
        notifier=_DeferredNotifier(background_tasks, notifier),
    )
    if not result.success:
        _raise_for_errors(result.errors)

    assert result.content is not None
    return _to_response(result.content)


@router.post("/{content_id}/status", response_model=ContentResponse)
def set_status(
    content_id: UUID,
    request: SetStatusRequest,
    background_tasks: BackgroundTasks,
    repo: SQLiteContentRepo = Depends(get_content_repo),
    clock: SystemClock = Depends(get_clock),
    rules: RulesAdapter = Depends(get_rules_adapter),
    notifier: PublishNotifier = Depends(get_publish_notifier),
) -> ContentResponse:
    """Publish or unpublish a record."""
    result = run_set_status(
        SetStatusInput(content_id=content_id, status=request.status),
        repo=repo,
        time=clock,
        rules=rules,
        notifier=_DeferredNotifier(background_tasks, notifier),
    )
    if not result.success:
        _raise_for_errors(result.errors)

    assert result.content is not None
    return _to_response(result.content)


@router.delete("/{content_id}", status_code=204, response_class=Response)
def delete_content(
    content_id: UUID,
    background_tasks: BackgroundTasks,
    repo: SQLiteContentRepo = Depends(get_content_repo),
    notifier: PublishNotifier = Depends(get_publish_notifier),
) -> Response:
    result = run_delete(
        DeleteContentInput(content_id=content_id),
        repo=repo,
        notifier=_DeferredNotifier(background_tasks, notifier),
    )
    if not result.success:
        _raise_for_errors(result.errors)
    return Response(status_code=204)
