"""
Content component - pages, blog posts, portfolio items and research papers.

Every save runs the record body through the sanitization gate; the stored
field is overwritten wholesale (single writer, no merge).

Status rules:
- draft → published sets published_at (only if not already set)
- published → draft clears published_at
- Any save is reported to the publish notifier with the public path

Guards:
- G1: title required and within the configured length
- G2: slug lowercase ASCII words joined by hyphens, unique per kind
- G3: featured_image must pass the URL gate
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from fixer_cms.components.richtext import (
    DEFAULT_CONFIG as DEFAULT_RICHTEXT_CONFIG,
)
from fixer_cms.components.richtext import (
    RichTextConfig,
    is_valid_url,
    sanitize_html,
    strip_tags,
)
from fixer_cms.components.richtext import build_config as build_richtext_config
from fixer_cms.domain.entities import (
    CONTENT_KINDS,
    ContentKind,
    ContentRecord,
    ContentStatus,
)

from .models import (
    ContentListOutput,
    ContentOperationOutput,
    ContentOutput,
    ContentValidationError,
    CreateContentInput,
    DeleteContentInput,
    GetContentInput,
    ListContentInput,
    SetStatusInput,
    UpdateContentInput,
)
from .ports import ContentRepoPort, PublishNotifierPort, RulesPort, TimePort

logger = logging.getLogger(__name__)

# --- Default Configuration ---

PUBLIC_PATH_PREFIXES: dict[str, str] = {
    "page": "",
    "post": "/blog",
    "portfolio": "/portfolio",
    "research": "/research",
}

UPDATABLE_FIELDS = frozenset(
    [
        "title",
        "slug",
        "excerpt",
        "body",
        "status",
        "meta_title",
        "meta_description",
        "featured_image",
        "tags",
    ]
)

AUTO_EXCERPT_LENGTH = 160


@dataclass(frozen=True)
class ContentConfig:
    """Content rules."""

    kinds: tuple[str, ...] = CONTENT_KINDS
    title_max_length: int = 200
    excerpt_max_length: int = 500
    richtext: RichTextConfig = field(default_factory=lambda: DEFAULT_RICHTEXT_CONFIG)


def _build_config(rules: RulesPort | None) -> ContentConfig:
    """Build content config from rules port."""
    if rules is None:
        return ContentConfig()

    return ContentConfig(
        kinds=tuple(rules.get_content_kinds()),
        title_max_length=rules.get_title_max_length(),
        excerpt_max_length=rules.get_excerpt_max_length(),
        richtext=build_richtext_config(rules),
    )


# --- Slugs & paths ---

_HEBREW_AND_BIDI_MARKS = re.compile(r"[\u0590-\u05FF\u200E\u200F]")
_NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_SEPARATORS = re.compile(r"[\s_-]+", re.ASCII)
_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(text: str | None) -> str:
    """
    URL slug from a title.

    Hebrew letters and bidi marks are dropped, so an all-Hebrew title
    yields an empty slug.
    """
    if not text or not text.strip():
        return ""

    slug = text.lower().strip()
    slug = _HEBREW_AND_BIDI_MARKS.sub("", slug)
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _SLUG_SEPARATORS.sub("-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG_PATTERN.match(slug))


def public_path(kind: str, slug: str) -> str:
    """Public URL path of a record."""
    return f"{PUBLIC_PATH_PREFIXES.get(kind, '')}/{slug}"


def _fallback_slug(record: ContentRecord) -> str:
    return f"{record.kind}-{record.id.hex[:8]}"


def _normalize_tags(tags: list[str]) -> list[str]:
    seen: list[str] = []
    for tag in tags:
        cleaned = " ".join(str(tag).split())
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


# --- Validation ---


def validate_record(
    record: ContentRecord,
    config: ContentConfig,
) -> list[ContentValidationError]:
    """Field checks that do not need the repository."""
    errors: list[ContentValidationError] = []

    if record.kind not in config.kinds:
        errors.append(
            ContentValidationError(
                code="kind_invalid",
                message=f"Content kind '{record.kind}' is not enabled",
                field="kind",
            )
        )

    if not record.title.strip():
        errors.append(
            ContentValidationError(
                code="title_required", message="Title is required", field="title"
            )
        )
    elif len(record.title) > config.title_max_length:
        errors.append(
            ContentValidationError(
                code="title_too_long",
                message=f"Title must be at most {config.title_max_length} characters",
                field="title",
            )
        )

    if not is_valid_slug(record.slug):
        errors.append(
            ContentValidationError(
                code="slug_invalid",
                message="Slug must contain only lowercase letters, numbers, and hyphens",
                field="slug",
            )
        )

    if len(record.excerpt) > config.excerpt_max_length:
        errors.append(
            ContentValidationError(
                code="excerpt_too_long",
                message=f"Excerpt must be at most {config.excerpt_max_length} characters",
                field="excerpt",
            )
        )

    if record.featured_image and not is_valid_url(record.featured_image, config.richtext):
        errors.append(
            ContentValidationError(
                code="rejected_url",
                message="Featured image must be an http(s) URL",
                field="featured_image",
            )
        )

    return errors


def _slug_conflict(
    record: ContentRecord,
    repo: ContentRepoPort,
) -> ContentValidationError | None:
    existing = repo.get_by_slug(record.kind, record.slug)
    if existing is not None and existing.id != record.id:
        return ContentValidationError(
            code="slug_taken",
            message=f"Slug '{record.slug}' is already used by another {record.kind}",
            field="slug",
        )
    return None


def prepare_record(record: ContentRecord, config: ContentConfig) -> ContentRecord:
    """Normalize a record before validation: gate the body, fill derived fields."""
    body = sanitize_html(record.body, config.richtext)
    excerpt = record.excerpt.strip()
    if not excerpt and body:
        text = strip_tags(body)
        excerpt = text if len(text) <= AUTO_EXCERPT_LENGTH else text[:AUTO_EXCERPT_LENGTH].rstrip()

    slug = slugify(record.slug) if record.slug else slugify(record.title)
    if not slug and not record.slug:
        slug = _fallback_slug(record)

    return record.model_copy(
        update={
            "title": record.title.strip(),
            "slug": slug,
            "body": body,
            "excerpt": excerpt,
            "meta_title": record.meta_title.strip(),
            "meta_description": record.meta_description.strip(),
            "featured_image": (record.featured_image or "").strip() or None,
            "tags": _normalize_tags(record.tags),
        }
    )


def _apply_status(
    record: ContentRecord,
    old_status: ContentStatus | None,
    time: TimePort,
) -> ContentRecord:
    if record.status == "published" and record.published_at is None:
        return record.model_copy(update={"published_at": time.now_utc()})
    if record.status == "draft" and old_status == "published":
        return record.model_copy(update={"published_at": None})
    return record


def _notify(
    notifier: PublishNotifierPort | None,
    record: ContentRecord,
    old_status: ContentStatus | None,
    new_status: ContentStatus,
) -> None:
    if notifier is None:
        return
    notifier.on_status_change(public_path(record.kind, record.slug), old_status, new_status)


def _save(
    record: ContentRecord,
    old_status: ContentStatus | None,
    *,
    repo: ContentRepoPort,
    time: TimePort,
    config: ContentConfig,
    notifier: PublishNotifierPort | None,
    previous: ContentRecord | None = None,
) -> ContentOperationOutput:
    record = prepare_record(record, config)

    errors = validate_record(record, config)
    if not errors:
        conflict = _slug_conflict(record, repo)
        if conflict:
            errors.append(conflict)
    if errors:
        return ContentOperationOutput(content=None, errors=errors, success=False)

    record = _apply_status(record, old_status, time)
    saved = repo.save(record)
    logger.info("Saved %s %s (%s)", saved.kind, saved.slug, saved.status)

    if previous is not None and previous.status == "published" and previous.slug != saved.slug:
        # The old public URL is gone, same as a delete
        _notify(notifier, previous, "published", "draft")
    _notify(notifier, saved, old_status, saved.status)
    return ContentOperationOutput(content=saved, success=True)


# --- Component Entry Points ---


def run_create(
    inp: CreateContentInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
    rules: RulesPort | None = None,
    notifier: PublishNotifierPort | None = None,
) -> ContentOperationOutput:
    """
    Create a new record.

    Args:
        inp: Record fields; slug defaults to the slugified title.
        repo: Content repository port.
        time: Time port.
        rules: Optional rules port for configuration.
        notifier: Optional publish notifier.

    Returns:
        ContentOperationOutput with the stored record or errors.
    """
    now = time.now_utc()
    record = ContentRecord(
        kind=inp.kind,
        title=inp.title,
        slug=inp.slug,
        excerpt=inp.excerpt,
        body=inp.body,
        status=inp.status,
        meta_title=inp.meta_title,
        meta_description=inp.meta_description,
        featured_image=inp.featured_image,
        tags=list(inp.tags),
        created_at=now,
        updated_at=now,
    )
    return _save(
        record,
        None,
        repo=repo,
        time=time,
        config=_build_config(rules),
        notifier=notifier,
    )


def run_update(
    inp: UpdateContentInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
    rules: RulesPort | None = None,
    notifier: PublishNotifierPort | None = None,
) -> ContentOperationOutput:
    """Overwrite the given fields of an existing record."""
    existing = repo.get_by_id(inp.content_id)
    if existing is None:
        return ContentOperationOutput(
            errors=[ContentValidationError(code="not_found", message="Content not found")],
            success=False,
        )

    unknown = sorted(set(inp.updates) - UPDATABLE_FIELDS)
    if unknown:
        return ContentOperationOutput(
            errors=[
                ContentValidationError(
                    code="field_not_updatable",
                    message=f"Cannot update fields: {', '.join(unknown)}",
                    field=unknown[0],
                )
            ],
            success=False,
        )

    updates: dict[str, Any] = dict(inp.updates)
    updates["updated_at"] = time.now_utc()
    try:
        record = ContentRecord.model_validate({**existing.model_dump(), **updates})
    except ValueError as e:
        return ContentOperationOutput(
            errors=[ContentValidationError(code="invalid_value", message=str(e))],
            success=False,
        )

    return _save(
        record,
        existing.status,
        repo=repo,
        time=time,
        config=_build_config(rules),
        notifier=notifier,
        previous=existing,
    )


def run_set_status(
    inp: SetStatusInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
    rules: RulesPort | None = None,
    notifier: PublishNotifierPort | None = None,
) -> ContentOperationOutput:
    """Publish or unpublish a record."""
    return run_update(
        UpdateContentInput(content_id=inp.content_id, updates={"status": inp.status}),
        repo=repo,
        time=time,
        rules=rules,
        notifier=notifier,
    )


def run_get(
    inp: GetContentInput,
    *,
    repo: ContentRepoPort,
) -> ContentOutput:
    """Get a record by id, or by kind and slug."""
    record: ContentRecord | None = None
    if inp.content_id is not None:
        record = repo.get_by_id(inp.content_id)
    elif inp.kind is not None and inp.slug:
        record = repo.get_by_slug(inp.kind, inp.slug)
    else:
        return ContentOutput(
            content=None,
            errors=[
                ContentValidationError(
                    code="lookup_required",
                    message="Provide content_id, or kind and slug",
                )
            ],
            success=False,
        )

    if record is None or (inp.published_only and not record.is_published):
        return ContentOutput(
            content=None,
            errors=[ContentValidationError(code="not_found", message="Content not found")],
            success=False,
        )
    return ContentOutput(content=record)


def run_list(
    inp: ListContentInput,
    *,
    repo: ContentRepoPort,
) -> ContentListOutput:
    """List records, newest first."""
    limit = max(1, min(inp.limit, 200))
    offset = max(0, inp.offset)
    items, total = repo.list(kind=inp.kind, status=inp.status, limit=limit, offset=offset)
    return ContentListOutput(items=items, total=total, limit=limit, offset=offset)


def run_delete(
    inp: DeleteContentInput,
    *,
    repo: ContentRepoPort,
    notifier: PublishNotifierPort | None = None,
) -> ContentOperationOutput:
    """Delete a record; a published one is reported as leaving the site."""
    existing = repo.get_by_id(inp.content_id)
    if existing is None:
        return ContentOperationOutput(
            errors=[ContentValidationError(code="not_found", message="Content not found")],
            success=False,
        )

    repo.delete(inp.content_id)
    logger.info("Deleted %s %s", existing.kind, existing.slug)
    if existing.is_published:
        _notify(notifier, existing, "published", "draft")
    return ContentOperationOutput(content=existing, success=True)


def run(
    inp: CreateContentInput
    | UpdateContentInput
    | GetContentInput
    | ListContentInput
    | SetStatusInput
    | DeleteContentInput,
    *,
    repo: ContentRepoPort,
    time: TimePort,
    rules: RulesPort | None = None,
    notifier: PublishNotifierPort | None = None,
) -> ContentOperationOutput | ContentOutput | ContentListOutput:
    """
    Main entry point for the content component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, CreateContentInput):
        return run_create(inp, repo=repo, time=time, rules=rules, notifier=notifier)
    elif isinstance(inp, UpdateContentInput):
        return run_update(inp, repo=repo, time=time, rules=rules, notifier=notifier)
    elif isinstance(inp, SetStatusInput):
        return run_set_status(inp, repo=repo, time=time, rules=rules, notifier=notifier)
    elif isinstance(inp, GetContentInput):
        return run_get(inp, repo=repo)
    elif isinstance(inp, ListContentInput):
        return run_list(inp, repo=repo)
    elif isinstance(inp, DeleteContentInput):
        return run_delete(inp, repo=repo, notifier=notifier)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")


__all__ = [
    "ContentConfig",
    "ContentKind",
    "PUBLIC_PATH_PREFIXES",
    "is_valid_slug",
    "prepare_record",
    "public_path",
    "run",
    "run_create",
    "run_delete",
    "run_get",
    "run_list",
    "run_set_status",
    "run_update",
    "slugify",
    "validate_record",
]
