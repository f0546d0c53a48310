"""
Editor API Routes.

Stateless endpoints behind the admin rich-text editor: every HTML fragment
the browser wants to insert or store passes through the sanitization gate
here first.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from fixer_cms.adapters.rules_adapter import RulesAdapter
from fixer_cms.api.deps import get_rules_adapter
from fixer_cms.components.editor import EditInput, EditorEvent, run_edit
from fixer_cms.components.paste import PasteInput, run_paste
from fixer_cms.components.richtext import (
    SanitizeHtmlInput,
    ValidateUrlInput,
    run_sanitize,
    run_validate_url,
)

router = APIRouter()


class SanitizeRequest(BaseModel):
    html: str = ""


class SanitizeResponse(BaseModel):
    html: str
    stripped_to_empty: bool


class PasteRequest(BaseModel):
    html: str | None = None
    text: str | None = None


class PasteResponse(BaseModel):
    html: str
    source: str


class ValidateUrlRequest(BaseModel):
    url: str = ""
    locale: str | None = None


class ValidateUrlResponse(BaseModel):
    valid: bool
    code: str | None = None
    message: str | None = None


class EventRequest(BaseModel):
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)


class SessionRequest(BaseModel):
    """Stored content plus the events of one edit session."""

    content: str = ""
    events: list[EventRequest] = Field(default_factory=list)
    locale: str | None = None


class SessionResponse(BaseModel):
    content: str
    errors: list[dict[str, Any]]
    success: bool


# --- Routes ---


@router.post("/sanitize", response_model=SanitizeResponse)
def sanitize(
    request: SanitizeRequest,
    rules: RulesAdapter = Depends(get_rules_adapter),
) -> SanitizeResponse:
    """Run HTML through the sanitization gate."""
    result = run_sanitize(SanitizeHtmlInput(html=request.html), rules=rules)
    return SanitizeResponse(html=result.html, stripped_to_empty=result.stripped_to_empty)


@router.post("/paste", response_model=PasteResponse)
def paste(
    request: PasteRequest,
    rules: RulesAdapter = Depends(get_rules_adapter),
) -> PasteResponse:
    """Normalize clipboard contents into a sanitized fragment."""
    result = run_paste(PasteInput(html=request.html, text=request.text), rules=rules)
    return PasteResponse(html=result.html, source=result.source)


@router.post("/validate-url", response_model=ValidateUrlResponse)
def validate_url(
    request: ValidateUrlRequest,
    rules: RulesAdapter = Depends(get_rules_adapter),
) -> ValidateUrlResponse:
    """
    Check a link or image URL before insertion.

    Always 200; the message is localized for display in the modal.
    """
    locale = request.locale or rules.get_locale()
    result = run_validate_url(ValidateUrlInput(url=request.url, locale=locale), rules=rules)
    if result.is_valid:
        return ValidateUrlResponse(valid=True)

    error = result.errors[0]
    return ValidateUrlResponse(valid=False, code=error.code, message=error.message)


@router.post("/session", response_model=SessionResponse)
def edit_session(
    request: SessionRequest,
    rules: RulesAdapter = Depends(get_rules_adapter),
) -> SessionResponse:
    """Replay an edit session and return the committed document."""
    result = run_edit(
        EditInput(
            content=request.content,
            events=[
                EditorEvent(type=e.type, payload=e.payload)  # type: ignore[arg-type]
                for e in request.events
            ],
            locale=request.locale,
        ),
        rules=rules,
    )
    return SessionResponse(
        content=result.content,
        errors=[{"code": e.code, "message": e.message, "field": e.field} for e in result.errors],
        success=result.success,
    )
