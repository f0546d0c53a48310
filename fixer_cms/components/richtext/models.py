"""
Richtext component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --- Validation Error ---


@dataclass(frozen=True)
class RichTextError:
    """Rich text error surfaced to callers."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SanitizeHtmlInput:
    """Input for running HTML through the sanitization gate."""

    html: str


@dataclass(frozen=True)
class ValidateUrlInput:
    """Input for validating a user-entered link or image URL."""

    url: str
    locale: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class SanitizeOutput:
    """Output for sanitized HTML."""

    html: str
    stripped_to_empty: bool = False
    errors: list[RichTextError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class UrlValidationOutput:
    """Output for URL validation."""

    is_valid: bool
    errors: list[RichTextError] = field(default_factory=list)
    success: bool = True
