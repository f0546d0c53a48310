"""
Richtext component - HTML sanitization gate and URL validation gate.
"""

from ._impl import (
    CLEAN_CONTENT_TAGS,
    DEFAULT_ALLOWED_ATTRS,
    DEFAULT_ALLOWED_TAGS,
    DEFAULT_CONFIG,
    DEFAULT_URL_SCHEMES,
    FORBIDDEN_TAGS,
    SAFE_URI_PATTERN,
    RichTextConfig,
    RichTextService,
    create_rich_text_service,
    is_safe_uri,
    is_valid_url,
    sanitize_html,
    strip_tags,
)
from .component import (
    build_config,
    run,
    run_sanitize,
    run_validate_url,
)
from .messages import DEFAULT_LOCALE, MESSAGES, get_message
from .models import (
    RichTextError,
    SanitizeHtmlInput,
    SanitizeOutput,
    UrlValidationOutput,
    ValidateUrlInput,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_sanitize",
    "run_validate_url",
    "build_config",
    # Input models
    "SanitizeHtmlInput",
    "ValidateUrlInput",
    # Output models
    "SanitizeOutput",
    "UrlValidationOutput",
    "RichTextError",
    # Ports
    "RulesPort",
    # Gate
    "CLEAN_CONTENT_TAGS",
    "DEFAULT_ALLOWED_ATTRS",
    "DEFAULT_ALLOWED_TAGS",
    "DEFAULT_CONFIG",
    "DEFAULT_URL_SCHEMES",
    "FORBIDDEN_TAGS",
    "SAFE_URI_PATTERN",
    "RichTextConfig",
    "RichTextService",
    "create_rich_text_service",
    "is_safe_uri",
    "is_valid_url",
    "sanitize_html",
    "strip_tags",
    # Messages
    "DEFAULT_LOCALE",
    "MESSAGES",
    "get_message",
]
