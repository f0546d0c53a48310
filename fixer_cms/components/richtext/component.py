"""
Richtext component - the sanitization gate and the URL gate.

Invariants:
- I1: Only allow-listed tags and attributes reach the output
- I2: script/style never survive, content included
- I3: style, on* and data-* attributes never survive
- I4: href/src always match the safe URI pattern
- I5: Sanitizing sanitized output is a no-op
"""

from __future__ import annotations

import logging

from ._impl import DEFAULT_CONFIG, RichTextConfig, is_valid_url, sanitize_html
from .messages import get_message
from .models import (
    RichTextError,
    SanitizeHtmlInput,
    SanitizeOutput,
    UrlValidationOutput,
    ValidateUrlInput,
)
from .ports import RulesPort

logger = logging.getLogger(__name__)


def build_config(rules: RulesPort | None) -> RichTextConfig:
    """Build rich text config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG

    return RichTextConfig(
        allow_tags=rules.get_allowed_tags(),
        allow_attrs=rules.get_allowed_attrs(),
        url_schemes=rules.get_url_schemes(),
    )


# --- Component Entry Points ---


def run_sanitize(
    inp: SanitizeHtmlInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeOutput:
    """
    Run HTML through the sanitization gate.

    An input reduced to nothing (e.g. only a script tag) is a successful
    result; stripped_to_empty reports it for the caller's information.
    """
    config = build_config(rules)
    cleaned = sanitize_html(inp.html, config)

    return SanitizeOutput(
        html=cleaned,
        stripped_to_empty=bool(inp.html and inp.html.strip()) and not cleaned.strip(),
        success=True,
    )


def run_validate_url(
    inp: ValidateUrlInput,
    *,
    rules: RulesPort | None = None,
) -> UrlValidationOutput:
    """Check a user-entered link or image URL before it is embedded."""
    if not inp.url or not inp.url.strip():
        return UrlValidationOutput(
            is_valid=False,
            errors=[
                RichTextError(
                    code="url_required",
                    message=get_message("url_required", inp.locale),
                    field="url",
                )
            ],
        )

    config = build_config(rules)
    if is_valid_url(inp.url, config):
        return UrlValidationOutput(is_valid=True)

    logger.info("Rejected URL: %.60s", inp.url)
    return UrlValidationOutput(
        is_valid=False,
        errors=[
            RichTextError(
                code="rejected_url",
                message=get_message("rejected_url", inp.locale),
                field="url",
            )
        ],
    )


def run(
    inp: SanitizeHtmlInput | ValidateUrlInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeOutput | UrlValidationOutput:
    """
    Main entry point for the richtext component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, SanitizeHtmlInput):
        return run_sanitize(inp, rules=rules)
    elif isinstance(inp, ValidateUrlInput):
        return run_validate_url(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
