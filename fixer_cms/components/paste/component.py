"""
Paste component - clipboard normalization in front of the sanitization gate.

Invariants:
- I1: Output always went through the sanitization gate
- I2: HTML clipboard data wins over plain text when both are present
- I3: Pre-clean is never relied upon for safety
"""

from __future__ import annotations

from fixer_cms.components.richtext import build_config as build_richtext_config
from fixer_cms.components.richtext import sanitize_html

from ._impl import DEFAULT_CONFIG, PasteConfig, prepare_paste
from .models import PasteInput, PasteOutput, PasteSource
from .ports import RulesPort


def build_config(rules: RulesPort | None) -> PasteConfig:
    """Build paste config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG
    return PasteConfig(heading_max_length=rules.get_heading_max_length())


def run_paste(
    inp: PasteInput,
    *,
    rules: RulesPort | None = None,
) -> PasteOutput:
    """
    Normalize clipboard data and sanitize the resulting fragment.

    Args:
        inp: Clipboard HTML and/or plain text.
        rules: Optional rules port for configuration.

    Returns:
        PasteOutput with the fragment and which clipboard branch was used.
    """
    source: PasteSource
    if inp.html and inp.html.strip():
        source = "html"
    elif inp.text and inp.text.strip():
        source = "text"
    else:
        return PasteOutput(html="", source="empty")

    fragment = prepare_paste(inp.html, inp.text, build_config(rules))
    return PasteOutput(
        html=sanitize_html(fragment, build_richtext_config(rules)),
        source=source,
    )


def run(inp: PasteInput, *, rules: RulesPort | None = None) -> PasteOutput:
    """Main entry point for the paste component."""
    return run_paste(inp, rules=rules)
