"""
Sitemap component - sitemap.xml for published content.

Invariants:
- I1: Drafts are never listed
- I2: Every <loc> is XML-escaped
"""

from __future__ import annotations

import logging

from ._impl import DEFAULT_CONFIG, build_sitemap_entries, render_sitemap_xml
from .models import GenerateSitemapInput, SitemapOutput
from .ports import PublishedContentPort, RulesPort

logger = logging.getLogger(__name__)


def run_generate(
    inp: GenerateSitemapInput,
    *,
    content: PublishedContentPort,
    rules: RulesPort | None = None,
) -> SitemapOutput:
    """Build the sitemap from the static pages and the published records."""
    config = rules.get_sitemap_config() if rules else DEFAULT_CONFIG
    entries = build_sitemap_entries(content.list_published(), config, inp.today)
    logger.debug("Generated sitemap with %d entries", len(entries))
    return SitemapOutput(entries=entries, xml=render_sitemap_xml(entries))


def run(
    inp: GenerateSitemapInput,
    *,
    content: PublishedContentPort,
    rules: RulesPort | None = None,
) -> SitemapOutput:
    """Main entry point for the sitemap component."""
    if isinstance(inp, GenerateSitemapInput):
        return run_generate(inp, content=content, rules=rules)
    raise ValueError(f"Unknown input type: {type(inp)}")
