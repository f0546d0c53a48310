"""
Sitemap component - sitemap.xml and robots.txt.
"""

from ._impl import (
    DEFAULT_CONFIG,
    SITEMAP_NAMESPACE,
    KindSettings,
    SitemapConfig,
    SitemapEntry,
    StaticPage,
    build_sitemap_entries,
    render_robots_txt,
    render_sitemap_xml,
)
from .component import run, run_generate
from .models import GenerateSitemapInput, SitemapOutput
from .ports import PublishedContentPort, RulesPort

__all__ = [
    "run",
    "run_generate",
    "GenerateSitemapInput",
    "SitemapOutput",
    "PublishedContentPort",
    "RulesPort",
    "DEFAULT_CONFIG",
    "SITEMAP_NAMESPACE",
    "KindSettings",
    "SitemapConfig",
    "SitemapEntry",
    "StaticPage",
    "build_sitemap_entries",
    "render_robots_txt",
    "render_sitemap_xml",
]
