"""
Sitemap builder.

Static pages come from rules; every published content record is added at
its public path with the per-kind priority and change frequency.
Drafts never appear.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from xml.sax.saxutils import escape

from fixer_cms.components.content import public_path
from fixer_cms.domain.entities import ContentRecord

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


@dataclass(frozen=True)
class SitemapEntry:
    """Entry for sitemap generation."""

    loc: str
    lastmod: str | None = None
    changefreq: str | None = None
    priority: float | None = None


@dataclass(frozen=True)
class StaticPage:
    path: str
    priority: float
    changefreq: str


@dataclass(frozen=True)
class KindSettings:
    priority: float
    changefreq: str


@dataclass(frozen=True)
class SitemapConfig:
    """Sitemap rules."""

    base_url: str = "http://localhost"
    static_pages: tuple[StaticPage, ...] = (StaticPage("/", 1.0, "weekly"),)
    kinds: dict[str, KindSettings] = field(
        default_factory=lambda: {
            "page": KindSettings(0.7, "monthly"),
            "post": KindSettings(0.8, "weekly"),
            "portfolio": KindSettings(0.7, "monthly"),
            "research": KindSettings(0.7, "monthly"),
        }
    )


DEFAULT_CONFIG = SitemapConfig()


def _loc(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}{path}"


def build_sitemap_entries(
    records: list[ContentRecord],
    config: SitemapConfig = DEFAULT_CONFIG,
    today: date | None = None,
) -> list[SitemapEntry]:
    """
    Static pages first, then published records in the given order.

    Records of kinds without sitemap settings are skipped.
    """
    lastmod_today = (today or date.today()).isoformat()

    entries = [
        SitemapEntry(
            loc=_loc(config.base_url, page.path),
            lastmod=lastmod_today,
            changefreq=page.changefreq,
            priority=page.priority,
        )
        for page in config.static_pages
    ]

    for record in records:
        if not record.is_published:
            continue
        settings = config.kinds.get(record.kind)
        if settings is None:
            continue
        entries.append(
            SitemapEntry(
                loc=_loc(config.base_url, public_path(record.kind, record.slug)),
                lastmod=record.updated_at.strftime("%Y-%m-%d"),
                changefreq=settings.changefreq,
                priority=settings.priority,
            )
        )

    return entries


def render_sitemap_xml(entries: list[SitemapEntry]) -> str:
    """
    Render sitemap entries to XML string.

    Args:
        entries: List of SitemapEntry objects

    Returns:
        Valid sitemap.xml content
    """
    xml_parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<urlset xmlns="{SITEMAP_NAMESPACE}">',
    ]

    for entry in entries:
        xml_parts.append("  <url>")
        xml_parts.append(f"    <loc>{escape(entry.loc)}</loc>")
        if entry.lastmod:
            xml_parts.append(f"    <lastmod>{entry.lastmod}</lastmod>")
        if entry.changefreq:
            xml_parts.append(f"    <changefreq>{entry.changefreq}</changefreq>")
        if entry.priority is not None:
            xml_parts.append(f"    <priority>{entry.priority:.1f}</priority>")
        xml_parts.append("  </url>")

    xml_parts.append("</urlset>")
    return "\n".join(xml_parts)


def render_robots_txt(base_url: str) -> str:
    """Allow everything except the admin API and point crawlers at the sitemap."""
    return "\n".join(
        [
            "User-agent: *",
            "Allow: /",
            "Disallow: /api/",
            "",
            f"Sitemap: {_loc(base_url, '/sitemap.xml')}",
            "",
        ]
    )
