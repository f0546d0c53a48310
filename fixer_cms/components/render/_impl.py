"""
Page metadata builder.

One value object per public page instead of scattered head mutation:
the metadata is built from a content record (or a static page) plus site
settings, and committed to markup in exactly one place, render_head().

Key behaviors:
- Builds <title>, meta description, canonical URL
- Generates OG, article and Twitter Card meta tags
- Resolves OG image with fallback chain
- Article, FAQ and breadcrumb structured data (JSON-LD)
- Pure functions: same inputs always produce same outputs
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from html import escape
from typing import Any

from fixer_cms.components.content import public_path
from fixer_cms.domain.entities import ContentRecord

DEFAULT_ROBOTS = "index, follow, max-snippet:-1, max-image-preview:large, max-video-preview:-1"
HOME_BREADCRUMB = "בית"
SCHEMA_CONTEXT = "https://schema.org"
DESCRIPTION_MAX_LENGTH = 160
OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630

# --- Site Settings ---


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide settings used for every page."""

    base_url: str = "http://localhost"
    site_name: str = ""
    locale: str = "he"
    og_locale: str = "he_IL"
    default_author: str = ""
    default_og_image: str | None = None
    twitter_handle: str = ""
    logo_url: str | None = None


DEFAULT_SITE = SiteConfig()

# --- Metadata Models ---


@dataclass(frozen=True)
class MetaTag:
    """HTML meta tag representation."""

    name: str | None = None
    property: str | None = None  # For OG tags
    content: str = ""


@dataclass(frozen=True)
class PageMetadata:
    """
    Complete page metadata for SSR rendering.

    Contains all data needed to render <head> content.
    """

    title: str
    description: str
    canonical_url: str
    robots: str = DEFAULT_ROBOTS
    keywords: tuple[str, ...] = ()
    author: str = ""
    lang: str = "he"

    # OpenGraph tags
    og_type: str = "website"
    og_image: str = ""
    og_image_alt: str = ""
    og_site_name: str = ""
    og_locale: str = "he_IL"

    # Article tags
    published_time: str | None = None
    modified_time: str | None = None

    # Twitter Card tags
    twitter_card: str = "summary_large_image"
    twitter_site: str = ""

    structured_data: tuple[dict[str, Any], ...] = field(default_factory=tuple)

    def to_meta_tags(self) -> list[MetaTag]:
        """Convert to list of MetaTag objects for rendering."""
        tags = [MetaTag(name="description", content=self.description)]
        if self.keywords:
            tags.append(MetaTag(name="keywords", content=", ".join(self.keywords)))
        if self.author:
            tags.append(MetaTag(name="author", content=self.author))
        tags.append(MetaTag(name="robots", content=self.robots))

        tags.extend(
            [
                MetaTag(property="og:title", content=self.title),
                MetaTag(property="og:description", content=self.description),
                MetaTag(property="og:type", content=self.og_type),
                MetaTag(property="og:url", content=self.canonical_url),
                MetaTag(property="og:locale", content=self.og_locale),
            ]
        )
        if self.og_site_name:
            tags.append(MetaTag(property="og:site_name", content=self.og_site_name))

        if self.og_image:
            tags.extend(
                [
                    MetaTag(property="og:image", content=self.og_image),
                    MetaTag(property="og:image:width", content=str(OG_IMAGE_WIDTH)),
                    MetaTag(property="og:image:height", content=str(OG_IMAGE_HEIGHT)),
                    MetaTag(property="og:image:alt", content=self.og_image_alt or self.title),
                ]
            )

        if self.published_time:
            tags.append(MetaTag(property="article:published_time", content=self.published_time))
            tags.append(MetaTag(property="article:author", content=self.author))
        if self.modified_time:
            tags.append(MetaTag(property="article:modified_time", content=self.modified_time))

        # Twitter Card
        tags.extend(
            [
                MetaTag(name="twitter:card", content=self.twitter_card),
                MetaTag(name="twitter:title", content=self.title),
                MetaTag(name="twitter:description", content=self.description),
            ]
        )
        if self.twitter_site:
            tags.append(MetaTag(name="twitter:site", content=self.twitter_site))
            tags.append(MetaTag(name="twitter:creator", content=self.twitter_site))
        if self.og_image:
            tags.append(MetaTag(name="twitter:image", content=self.og_image))
            tags.append(MetaTag(name="twitter:image:alt", content=self.og_image_alt or self.title))

        return tags


# --- Image Resolution ---


@dataclass(frozen=True)
class ImageInfo:
    """Resolved image information."""

    url: str
    alt: str = ""


def resolve_og_image(
    content_image_url: str | None,
    default_image_url: str | None = None,
    alt: str = "",
) -> ImageInfo | None:
    """
    Resolve OG image using fallback chain.

    Resolution order:
    1. Content-specific image (highest priority)
    2. Site default image

    Returns None if no image available.
    """
    if content_image_url:
        return ImageInfo(url=content_image_url, alt=alt)
    if default_image_url:
        return ImageInfo(url=default_image_url, alt=alt)
    return None


# --- Canonical URL Building ---


def build_canonical_url(base_url: str, path: str) -> str:
    """
    Build canonical URL from base URL and path.

    Ensures proper URL formatting.
    """
    base = base_url.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path

    return f"{base}{path}"


# --- Description Truncation ---


def truncate_description(text: str, max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    """
    Truncate description to fit meta description limits.

    Breaks at word boundary if possible.
    """
    text = " ".join(text.split())
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")

    if last_space > max_length * 0.6:  # At least 60% of the text
        truncated = truncated[:last_space]

    return truncated.rstrip() + "..."


# --- Structured Data ---


@dataclass(frozen=True)
class Breadcrumb:
    name: str
    path: str


def generate_breadcrumbs(path: str) -> list[Breadcrumb]:
    """Home crumb followed by one crumb per path segment."""
    crumbs = [Breadcrumb(name=HOME_BREADCRUMB, path="/")]
    current = ""
    for segment in (s for s in path.split("/") if s):
        current += f"/{segment}"
        crumbs.append(Breadcrumb(name=segment[:1].upper() + segment[1:], path=current))
    return crumbs


def breadcrumb_structured_data(path: str, base_url: str) -> dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "name": crumb.name,
                "item": build_canonical_url(base_url, crumb.path),
            }
            for position, crumb in enumerate(generate_breadcrumbs(path), start=1)
        ],
    }


def faq_structured_data(faqs: list[tuple[str, str]]) -> dict[str, Any]:
    """FAQPage from (question, answer) pairs."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": question,
                "acceptedAnswer": {"@type": "Answer", "text": answer},
            }
            for question, answer in faqs
        ],
    }


def article_structured_data(
    *,
    title: str,
    description: str,
    author: str,
    published_time: str,
    modified_time: str | None = None,
    image: str | None = None,
    site: SiteConfig = DEFAULT_SITE,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": title,
        "description": description,
        "author": {"@type": "Person", "name": author},
        "datePublished": published_time,
        "dateModified": modified_time or published_time,
    }
    if image:
        data["image"] = image

    publisher: dict[str, Any] = {"@type": "Organization", "name": site.site_name}
    if site.logo_url:
        publisher["logo"] = {"@type": "ImageObject", "url": site.logo_url}
    data["publisher"] = publisher
    return data


# --- Metadata Builders ---


def _page_title(title: str, site: SiteConfig) -> str:
    if not site.site_name or title == site.site_name:
        return title
    return f"{title} | {site.site_name}"


def build_page_metadata(record: ContentRecord, site: SiteConfig = DEFAULT_SITE) -> PageMetadata:
    """
    Build metadata for a content record's public page.

    meta_title / meta_description win over title / excerpt; posts and
    research papers are articles with Article structured data.
    """
    path = public_path(record.kind, record.slug)
    canonical = build_canonical_url(site.base_url, path)
    title = record.meta_title or _page_title(record.title, site)
    description = truncate_description(record.meta_description or record.excerpt)
    image = resolve_og_image(record.featured_image, site.default_og_image, alt=record.title)

    is_article = record.kind in ("post", "research")
    published = record.published_at.isoformat() if record.published_at else None
    modified = record.updated_at.isoformat()

    structured: list[dict[str, Any]] = [breadcrumb_structured_data(path, site.base_url)]
    if is_article and published:
        structured.append(
            article_structured_data(
                title=record.title,
                description=description,
                author=site.default_author,
                published_time=published,
                modified_time=modified,
                image=image.url if image else None,
                site=site,
            )
        )

    return PageMetadata(
        title=title,
        description=description,
        canonical_url=canonical,
        keywords=tuple(record.tags),
        author=site.default_author,
        lang=site.locale,
        og_type="article" if is_article else "website",
        og_image=image.url if image else "",
        og_image_alt=image.alt if image else "",
        og_site_name=site.site_name,
        og_locale=site.og_locale,
        published_time=published if is_article else None,
        modified_time=modified if is_article else None,
        twitter_card="summary_large_image" if image else "summary",
        twitter_site=site.twitter_handle,
        structured_data=tuple(structured),
    )


def build_static_metadata(
    site: SiteConfig = DEFAULT_SITE,
    *,
    path: str = "/",
    title: str | None = None,
    description: str = "",
    og_image_url: str | None = None,
    faqs: list[tuple[str, str]] | None = None,
) -> PageMetadata:
    """Build metadata for a hand-written page such as the homepage or /faq."""
    canonical = build_canonical_url(site.base_url, path)
    page_title = _page_title(title, site) if title else site.site_name
    image = resolve_og_image(og_image_url, site.default_og_image, alt=page_title)

    structured: list[dict[str, Any]] = []
    if path.strip("/"):
        structured.append(breadcrumb_structured_data(path, site.base_url))
    if faqs:
        structured.append(faq_structured_data(faqs))

    return PageMetadata(
        title=page_title,
        description=truncate_description(description),
        canonical_url=canonical,
        author=site.default_author,
        lang=site.locale,
        og_image=image.url if image else "",
        og_image_alt=image.alt if image else "",
        og_site_name=site.site_name,
        og_locale=site.og_locale,
        twitter_card="summary_large_image" if image else "summary",
        twitter_site=site.twitter_handle,
        structured_data=tuple(structured),
    )


# --- Head Rendering ---


def json_ld(data: dict[str, Any]) -> str:
    """Serialize JSON-LD so it cannot close its <script> element."""
    return (
        json.dumps(data, ensure_ascii=False, sort_keys=False)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def render_head(metadata: PageMetadata) -> str:
    """Commit metadata to <head> markup. The only place head HTML is produced."""
    lines = [f"<title>{escape(metadata.title)}</title>"]

    for tag in metadata.to_meta_tags():
        key, value = ("property", tag.property) if tag.property else ("name", tag.name)
        lines.append(f'<meta {key}="{escape(value or "")}" content="{escape(tag.content)}">')

    lines.append(f'<link rel="canonical" href="{escape(metadata.canonical_url)}">')

    for data in metadata.structured_data:
        lines.append(f'<script type="application/ld+json">{json_ld(data)}</script>')

    return "\n".join(lines)
