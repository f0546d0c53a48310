"""
Render component - page metadata, structured data and head markup.
"""

from ._impl import (
    DEFAULT_ROBOTS,
    DEFAULT_SITE,
    HOME_BREADCRUMB,
    Breadcrumb,
    ImageInfo,
    MetaTag,
    PageMetadata,
    SiteConfig,
    article_structured_data,
    breadcrumb_structured_data,
    build_canonical_url,
    build_page_metadata,
    build_static_metadata,
    faq_structured_data,
    generate_breadcrumbs,
    json_ld,
    render_head,
    resolve_og_image,
    truncate_description,
)
from .component import run, run_record_metadata, run_static_metadata
from .models import (
    RenderOutput,
    RenderRecordMetadataInput,
    RenderStaticMetadataInput,
    RenderValidationError,
)
from .ports import SitePort

__all__ = [
    # Entry points
    "run",
    "run_record_metadata",
    "run_static_metadata",
    # Models
    "RenderOutput",
    "RenderRecordMetadataInput",
    "RenderStaticMetadataInput",
    "RenderValidationError",
    # Ports
    "SitePort",
    # Builders
    "DEFAULT_ROBOTS",
    "DEFAULT_SITE",
    "HOME_BREADCRUMB",
    "Breadcrumb",
    "ImageInfo",
    "MetaTag",
    "PageMetadata",
    "SiteConfig",
    "article_structured_data",
    "breadcrumb_structured_data",
    "build_canonical_url",
    "build_page_metadata",
    "build_static_metadata",
    "faq_structured_data",
    "generate_breadcrumbs",
    "json_ld",
    "render_head",
    "resolve_og_image",
    "truncate_description",
]
