"""
Render component - page metadata builder.

Invariants:
- I1: Head markup is produced only by render_head()
- I2: Every attribute value and the title are HTML-escaped
- I3: JSON-LD never contains a literal "<"
- I4: Only published records get public metadata
"""

from __future__ import annotations

from ._impl import (
    DEFAULT_SITE,
    SiteConfig,
    build_page_metadata,
    build_static_metadata,
    render_head,
)
from .models import (
    RenderOutput,
    RenderRecordMetadataInput,
    RenderStaticMetadataInput,
    RenderValidationError,
)
from .ports import SitePort


def _site(site_port: SitePort | None) -> SiteConfig:
    return site_port.get_site_config() if site_port else DEFAULT_SITE


# --- Component Entry Points ---


def run_record_metadata(
    inp: RenderRecordMetadataInput,
    *,
    site_port: SitePort | None = None,
) -> RenderOutput:
    """
    Build page metadata and head markup for a published record.

    Args:
        inp: Input containing the content record.
        site_port: Optional site settings port.

    Returns:
        RenderOutput with metadata, or a not_published error for drafts.
    """
    if not inp.record.is_published:
        return RenderOutput(
            metadata=None,
            errors=[
                RenderValidationError(
                    code="not_published",
                    message="Drafts have no public metadata",
                    field="status",
                )
            ],
            success=False,
        )

    metadata = build_page_metadata(inp.record, _site(site_port))
    return RenderOutput(metadata=metadata, head_html=render_head(metadata))


def run_static_metadata(
    inp: RenderStaticMetadataInput,
    *,
    site_port: SitePort | None = None,
) -> RenderOutput:
    """Build page metadata and head markup for a static page."""
    metadata = build_static_metadata(
        _site(site_port),
        path=inp.path,
        title=inp.title,
        description=inp.description,
        og_image_url=inp.og_image_url,
        faqs=inp.faqs or None,
    )
    return RenderOutput(metadata=metadata, head_html=render_head(metadata))


def run(
    inp: RenderRecordMetadataInput | RenderStaticMetadataInput,
    *,
    site_port: SitePort | None = None,
) -> RenderOutput:
    """
    Main entry point for the render component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, RenderRecordMetadataInput):
        return run_record_metadata(inp, site_port=site_port)
    elif isinstance(inp, RenderStaticMetadataInput):
        return run_static_metadata(inp, site_port=site_port)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
