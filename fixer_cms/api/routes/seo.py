"""
SEO Routes.

sitemap.xml, robots.txt, the IndexNow key file and a manual IndexNow ping.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from fixer_cms.adapters.rules_adapter import RulesAdapter
from fixer_cms.adapters.sqlite.repos import SQLiteContentRepo
from fixer_cms.api.deps import (
    get_content_repo,
    get_indexnow_service,
    get_rules_adapter,
    require_admin,
)
from fixer_cms.components.indexnow import IndexNowService
from fixer_cms.components.sitemap import (
    GenerateSitemapInput,
    render_robots_txt,
    run_generate,
)

router = APIRouter()


class IndexNowRequest(BaseModel):
    url: str = ""


@router.get("/sitemap.xml", response_class=Response, summary="XML Sitemap")
def sitemap_xml(
    repo: SQLiteContentRepo = Depends(get_content_repo),
    rules: RulesAdapter = Depends(get_rules_adapter),
) -> Response:
    """Static pages plus every published record. Drafts never appear."""
    result = run_generate(GenerateSitemapInput(), content=repo, rules=rules)
    return Response(
        content=result.xml,
        media_type="application/xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots_txt(rules: RulesAdapter = Depends(get_rules_adapter)) -> PlainTextResponse:
    return PlainTextResponse(render_robots_txt(rules.get_site_config().base_url))


@router.post(
    "/api/admin/seo/indexnow",
    dependencies=[Depends(require_admin)],
    responses={400: {"description": "URL required"}, 502: {"description": "IndexNow failed"}},
)
def submit_indexnow(
    request: IndexNowRequest,
    service: IndexNowService = Depends(get_indexnow_service),
) -> dict[str, Any]:
    """Ping IndexNow for one URL."""
    if not request.url.strip():
        raise HTTPException(status_code=400, detail="URL is required")

    result = service.notify([request.url])
    if not result.success:
        raise HTTPException(
            status_code=502,
            detail={"error": result.error, "status_code": result.status_code, "url": request.url},
        )
    return {"success": True, "url": request.url, "status_code": result.status_code}


@router.get("/{key}.txt", response_class=PlainTextResponse)
def indexnow_key(
    key: str,
    rules: RulesAdapter = Depends(get_rules_adapter),
) -> PlainTextResponse:
    """IndexNow ownership verification file."""
    config = rules.get_indexnow_config()
    if not config.key or key != config.key:
        raise HTTPException(status_code=404, detail="Not found")
    return PlainTextResponse(config.key)
