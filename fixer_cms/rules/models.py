from typing import Literal

from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class SiteRules(BaseModel):
    base_url: str
    site_name: str
    locale: Literal["he", "en"] = "he"
    og_locale: str = "he_IL"
    default_author: str = ""
    default_og_image: str | None = None
    twitter_handle: str | None = None
    logo_url: str | None = None


class PasteRules(BaseModel):
    heading_max_length: int = Field(default=60, ge=1)


class EditorRules(BaseModel):
    allow_tags: list[str]
    allow_attrs: list[str]
    url_schemes: list[str]
    paste: PasteRules = Field(default_factory=PasteRules)
    history_limit: int = Field(default=50, ge=1)


class ContentRules(BaseModel):
    kinds: list[str]
    title_max_length: int = 200
    excerpt_max_length: int = 500


class StaticPageRule(BaseModel):
    path: str
    priority: float = Field(ge=0.0, le=1.0)
    changefreq: str


class KindSitemapRule(BaseModel):
    priority: float = Field(ge=0.0, le=1.0)
    changefreq: str


class SitemapRules(BaseModel):
    static_pages: list[StaticPageRule]
    kinds: dict[str, KindSitemapRule]


class IndexNowRules(BaseModel):
    enabled: bool = True
    endpoint: str
    host: str
    key: str
    user_agent: str = "Fixer-CMS/1.0"
    timeout_seconds: float = 10.0


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    site: SiteRules
    editor: EditorRules
    content: ContentRules
    sitemap: SitemapRules
    indexnow: IndexNowRules
    ops: OpsRules = Field(default_factory=OpsRules)
