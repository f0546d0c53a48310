from fixer_cms.components.indexnow import IndexNowConfig
from fixer_cms.components.render import SiteConfig
from fixer_cms.components.sitemap import KindSettings, SitemapConfig, StaticPage
from fixer_cms.rules.models import Rules


class RulesAdapter:
    """Maps the loaded rules onto every component RulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules

    # --- editor / richtext / paste ---

    def get_allowed_tags(self) -> frozenset[str]:
        return frozenset(self._rules.editor.allow_tags)

    def get_allowed_attrs(self) -> frozenset[str]:
        return frozenset(self._rules.editor.allow_attrs)

    def get_url_schemes(self) -> frozenset[str]:
        return frozenset(self._rules.editor.url_schemes)

    def get_heading_max_length(self) -> int:
        return self._rules.editor.paste.heading_max_length

    def get_history_limit(self) -> int:
        return self._rules.editor.history_limit

    def get_locale(self) -> str:
        return self._rules.site.locale

    # --- content ---

    def get_content_kinds(self) -> list[str]:
        return list(self._rules.content.kinds)

    def get_title_max_length(self) -> int:
        return self._rules.content.title_max_length

    def get_excerpt_max_length(self) -> int:
        return self._rules.content.excerpt_max_length

    # --- site / sitemap / indexnow ---

    def get_site_config(self) -> SiteConfig:
        site = self._rules.site
        return SiteConfig(
            base_url=site.base_url,
            site_name=site.site_name,
            locale=site.locale,
            og_locale=site.og_locale,
            default_author=site.default_author,
            default_og_image=site.default_og_image,
            twitter_handle=site.twitter_handle or "",
            logo_url=site.logo_url,
        )

    def get_sitemap_config(self) -> SitemapConfig:
        sitemap = self._rules.sitemap
        return SitemapConfig(
            base_url=self._rules.site.base_url,
            static_pages=tuple(
                StaticPage(path=p.path, priority=p.priority, changefreq=p.changefreq)
                for p in sitemap.static_pages
            ),
            kinds={
                kind: KindSettings(priority=k.priority, changefreq=k.changefreq)
                for kind, k in sitemap.kinds.items()
            },
        )

    def get_indexnow_config(self) -> IndexNowConfig:
        indexnow = self._rules.indexnow
        return IndexNowConfig(
            endpoint=indexnow.endpoint,
            host=indexnow.host,
            key=indexnow.key,
            user_agent=indexnow.user_agent,
            timeout_seconds=indexnow.timeout_seconds,
            enabled=indexnow.enabled,
        )
