"""
IndexNow submission.

Search engines are pinged when a public URL appears or disappears: a record
is published, re-saved while published, or unpublished. The ping is
best-effort; failures are logged and reported, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fixer_cms.domain.entities import ContentStatus

from .models import HttpTransportError, IndexNowResult

if TYPE_CHECKING:
    from .ports import HttpClientPort

logger = logging.getLogger(__name__)

SUCCESS_STATUS_CODES = frozenset([200, 202])


@dataclass(frozen=True)
class IndexNowConfig:
    """IndexNow settings."""

    endpoint: str = "https://api.indexnow.org/indexnow"
    host: str = "localhost"
    key: str = ""
    user_agent: str = "Fixer-CMS/1.0"
    timeout_seconds: float = 10.0
    enabled: bool = True

    @property
    def key_location(self) -> str:
        return f"https://{self.host}/{self.key}.txt"


def should_notify(old_status: ContentStatus | None, new_status: ContentStatus) -> bool:
    """A public URL was added, refreshed or removed."""
    return new_status == "published" or (old_status == "published" and new_status != "published")


def build_payload(urls: list[str], config: IndexNowConfig) -> dict[str, Any]:
    return {
        "host": config.host,
        "key": config.key,
        "keyLocation": config.key_location,
        "urlList": list(urls),
    }


class IndexNowService:
    """Submits URL batches to the IndexNow endpoint."""

    def __init__(self, config: IndexNowConfig, http: HttpClientPort) -> None:
        self._config = config
        self._http = http

    @property
    def config(self) -> IndexNowConfig:
        return self._config

    def notify(self, urls: list[str]) -> IndexNowResult:
        urls = [u.strip() for u in urls if u and u.strip()]
        if not urls:
            return IndexNowResult(success=False, error="url_required")
        if not self._config.enabled:
            logger.debug("IndexNow disabled; skipping %d urls", len(urls))
            return IndexNowResult(success=False, urls=urls, error="disabled")

        payload = build_payload(urls, self._config)
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self._config.user_agent,
        }

        try:
            response = self._http.post_json(
                self._config.endpoint,
                payload,
                headers=headers,
                timeout=self._config.timeout_seconds,
            )
        except HttpTransportError as e:
            logger.warning("IndexNow request failed: %s", e)
            return IndexNowResult(success=False, urls=urls, error=str(e))

        if response.status_code in SUCCESS_STATUS_CODES:
            logger.info("Submitted %d urls to IndexNow", len(urls))
            return IndexNowResult(success=True, urls=urls, status_code=response.status_code)

        logger.warning("IndexNow API error: %s %.200s", response.status_code, response.text)
        return IndexNowResult(
            success=False,
            urls=urls,
            status_code=response.status_code,
            error=f"IndexNow API returned {response.status_code}",
        )


class PublishNotifier:
    """Content publish hook: pings the page URL and the sitemap."""

    def __init__(self, service: IndexNowService, base_url: str) -> None:
        self._service = service
        self._base_url = base_url.rstrip("/")

    def notify_change(
        self,
        path: str,
        old_status: ContentStatus | None,
        new_status: ContentStatus,
    ) -> IndexNowResult | None:
        """Ping for the change; None when nothing public changed."""
        if not should_notify(old_status, new_status):
            return None
        return self._service.notify([f"{self._base_url}{path}", f"{self._base_url}/sitemap.xml"])

    def on_status_change(
        self,
        path: str,
        old_status: ContentStatus | None,
        new_status: ContentStatus,
    ) -> None:
        self.notify_change(path, old_status, new_status)
