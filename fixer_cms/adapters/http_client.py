import logging
from typing import Any

import httpx

from fixer_cms.components.indexnow import HttpResponse, HttpTransportError

logger = logging.getLogger(__name__)


class HttpxClient:
    """HttpClientPort backed by a shared httpx.Client."""

    def __init__(self, client: httpx.Client | None = None):
        self._client = client or httpx.Client(follow_redirects=True)

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        *,
        headers: dict[str, str],
        timeout: float,
    ) -> HttpResponse:
        try:
            response = self._client.post(
                url,
                json=payload,
                headers=headers,
                timeout=httpx.Timeout(timeout),
            )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            # InvalidURL is raised before any request exists
            logger.error("Request error for POST %s: %s", url, e)
            raise HttpTransportError(f"Request failed: {e}") from e

        return HttpResponse(status_code=response.status_code, text=response.text)

    def close(self) -> None:
        self._client.close()
