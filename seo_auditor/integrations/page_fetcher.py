"""Static page fetching with httpx.

Used by the checkers that read the served HTML directly (schema validation,
alt-tag checking) instead of rendering the page in a browser.
"""

import logging
from typing import Optional

import httpx

from seo_auditor.errors import (
    AuditError,
    PageNotFoundError,
    PageTimeoutError,
    error_for_status,
)
from seo_auditor.settings import FetcherSettings

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetch the raw HTML of a URL, mapping failures onto :class:`AuditError`.

    Usage::

        html = await PageFetcher().fetch("https://example.com")
    """

    def __init__(self, settings: Optional[FetcherSettings] = None) -> None:
        self._settings = settings or FetcherSettings()

    async def fetch(self, url: str) -> str:
        """Return the response body of *url* after redirects.

        Raises:
            PageTimeoutError: The request timed out.
            PageNotFoundError: DNS/connect failure or HTTP 404.
            PageForbiddenError: HTTP 403.
            UpstreamServerError: HTTP 5xx.
            AuditError: Any other transport failure or 4xx status.
        """
        cfg = self._settings
        logger.debug("Fetching %s", url)
        try:
            async with httpx.AsyncClient(
                timeout=cfg.timeout_seconds,
                follow_redirects=True,
                max_redirects=cfg.max_redirects,
                headers={"User-Agent": cfg.user_agent},
            ) as client:
                resp = await client.get(url)
        except httpx.TimeoutException as exc:
            raise PageTimeoutError(url=url) from exc
        except httpx.ConnectError as exc:
            raise PageNotFoundError(
                "Website not found. Please check the URL and try again.", url=url,
            ) from exc
        except httpx.HTTPError as exc:
            raise AuditError(f"Failed to fetch page: {exc}", url=url) from exc

        status_error = error_for_status(resp.status_code, url=url)
        if status_error is not None:
            raise status_error
        if resp.status_code >= 400:
            raise AuditError(f"Failed to fetch page: HTTP {resp.status_code}", url=url)

        logger.debug("Fetched %s (%d bytes)", url, len(resp.content))
        return resp.text
