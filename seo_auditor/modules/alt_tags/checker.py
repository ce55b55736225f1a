"""Alt-attribute checker.

A standalone view of a page's images, separate from scoring: an ``alt``
attribute counts even when empty, and tracking pixels are reported but never
listed as missing alt text.
"""

import logging
from typing import Optional

from seo_auditor.errors import AuditError
from seo_auditor.integrations.page_fetcher import PageFetcher
from seo_auditor.models import AltTagImage, AltTagReport
from seo_auditor.modules.page_facts.extractor import parse_html
from seo_auditor.modules.page_facts.signals import is_tracking_pixel
from seo_auditor.settings import Settings, default_settings
from seo_auditor.utils.helpers import ensure_scheme
from seo_auditor.utils.validators import validate_url

logger = logging.getLogger(__name__)


class AltTagChecker:
    """Check ``<img>`` alt attributes in HTML or on a live URL.

    Usage::

        checker = AltTagChecker()
        report = checker.check(html, url="https://example.com")
        report = await checker.check_url("example.com")
    """

    def __init__(self, settings: Optional[Settings] = None, fetcher: Optional[PageFetcher] = None) -> None:
        self._settings = settings or default_settings()
        self._fetcher = fetcher or PageFetcher(self._settings.fetcher)

    def check(self, html: str, url: str = "") -> AltTagReport:
        images = []
        for img in parse_html(html).find_all("img"):
            src = img.get("src") or ""
            alt = img.get("alt")
            images.append(AltTagImage(
                src=src,
                alt=alt or "",
                has_alt=alt is not None,
                is_tracking_pixel=is_tracking_pixel(src, img.get("width"), img.get("height")),
            ))
        report = AltTagReport(url=url, images=tuple(images))
        logger.info(
            "Alt tags for %s: %d images, %d with alt, %d missing, %d tracking pixels",
            url or "<html>", report.total_images, len(report.with_alt),
            len(report.without_alt), report.tracking_pixels,
        )
        return report

    async def check_url(self, url: str) -> AltTagReport:
        """Fetch *url* (``https://`` assumed when no scheme) and check its images.

        Raises:
            AuditError: The URL is malformed or the page could not be fetched.
        """
        url = ensure_scheme(url)
        ok, _ = validate_url(url)
        if not ok:
            raise AuditError("Invalid URL format", url=url)
        html = await self._fetcher.fetch(url)
        return self.check(html, url=url)
