"""robots.txt / sitemap.xml existence probe (aiohttp).

HEAD requests against the page origin.  Any failure counts as "absent" and
is logged; the probe never raises.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp

from seo_auditor.settings import ProbeSettings, default_settings
from seo_auditor.utils.helpers import origin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeResult:
    has_robots_txt: bool = False
    has_sitemap: bool = False


class SiteProbe:
    """Check for ``/robots.txt`` and ``/sitemap.xml`` at a site's origin."""

    def __init__(self, settings: Optional[ProbeSettings] = None) -> None:
        cfg = settings or default_settings().probe
        self._timeout = aiohttp.ClientTimeout(total=cfg.timeout_seconds)
        self._user_agent = cfg.user_agent

    async def check(self, url: str) -> ProbeResult:
        try:
            base = origin(url)
        except ValueError as exc:
            logger.warning("Probe failed for %s: %s", url, exc)
            return ProbeResult()
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            has_robots, has_sitemap = await asyncio.gather(
                self.exists(session, f"{base}/robots.txt"),
                self.exists(session, f"{base}/sitemap.xml"),
            )
        logger.debug("Probe %s: robots.txt=%s sitemap.xml=%s", base, has_robots, has_sitemap)
        return ProbeResult(has_robots_txt=has_robots, has_sitemap=has_sitemap)

    async def exists(self, session: aiohttp.ClientSession, url: str) -> bool:
        """True when a HEAD request for *url* ends (after redirects) in a 2xx."""
        try:
            async with session.head(
                url,
                headers={"User-Agent": self._user_agent},
                allow_redirects=True,
            ) as resp:
                return 200 <= resp.status < 300
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Probe failed for %s: %s", url, exc)
            return False
