"""Headless-browser page renderer (Playwright).

Loads a URL in Chromium, waits for network idleness, and returns the
rendered HTML plus optional desktop and mobile screenshots.  The browser is
closed on every path, success or failure.
"""

import base64
import logging
import time
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Browser, Error as PlaywrightError, TimeoutError as PlaywrightTimeout
from playwright.async_api import async_playwright

from seo_auditor.errors import (
    AuditError,
    PageNotFoundError,
    PageTimeoutError,
    RenderError,
    error_for_status,
)
from seo_auditor.settings import RendererSettings, default_settings

logger = logging.getLogger(__name__)

_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]

_DNS_FAILURE_MARKERS = ("ERR_NAME_NOT_RESOLVED", "ERR_NAME_RESOLUTION_FAILED")


@dataclass(frozen=True)
class RenderedPage:
    """Output of one render.  Screenshots are ``data:image/png;base64,...`` URIs."""
    url: str
    html: str
    load_time_ms: int
    screenshot_desktop: Optional[str] = None
    screenshot_mobile: Optional[str] = None


def _data_uri(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


class PageRenderer:
    """Render pages with Playwright Chromium.

    Usage::

        renderer = PageRenderer()
        page = await renderer.render("https://example.com")
    """

    def __init__(self, settings: Optional[RendererSettings] = None) -> None:
        self._settings = settings or default_settings().renderer

    async def render(self, url: str) -> RenderedPage:
        """Load *url* and return its rendered HTML.

        Raises:
            PageNotFoundError: DNS failure or HTTP 404.
            PageTimeoutError: The page did not settle within the timeout.
            PageForbiddenError: HTTP 403.
            UpstreamServerError: HTTP 5xx.
            RenderError: Any other browser failure.
        """
        cfg = self._settings
        logger.info("Rendering %s", url)

        async with async_playwright() as pw:
            browser: Optional[Browser] = None
            try:
                browser = await pw.chromium.launch(headless=True, args=_LAUNCH_ARGS)
                context = await browser.new_context(
                    user_agent=cfg.user_agent or None,
                    viewport={"width": cfg.desktop_viewport.width, "height": cfg.desktop_viewport.height},
                )
                page = await context.new_page()

                t0 = time.monotonic()
                resp = await page.goto(url, wait_until=cfg.wait_until, timeout=cfg.timeout_ms)
                load_time_ms = int((time.monotonic() - t0) * 1000)

                if resp is not None:
                    status_error = error_for_status(resp.status, url=url)
                    if status_error is not None:
                        raise status_error

                desktop = mobile = None
                if cfg.capture_screenshots:
                    desktop = _data_uri(await page.screenshot(full_page=False))
                    await page.set_viewport_size(
                        {"width": cfg.mobile_viewport.width, "height": cfg.mobile_viewport.height},
                    )
                    mobile = _data_uri(await page.screenshot(full_page=False))

                html = await page.content()
            except AuditError:
                raise
            except PlaywrightTimeout as exc:
                raise PageTimeoutError(url=url) from exc
            except PlaywrightError as exc:
                if any(marker in str(exc) for marker in _DNS_FAILURE_MARKERS):
                    raise PageNotFoundError(
                        "Website not found. Please check the URL and try again.", url=url,
                    ) from exc
                logger.error("Rendering failed for %s: %s", url, exc, exc_info=True)
                raise RenderError(f"Failed to analyze website: {exc}", url=url) from exc
            finally:
                if browser is not None:
                    await browser.close()
                    logger.debug("Browser closed for %s", url)

        logger.info("Rendered %s in %d ms (%d bytes)", url, load_time_ms, len(html))
        return RenderedPage(
            url=url,
            html=html,
            load_time_ms=load_time_ms,
            screenshot_desktop=desktop,
            screenshot_mobile=mobile,
        )
