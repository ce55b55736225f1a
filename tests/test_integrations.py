"""Tests for the page renderer and site probe collaborators (network mocked)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeout

from seo_auditor.errors import (
    PageForbiddenError,
    PageNotFoundError,
    PageTimeoutError,
    RenderError,
    UpstreamServerError,
)
from seo_auditor.integrations import PageRenderer, ProbeResult, SiteProbe
from seo_auditor.settings import RendererSettings

URL = "https://acme.example.com/"


# ===========================================================================
# Helpers
# ===========================================================================
def _playwright(goto=None, status=200, html="<html><body>ok</body></html>"):
    """Build a mocked ``async_playwright()`` context manager and its browser."""
    response = MagicMock()
    response.status = status

    page = MagicMock()
    if isinstance(goto, Exception):
        page.goto = AsyncMock(side_effect=goto)
    else:
        page.goto = AsyncMock(return_value=response)
    page.screenshot = AsyncMock(return_value=b"png")
    page.set_viewport_size = AsyncMock()
    page.content = AsyncMock(return_value=html)

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    pw = MagicMock()
    pw.chromium.launch = AsyncMock(return_value=browser)

    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=pw)
    manager.__aexit__ = AsyncMock(return_value=False)
    return manager, browser, page


def _patch_playwright(manager):
    return patch("seo_auditor.integrations.page_renderer.async_playwright", return_value=manager)


class _FakeResponse:
    def __init__(self, status):
        self.status = status

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class _FakeSession:
    """Stand-in for aiohttp.ClientSession answering HEAD requests by path."""

    def __init__(self, statuses):
        self.statuses = statuses
        self.requested = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def head(self, url, **kwargs):
        self.requested.append(url)
        outcome = self.statuses.get(url, 404)
        if isinstance(outcome, Exception):
            raise outcome
        return _FakeResponse(outcome)


# ===========================================================================
# 1. PageRenderer
# ===========================================================================
class TestPageRenderer:

    @pytest.mark.asyncio
    async def test_success_with_screenshots(self):
        manager, browser, page = _playwright()
        with _patch_playwright(manager):
            rendered = await PageRenderer().render(URL)
        assert rendered.url == URL
        assert rendered.html == "<html><body>ok</body></html>"
        assert rendered.load_time_ms >= 0
        assert rendered.screenshot_desktop == "data:image/png;base64,cG5n"
        assert rendered.screenshot_mobile == "data:image/png;base64,cG5n"
        page.set_viewport_size.assert_awaited_once_with({"width": 360, "height": 640})
        _, kwargs = page.goto.call_args
        assert kwargs == {"wait_until": "networkidle", "timeout": 30000}
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_screenshots_disabled(self):
        manager, _, page = _playwright()
        with _patch_playwright(manager):
            rendered = await PageRenderer(RendererSettings(capture_screenshots=False)).render(URL)
        assert rendered.screenshot_desktop is None
        page.screenshot.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error_cls", [
        (404, PageNotFoundError),
        (403, PageForbiddenError),
        (500, UpstreamServerError),
    ])
    async def test_status_errors_close_browser(self, status, error_cls):
        manager, browser, _ = _playwright(status=status)
        with _patch_playwright(manager):
            with pytest.raises(error_cls):
                await PageRenderer().render(URL)
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc,error_cls", [
        (PlaywrightTimeout("Timeout 30000ms exceeded."), PageTimeoutError),
        (PlaywrightError("net::ERR_NAME_NOT_RESOLVED at https://acme.example.com/"), PageNotFoundError),
        (PlaywrightError("net::ERR_CONNECTION_RESET"), RenderError),
    ])
    async def test_browser_errors_are_mapped(self, exc, error_cls):
        manager, browser, _ = _playwright(goto=exc)
        with _patch_playwright(manager):
            with pytest.raises(error_cls) as info:
                await PageRenderer().render(URL)
        assert info.value.url == URL
        browser.close.assert_awaited_once()


# ===========================================================================
# 2. SiteProbe
# ===========================================================================
class TestSiteProbe:

    @pytest.mark.asyncio
    async def test_exists_follows_status(self):
        session = _FakeSession({
            "https://acme.example.com/robots.txt": 200,
            "https://acme.example.com/sitemap.xml": 404,
        })
        probe = SiteProbe()
        assert await probe.exists(session, "https://acme.example.com/robots.txt") is True
        assert await probe.exists(session, "https://acme.example.com/sitemap.xml") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc", [
        aiohttp.ClientConnectionError("refused"),
        asyncio.TimeoutError(),
    ])
    async def test_failures_are_false(self, exc, caplog):
        session = _FakeSession({"https://acme.example.com/robots.txt": exc})
        with caplog.at_level("WARNING"):
            assert await SiteProbe().exists(session, "https://acme.example.com/robots.txt") is False
        assert "Probe failed" in caplog.text

    @pytest.mark.asyncio
    async def test_check_uses_origin(self):
        session = _FakeSession({
            "https://acme.example.com/robots.txt": 200,
            "https://acme.example.com/sitemap.xml": 204,
        })
        with patch("seo_auditor.integrations.site_probe.aiohttp.ClientSession", return_value=session):
            result = await SiteProbe().check("https://ACME.example.com:8443/deep/page?q=1")
        assert result == ProbeResult(has_robots_txt=True, has_sitemap=True)
        assert sorted(session.requested) == [
            "https://acme.example.com/robots.txt",
            "https://acme.example.com/sitemap.xml",
        ]

    @pytest.mark.asyncio
    async def test_unparseable_url_is_absent(self, caplog):
        session_cls = MagicMock()
        with patch("seo_auditor.integrations.site_probe.aiohttp.ClientSession", session_cls), \
                caplog.at_level("WARNING"):
            result = await SiteProbe().check("http://[::1")
        assert result == ProbeResult(has_robots_txt=False, has_sitemap=False)
        session_cls.assert_not_called()
        assert "Probe failed" in caplog.text
