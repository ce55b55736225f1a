"""Tests for the standalone alt-attribute checker."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from seo_auditor.errors import AuditError, PageNotFoundError
from seo_auditor.modules.alt_tags import AltTagChecker

MIXED_IMAGES_HTML = (
    "<html><body>"
    '<img src="/hero.jpg" alt="Hero banner">'
    '<img src="/divider.png" alt="">'
    '<img src="/team.jpg">'
    '<img src="/b.gif" width="1px" height="1px">'
    '<img src="https://cdn.example.com/pixel.gif" alt="t">'
    "</body></html>"
)


def _checker(html=None, error=None):
    fetcher = AsyncMock()
    if error is not None:
        fetcher.fetch.side_effect = error
    else:
        fetcher.fetch.return_value = html
    return AltTagChecker(fetcher=fetcher), fetcher


# ===========================================================================
# 1. HTML check
# ===========================================================================
class TestCheck:

    def test_statistics(self):
        report = AltTagChecker().check(MIXED_IMAGES_HTML, url="https://acme.example.com")
        assert report.total_images == 5
        assert report.relevant_images == 3
        assert report.tracking_pixels == 2
        assert [img.src for img in report.with_alt] == [
            "/hero.jpg", "/divider.png", "https://cdn.example.com/pixel.gif",
        ]
        assert [img.src for img in report.without_alt] == ["/team.jpg"]
        # 2 of the 3 relevant images carry an alt attribute.
        assert report.alt_coverage == 67

    def test_empty_alt_counts_as_present(self):
        report = AltTagChecker().check('<html><body><img src="/a.png" alt=""></body></html>')
        assert report.images[0].has_alt is True
        assert report.images[0].alt_length == 0
        assert report.alt_coverage == 100

    def test_tracking_pixel_without_alt_is_not_missing(self):
        html = '<html><body><img src="/b.gif" width="1px"><img src="/c.gif" height="0"></body></html>'
        report = AltTagChecker().check(html)
        assert report.tracking_pixels == 2
        assert report.without_alt == ()
        assert report.relevant_images == 0
        assert report.alt_coverage == 0

    def test_no_images(self, bare_html):
        report = AltTagChecker().check(bare_html)
        assert report.total_images == 0
        assert report.alt_coverage == 0

    def test_to_dict(self):
        data = AltTagChecker().check(MIXED_IMAGES_HTML, url="u").to_dict()
        assert data["statistics"] == {
            "total_images": 5,
            "relevant_images": 3,
            "images_with_alt": 3,
            "images_without_alt": 1,
            "tracking_pixels": 2,
            "alt_coverage": 67,
        }
        assert data["images"]["without_alt"][0]["src"] == "/team.jpg"
        assert data["images"]["all"][0]["alt_length"] == len("Hero banner")


# ===========================================================================
# 2. Live URL
# ===========================================================================
class TestCheckUrl:

    @pytest.mark.asyncio
    async def test_scheme_is_added(self):
        checker, fetcher = _checker(html=MIXED_IMAGES_HTML)
        report = await checker.check_url("acme.example.com")
        fetcher.fetch.assert_awaited_once_with("https://acme.example.com")
        assert report.url == "https://acme.example.com"
        assert report.total_images == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["https://", "http://[::1"])
    async def test_invalid_url(self, url):
        checker, fetcher = _checker(html="")
        with pytest.raises(AuditError) as info:
            await checker.check_url(url)
        assert info.value.message == "Invalid URL format"
        fetcher.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fetch_errors_propagate(self):
        checker, _ = _checker(error=PageNotFoundError(url="https://nope.invalid"))
        with pytest.raises(PageNotFoundError):
            await checker.check_url("https://nope.invalid")


# ===========================================================================
# 3. CLI
# ===========================================================================
class TestAltTagsCommand:

    def _invoke(self, args, html=None, error=None):
        from typer.testing import CliRunner
        from seo_auditor.cli import app
        fetch = AsyncMock(return_value=html, side_effect=error)
        with patch("seo_auditor.integrations.page_fetcher.PageFetcher.fetch", fetch):
            return CliRunner().invoke(app, args)

    def test_json_output(self):
        result = self._invoke(["alt-tags", "acme.example.com", "--json"], html=MIXED_IMAGES_HTML)
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["url"] == "https://acme.example.com"
        assert data["statistics"]["images_without_alt"] == 1

    def test_table_output(self):
        result = self._invoke(["alt-tags", "https://acme.example.com"], html=MIXED_IMAGES_HTML)
        assert result.exit_code == 0, result.output
        assert "Alt coverage" in result.output
        assert "/team.jpg" in result.output

    def test_fetch_failure_exits_1(self):
        result = self._invoke(
            ["alt-tags", "https://acme.example.com"], error=PageNotFoundError(url="https://acme.example.com"),
        )
        assert result.exit_code == 1
