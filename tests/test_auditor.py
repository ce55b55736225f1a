"""Tests for the PageAuditor orchestrator (pure engine and live-URL flow)."""

import asyncio
import json

import pytest

from seo_auditor.errors import PageNotFoundError, PageTimeoutError
from seo_auditor.models import AuditInput, TechnicalFlags
from seo_auditor.modules.audit import PageAuditor

URL = "https://acme.example.com"


# ===========================================================================
# 1. Pure engine
# ===========================================================================
class TestAudit:

    def test_optimized_page(self, optimized_html):
        technical = TechnicalFlags(has_ssl=True, has_robots_txt=True, has_sitemap=True, has_analytics=True)
        result = PageAuditor().audit(AuditInput(url=URL, rendered_html=optimized_html, technical=technical))

        assert result.score == 100
        assert result.grade == "A+"
        assert result.recommendations == ()
        assert result.contact.phone == "(217) 555-0123"
        assert result.contact.phone_source == "tel_link"
        assert result.contact.address == "742 Evergreen Terrace, Springfield, IL, 62704"
        assert result.contact.address_source == "schema_org"
        assert result.structured_data.schema_types == ("LocalBusiness", "PostalAddress", "Organization")
        assert result.structured_data.identity_type == "LocalBusiness"
        assert result.page_facts.links.internal == 1
        assert result.page_facts.links.external == 2
        assert result.performance.load_time_ms is None

    def test_caller_flags_are_used_as_given(self, optimized_html):
        result = PageAuditor().audit(AuditInput(url=URL, rendered_html=optimized_html))
        assert result.technical == TechnicalFlags()
        assert result.score_breakdown.technical == 12

    def test_bare_page(self, bare_html):
        result = PageAuditor().audit(AuditInput(url=URL, rendered_html=bare_html))
        assert result.score_breakdown.on_page == 2
        assert result.score == 2
        assert result.grade == "F"
        assert len(result.recommendations) == 15

    def test_same_input_same_output(self, optimized_html):
        audit_input = AuditInput(url=URL, rendered_html=optimized_html, technical=TechnicalFlags(has_ssl=True))
        auditor = PageAuditor()
        first = json.dumps(auditor.audit(audit_input).to_dict(), sort_keys=True)
        second = json.dumps(PageAuditor().audit(audit_input).to_dict(), sort_keys=True)
        assert first == second

    def test_page_size(self):
        html = "<html><body>" + "x" * 2048 + "</body></html>"
        result = PageAuditor().audit(AuditInput(url=URL, rendered_html=html))
        assert result.performance.page_size_kb == 2

    @pytest.mark.parametrize("url", ["", "   "])
    def test_empty_url_rejected(self, url, bare_html):
        with pytest.raises(ValueError):
            PageAuditor().audit(AuditInput(url=url, rendered_html=bare_html))

    def test_empty_html_is_not_an_error(self):
        result = PageAuditor().audit(AuditInput(url=URL, rendered_html=""))
        assert result.page_facts.content.word_count == 1
        assert result.page_facts.rendering_ratio == 0

    def test_unparseable_json_ld_does_not_abort(self):
        html = (
            '<html><head><script type="application/ld+json">'
            + "[" * 5000 + "]" * 5000
            + '</script><script type="application/ld+json">{"@type": "Organization"}</script>'
            + "</head><body><p>Hello world</p></body></html>"
        )
        result = PageAuditor().audit(AuditInput(url=URL, rendered_html=html))
        assert result.structured_data.json_ld_errors == 1
        assert result.structured_data.identity_type == "Organization"

    def test_to_dict_is_json_serialisable(self, optimized_html):
        data = PageAuditor().audit(AuditInput(url=URL, rendered_html=optimized_html)).to_dict()
        encoded = json.loads(json.dumps(data))
        assert encoded["score_breakdown"]["total"] == encoded["score"]
        assert encoded["recommendations"][0]["category"] == "Technical SEO"


# ===========================================================================
# 2. Live URL flow
# ===========================================================================
class TestAuditUrl:

    @pytest.mark.asyncio
    async def test_renders_probes_and_scores(self, mock_renderer, mock_probe):
        auditor = PageAuditor(renderer=mock_renderer, probe=mock_probe)
        result = await auditor.audit_url("acme.example.com")

        mock_renderer.render.assert_awaited_once_with(URL)
        mock_probe.check.assert_awaited_once_with(URL)
        assert result.url == URL
        assert result.technical == TechnicalFlags(
            has_ssl=True, has_robots_txt=True, has_sitemap=False, has_analytics=True,
        )
        assert result.score == 95
        assert result.grade == "A+"
        assert [r.title for r in result.recommendations] == ["Create an XML Sitemap"]
        assert result.performance.load_time_ms == 850

    @pytest.mark.asyncio
    async def test_plain_http_has_no_ssl(self, mock_renderer, mock_probe):
        result = await PageAuditor(renderer=mock_renderer, probe=mock_probe).audit_url("http://acme.example.com")
        assert result.technical.has_ssl is False

    @pytest.mark.asyncio
    async def test_probe_can_be_skipped(self, mock_renderer, mock_probe):
        result = await PageAuditor(renderer=mock_renderer, probe=mock_probe).audit_url(URL, probe=False)
        mock_probe.check.assert_not_awaited()
        assert result.technical.has_robots_txt is False
        assert result.technical.has_sitemap is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [PageTimeoutError(url=URL), PageNotFoundError(url=URL)])
    async def test_render_failure_propagates(self, mock_renderer, mock_probe, error):
        mock_renderer.render.side_effect = error
        with pytest.raises(type(error)):
            await PageAuditor(renderer=mock_renderer, probe=mock_probe).audit_url(URL)

    @pytest.mark.asyncio
    async def test_render_failure_cancels_pending_site_check(self, mock_renderer, mock_probe):
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_check(url):
            started.set()
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        async def failing_render(url):
            await started.wait()
            raise PageTimeoutError(url=url)

        mock_probe.check = slow_check
        mock_renderer.render = failing_render
        with pytest.raises(PageTimeoutError):
            await PageAuditor(renderer=mock_renderer, probe=mock_probe).audit_url(URL)
        await asyncio.wait_for(cancelled.wait(), timeout=1)
