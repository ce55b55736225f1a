"""Single-page audit orchestrator.

:meth:`PageAuditor.audit` is the pure engine: one :class:`AuditInput` in, one
:class:`AuditResult` out, no I/O.  :meth:`PageAuditor.audit_url` drives the
renderer and probe collaborators first and then calls the engine.
"""

import asyncio
import logging
from typing import Any, Optional

from seo_auditor.models import (
    AuditInput,
    AuditResult,
    PerformanceFacts,
    TechnicalFlags,
)
from seo_auditor.modules.entity_detection import EntityDetector
from seo_auditor.modules.page_facts import FactExtractor, body_text, detect_analytics, parse_html
from seo_auditor.modules.recommendations import RecommendationGenerator
from seo_auditor.modules.scoring import ScoringEngine
from seo_auditor.modules.structured_data import StructuredDataExtractor
from seo_auditor.settings import Settings, default_settings
from seo_auditor.utils.helpers import ensure_scheme, round_half_up

logger = logging.getLogger(__name__)


class PageAuditor:
    """Audit one page at a time.

    Args:
        settings: Resolved configuration; packaged defaults when omitted.
        renderer: Object with an async ``render(url)`` returning a
            ``RenderedPage``.  Created lazily for :meth:`audit_url`.
        probe: Object with an async ``check(url)`` returning a
            ``ProbeResult``.  Created lazily for :meth:`audit_url`.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        renderer: Optional[Any] = None,
        probe: Optional[Any] = None,
    ) -> None:
        self._settings = settings or default_settings()
        self._renderer = renderer
        self._probe = probe
        self._facts = FactExtractor(self._settings)
        self._structured = StructuredDataExtractor(self._settings)
        self._entities = EntityDetector()
        self._scoring = ScoringEngine()
        self._recommendations = RecommendationGenerator()

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def audit(self, audit_input: AuditInput, load_time_ms: Optional[int] = None) -> AuditResult:
        """Run every extractor, the scoring engine and the recommendation generator.

        Raises:
            ValueError: If ``audit_input.url`` is empty.
        """
        if not audit_input.url or not audit_input.url.strip():
            raise ValueError("AuditInput.url must not be empty")

        html = audit_input.rendered_html or ""
        soup = parse_html(html)

        page_facts = self._facts.extract(soup, html, audit_input.url)
        structured = self._structured.extract(soup)
        contact = self._entities.detect(body_text(soup), soup, structured)
        technical = audit_input.technical

        breakdown = self._scoring.score(page_facts, structured, contact, technical)
        recommendations = self._recommendations.generate(page_facts, structured, contact, technical)

        return AuditResult(
            url=audit_input.url,
            page_facts=page_facts,
            structured_data=structured,
            contact=contact,
            technical=technical,
            score_breakdown=breakdown,
            recommendations=tuple(recommendations),
            performance=PerformanceFacts(
                page_size_kb=round_half_up(len(html) / 1024),
                load_time_ms=load_time_ms,
            ),
        )

    # ------------------------------------------------------------------
    # Live URL
    # ------------------------------------------------------------------

    async def audit_url(self, url: str, probe: bool = True) -> AuditResult:
        """Render *url*, resolve its technical flags and audit it.

        Args:
            url: Page URL; ``https://`` is assumed when no scheme is given.
            probe: Check robots.txt and sitemap.xml.  When False both are
                reported absent.

        Raises:
            AuditError: From the renderer; no partial result is produced.
        """
        url = ensure_scheme(url)
        logger.info("Starting audit for %s", url)

        renderer = self._renderer
        if renderer is None:
            from seo_auditor.integrations.page_renderer import PageRenderer
            renderer = self._renderer = PageRenderer(self._settings.renderer)

        if probe:
            site_probe = self._probe
            if site_probe is None:
                from seo_auditor.integrations.site_probe import SiteProbe
                site_probe = self._probe = SiteProbe(self._settings.probe)
            probe_task = asyncio.ensure_future(site_probe.check(url))
            try:
                rendered = await renderer.render(url)
            except BaseException:
                probe_task.cancel()
                raise
            probe_result = await probe_task
            has_robots, has_sitemap = probe_result.has_robots_txt, probe_result.has_sitemap
        else:
            rendered = await renderer.render(url)
            has_robots = has_sitemap = False

        technical = TechnicalFlags(
            has_ssl=url.startswith("https://"),
            has_robots_txt=has_robots,
            has_sitemap=has_sitemap,
            has_analytics=detect_analytics(rendered.html, self._settings.analytics_signatures),
        )
        result = self.audit(
            AuditInput(url=url, rendered_html=rendered.html, technical=technical),
            load_time_ms=rendered.load_time_ms,
        )
        logger.info("Audit complete for %s: score=%d grade=%s", url, result.score, result.grade)
        return result
