"""Collaborators at the engine boundary: page rendering, static fetching and site probing."""

from seo_auditor.integrations.page_fetcher import PageFetcher
from seo_auditor.integrations.page_renderer import PageRenderer, RenderedPage
from seo_auditor.integrations.site_probe import ProbeResult, SiteProbe

__all__ = ["PageFetcher", "PageRenderer", "RenderedPage", "ProbeResult", "SiteProbe"]
