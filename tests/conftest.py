"""Shared pytest fixtures for SEO Page Auditor tests."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure project root is on sys.path so 'seo_auditor' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)


# 57 characters
GOOD_TITLE = "Acme Plumbing Services | Emergency Repairs in Springfield"
# 139 characters
GOOD_DESCRIPTION = (
    "Acme Plumbing provides licensed emergency plumbing, drain cleaning and "
    "water heater repair across Springfield. Call today for a free quote!"
)


@pytest.fixture()
def settings():
    """Packaged default settings."""
    from seo_auditor.settings import default_settings
    return default_settings()


@pytest.fixture()
def parse():
    """Return the shared HTML parser."""
    from seo_auditor.modules.page_facts import parse_html
    return parse_html


@pytest.fixture()
def optimized_html():
    """A page that satisfies nearly every rule."""
    words = " ".join(["plumbing"] * 1000)
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>{GOOD_TITLE}</title>
  <meta name="description" content="{GOOD_DESCRIPTION}">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta property="og:title" content="Acme Plumbing">
  <meta property="og:type" content="website">
  <meta name="twitter:card" content="summary">
  <script type="application/ld+json">
  {{
    "@context": "https://schema.org",
    "@type": "LocalBusiness",
    "name": "Acme Plumbing",
    "address": {{
      "@type": "PostalAddress",
      "streetAddress": "742 Evergreen Terrace",
      "addressLocality": "Springfield",
      "addressRegion": "IL",
      "postalCode": "62704"
    }}
  }}
  </script>
  <script type="application/ld+json">
  {{"@context": "https://schema.org", "@type": "Organization", "name": "Acme Plumbing"}}
  </script>
  <script async src="https://www.googletagmanager.com/gtag/js?id=G-XYZ"></script>
</head>
<body>
  <h1>Emergency Plumbing Services in Springfield</h1>
  <h2>Drain Cleaning</h2><h2>Water Heaters</h2><h2>Leak Detection</h2>
  <h3>Residential</h3><h3>Commercial</h3>
  <img src="/img/van.jpg" alt="Our service van">
  <img src="/img/team.jpg" alt="The Acme team">
  <p>{words}</p>
  <p>Call <a href="tel:+12175550123">(217) 555-0123</a></p>
  <a href="/contact">Contact</a>
  <a href="https://www.facebook.com/acmeplumbing">Facebook</a>
  <a href="https://www.instagram.com/acmeplumbing">Instagram</a>
</body>
</html>"""


@pytest.fixture()
def bare_html():
    """A page with nothing worth scoring."""
    return "<html><head></head><body><p>Hello world</p></body></html>"


@pytest.fixture()
def mock_renderer(optimized_html):
    """Return a mock PageRenderer yielding the optimized page."""
    from seo_auditor.integrations.page_renderer import RenderedPage

    renderer = MagicMock()
    renderer.render = AsyncMock(return_value=RenderedPage(
        url="https://acme.example.com",
        html=optimized_html,
        load_time_ms=850,
        screenshot_desktop="data:image/png;base64,AAAA",
        screenshot_mobile="data:image/png;base64,BBBB",
    ))
    return renderer


@pytest.fixture()
def mock_probe():
    """Return a mock SiteProbe reporting robots.txt present and no sitemap."""
    from seo_auditor.integrations.site_probe import ProbeResult

    probe = MagicMock()
    probe.check = AsyncMock(return_value=ProbeResult(has_robots_txt=True, has_sitemap=False))
    return probe
