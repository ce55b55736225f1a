"""Schema markup validator.

Extracts every structured-data item from a page (JSON-LD, Microdata and
RDFa) and performs light structural validation.  Unlike the scoring
extractor, Microdata and RDFa items are expanded into their properties.
"""

import json
import logging
from typing import Any, Optional

from bs4 import BeautifulSoup, Tag

from seo_auditor.integrations.page_fetcher import PageFetcher
from seo_auditor.models import SchemaItem, SchemaReport
from seo_auditor.modules.page_facts.extractor import parse_html
from seo_auditor.modules.structured_data.extractor import JSON_LD_SELECTOR
from seo_auditor.settings import Settings, default_settings

logger = logging.getLogger(__name__)


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def validate_schema_structure(schema: dict[str, Any]) -> dict[str, Any]:
    """Check a single schema item for the minimum required keys.

    Returns:
        Dict with ``is_valid`` (bool) and ``issues`` (list of str).
    """
    issues: list[str] = []
    if schema.get("@type") and not schema.get("@context"):
        issues.append("Missing @context property")
    if not schema.get("@type") and not schema.get("type"):
        issues.append("Missing @type or type property")
    return {"is_valid": not issues, "issues": issues}


class SchemaValidator:
    """Extract JSON-LD, Microdata and RDFa items from HTML or a live URL.

    Usage::

        validator = SchemaValidator()
        report = validator.extract(html, url="https://example.com")
        report = await validator.validate_url("https://example.com")
    """

    def __init__(self, settings: Optional[Settings] = None, fetcher: Optional[PageFetcher] = None) -> None:
        self._settings = settings or default_settings()
        self._fetcher = fetcher or PageFetcher(self._settings.fetcher)

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract(self, html: str, url: str = "") -> SchemaReport:
        soup = parse_html(html)
        json_ld = self.extract_json_ld(soup)
        microdata = self.extract_microdata(soup)
        rdfa = self.extract_rdfa(soup)

        types: list[str] = []

        def _add(value: Any) -> None:
            if isinstance(value, str) and value and value not in types:
                types.append(value)

        for schema in json_ld:
            raw_type = schema.get("@type")
            for value in raw_type if isinstance(raw_type, list) else [raw_type]:
                _add(value)
        for item in (*microdata, *rdfa):
            _add(item.type)

        report = SchemaReport(
            url=url,
            json_ld=tuple(json_ld),
            microdata=tuple(microdata),
            rdfa=tuple(rdfa),
            types=tuple(types),
        )
        logger.info("Found %d schemas on %s (types: %s)", report.total_schemas, url, ", ".join(types))
        return report

    def extract_json_ld(self, soup: BeautifulSoup) -> list[dict[str, Any]]:
        """Top-level JSON-LD items: ``@graph`` members, array entries or the object itself."""
        schemas: list[dict[str, Any]] = []
        for script in soup.find_all("script", attrs=JSON_LD_SELECTOR):
            try:
                parsed = json.loads(script.string or "")
            except (ValueError, RecursionError) as exc:
                logger.warning("Error parsing JSON-LD: %s", exc)
                continue
            if isinstance(parsed, dict) and isinstance(parsed.get("@graph"), list):
                entries = parsed["@graph"]
            elif isinstance(parsed, list):
                entries = parsed
            else:
                entries = [parsed]
            schemas.extend(entry for entry in entries if isinstance(entry, dict))
        return schemas

    def extract_microdata(self, soup: BeautifulSoup) -> list[SchemaItem]:
        items: list[SchemaItem] = []
        for element in soup.select("[itemscope]"):
            properties: dict[str, str] = {}
            for prop in element.select("[itemprop]"):
                properties[_attr(prop, "itemprop")] = (
                    _attr(prop, "content")
                    or _attr(prop, "href")
                    or _attr(prop, "src")
                    or prop.get_text().strip()
                )
            if properties:
                items.append(SchemaItem(type=_attr(element, "itemtype") or "Unknown", properties=properties))
        return items

    def extract_rdfa(self, soup: BeautifulSoup) -> list[SchemaItem]:
        items: list[SchemaItem] = []
        for element in soup.select("[typeof]"):
            properties: dict[str, str] = {}
            for prop in element.select("[property]"):
                properties[_attr(prop, "property")] = (
                    _attr(prop, "content")
                    or _attr(prop, "href")
                    or prop.get_text().strip()
                )
            if properties:
                items.append(SchemaItem(type=_attr(element, "typeof") or "Unknown", properties=properties))
        return items

    # ------------------------------------------------------------------
    # Live URL
    # ------------------------------------------------------------------

    async def validate_url(self, url: str) -> SchemaReport:
        """Fetch *url* (static HTML, no rendering) and extract its schemas.

        Raises:
            AuditError: A subclass describing why the page could not be fetched.
        """
        logger.info("Starting schema validation for %s", url)
        html = await self._fetcher.fetch(url)
        return self.extract(html, url=url)
