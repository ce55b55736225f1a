"""Business identity detection: phone number and postal address.

Both pipelines are ordered lists of sources.  The first source that yields
any candidate wins and its first candidate is taken; later sources are not
consulted.  Matching is shape-only (no checksum, no geocoding).
"""

import logging
import re
from typing import Callable, Optional

from bs4 import BeautifulSoup

from seo_auditor.models import ContactFacts, StructuredDataSet
from seo_auditor.utils.text_processing import collapse_whitespace

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns (order matters)
# ---------------------------------------------------------------------------

PHONE_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("country_code", re.compile(r"\+1[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}", re.ASCII)),
    ("standard", re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}", re.ASCII)),
    ("international", re.compile(r"\+\d{1,3}[-.\s]?\d{1,4}[-.\s]?\d{1,4}[-.\s]?\d{1,9}", re.ASCII)),
    ("separated", re.compile(r"\d{3}[.\s]\d{3}[.\s]\d{4}", re.ASCII)),
)

_STREET_TYPES = (
    "Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr|Court|Ct|"
    "Circle|Cir|Way|Place|Pl|Plaza|Square|Trail|Parkway|Pkwy|Highway|Hwy"
)
US_ADDRESS_PATTERN = re.compile(
    r"\b\d{1,5}\s+[A-Za-z][A-Za-z\s.]+?\s+(?:" + _STREET_TYPES + r")\b"
    r"[,\s]*(?:[A-Za-z\s]+)?[,\s]*(?:[A-Z]{2})?\s*\d{5}?",
    re.IGNORECASE | re.ASCII,
)
PO_BOX_PATTERN = re.compile(
    r"P\.?O\.?\s*Box\s+\d+[,\s]*[A-Za-z\s]*[,\s]*[A-Z]{2}\s*\d{5}",
    re.IGNORECASE | re.ASCII,
)

ADDRESS_SELECTORS: tuple[str, ...] = (
    ".address",
    "#address",
    '[class*="address"]',
    ".location",
    "#location",
    '[class*="location"]',
    ".contact-info",
    ".contact-address",
)

_MIN_BLOCK_LENGTH = 15
_MAX_BLOCK_LENGTH = 200
_DIGIT_RE = re.compile(r"\d")


def _block_text(element) -> str:
    return collapse_whitespace(element.get_text())


def _plausible_block(text: str) -> bool:
    return _MIN_BLOCK_LENGTH < len(text) < _MAX_BLOCK_LENGTH


class EntityDetector:
    """Detect a canonical phone number and address (:class:`ContactFacts`)."""

    def detect(
        self,
        text: str,
        soup: BeautifulSoup,
        structured_data: StructuredDataSet,
    ) -> ContactFacts:
        """Run both detection pipelines.

        Args:
            text: Whitespace-collapsed body text.
            soup: Parsed document.
            structured_data: Result of the structured data extractor; its
                postal addresses take precedence over pattern matches.
        """
        phone, phone_source = self.detect_phone(text, soup)
        address, address_source = self.detect_address(text, soup, structured_data)
        logger.debug("Phone: %r (%s)", phone, phone_source)
        if address:
            logger.debug("Address: %r (source: %s)", address, address_source)
        else:
            logger.debug("Address: not found")
        return ContactFacts(
            phone=phone,
            phone_source=phone_source,
            address=address,
            address_source=address_source,
        )

    # ------------------------------------------------------------------
    # Phone
    # ------------------------------------------------------------------

    def detect_phone(self, text: str, soup: BeautifulSoup) -> tuple[Optional[str], Optional[str]]:
        for link in soup.select('a[href^="tel:"]'):
            display = link.get_text().strip()
            if display and _DIGIT_RE.search(display):
                return display, "tel_link"

        for family, pattern in PHONE_PATTERNS:
            match = pattern.search(text)
            if match:
                logger.debug("Phone matched by %s pattern", family)
                return match.group(0), "body_text"
        return None, None

    # ------------------------------------------------------------------
    # Address
    # ------------------------------------------------------------------

    def detect_address(
        self,
        text: str,
        soup: BeautifulSoup,
        structured_data: StructuredDataSet,
    ) -> tuple[Optional[str], Optional[str]]:
        sources: list[tuple[str, Callable[[], list[str]]]] = [
            ("schema_org", lambda: list(structured_data.postal_addresses)),
            ("us_address_pattern", lambda: US_ADDRESS_PATTERN.findall(text)),
            ("po_box_pattern", lambda: PO_BOX_PATTERN.findall(text)),
            ("microdata", lambda: self._microdata_addresses(soup)),
        ]
        for selector in ADDRESS_SELECTORS:
            sources.append((f"css_selector:{selector}", self._selector_source(soup, selector)))

        for name, source in sources:
            candidates = [c.strip() for c in source() if c and c.strip()]
            if candidates:
                return candidates[0], name
            logger.debug("Address source %s yielded nothing", name)
        return None, None

    def _microdata_addresses(self, soup: BeautifulSoup) -> list[str]:
        blocks = (_block_text(el) for el in soup.select('[itemprop*="address"], [itemtype*="PostalAddress"]'))
        return [block for block in blocks if _plausible_block(block)]

    def _selector_source(self, soup: BeautifulSoup, selector: str) -> Callable[[], list[str]]:
        def _collect() -> list[str]:
            blocks = (_block_text(el) for el in soup.select(selector))
            return [b for b in blocks if _plausible_block(b) and _DIGIT_RE.search(b)]
        return _collect
