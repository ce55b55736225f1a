"""Fact extraction: turns rendered HTML into a normalised :class:`PageFacts`.

Everything here is presence/shape based: a missing tag yields an empty string
or a zero count, never an error.  No network access.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from seo_auditor.models import (
    ContentFacts,
    HeadingFacts,
    ImageFacts,
    ImageInfo,
    LinkFacts,
    MetaFacts,
    PageFacts,
)
from seo_auditor.modules.page_facts.signals import clean_title, find_social_profiles, is_tracking_pixel
from seo_auditor.settings import Settings, default_settings
from seo_auditor.utils.helpers import extract_hostname, percentage
from seo_auditor.utils.text_processing import collapse_whitespace, count_words

logger = logging.getLogger(__name__)


def parse_html(html: str) -> BeautifulSoup:
    """Parse rendered HTML once; every extractor shares the resulting tree."""
    return BeautifulSoup(html or "", "lxml")


def body_text(soup: BeautifulSoup) -> str:
    """Visible body text with whitespace collapsed (empty when there is no body)."""
    body = soup.body
    if body is None:
        return ""
    return collapse_whitespace(body.get_text())


class FactExtractor:
    """Build :class:`PageFacts` from a parsed document and its raw HTML."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or default_settings()

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def extract(self, soup: BeautifulSoup, html: str, url: str) -> PageFacts:
        """Extract every page fact.

        Args:
            soup: Parsed document (see :func:`parse_html`).
            html: Raw rendered HTML, used for the rendering ratio.
            url: Page URL, used to classify links as internal.

        Returns:
            An immutable :class:`PageFacts`.
        """
        text = body_text(soup)
        facts = PageFacts(
            meta=self.extract_meta(soup),
            headings=self.extract_headings(soup),
            images=self.extract_images(soup),
            links=self.extract_links(soup, url),
            content=ContentFacts(word_count=count_words(text), character_count=len(text)),
            social=find_social_profiles(soup, self._settings.social_platforms),
            rendering_ratio=percentage(len(text), len(html or "")),
        )
        logger.debug(
            "Page facts for %s: title=%d chars, h1=%d, images=%d, links=%d, words=%d",
            url, facts.meta.title_length, facts.headings.h1_count,
            facts.images.total, facts.links.total, facts.content.word_count,
        )
        return facts

    # ------------------------------------------------------------------
    # Individual fact groups
    # ------------------------------------------------------------------

    def extract_meta(self, soup: BeautifulSoup) -> MetaFacts:
        title_tag = soup.find("title")
        title = title_tag.get_text().strip() if title_tag else ""
        title = clean_title(title, self._settings.payment_keywords)

        desc_tag = soup.find("meta", attrs={"name": "description"})
        description = (desc_tag.get("content") or "") if desc_tag else ""

        viewport_tag = soup.find("meta", attrs={"name": "viewport"})
        viewport = (viewport_tag.get("content") or "") if viewport_tag else ""

        return MetaFacts(
            title=title,
            title_length=len(title),
            description=description,
            description_length=len(description),
            has_viewport=len(viewport) > 0,
            og_tag_count=len(soup.select('meta[property^="og:"]')),
            twitter_tag_count=len(soup.select('meta[name^="twitter:"]')),
        )

    def extract_headings(self, soup: BeautifulSoup) -> HeadingFacts:
        counts = {level: len(soup.find_all(f"h{level}")) for level in range(1, 7)}
        h1_texts = tuple(
            text for text in (h.get_text().strip() for h in soup.find_all("h1")) if text
        )
        return HeadingFacts(
            h1_count=counts[1],
            h2_count=counts[2],
            h3_count=counts[3],
            h4_count=counts[4],
            h5_count=counts[5],
            h6_count=counts[6],
            h1_texts=h1_texts,
        )

    def extract_images(self, soup: BeautifulSoup) -> ImageFacts:
        images: list[ImageInfo] = []
        with_alt = 0
        for img in soup.find_all("img"):
            src = img.get("src") or ""
            alt = img.get("alt")
            has_alt = alt is not None and len(alt.strip()) > 0
            if has_alt:
                with_alt += 1
            images.append(ImageInfo(
                src=src,
                alt_text=alt or "",
                has_alt=has_alt,
                is_tracking_pixel=is_tracking_pixel(src, img.get("width"), img.get("height")),
            ))
        return ImageFacts(total=len(images), with_alt=with_alt, images=tuple(images))

    def extract_links(self, soup: BeautifulSoup, url: str) -> LinkFacts:
        """Count anchors.

        Internal: ``href`` starts with ``/`` or contains the page hostname.
        External: otherwise, ``href`` starts with ``http``.  Anything else
        (``#frag``, ``mailto:``, relative paths) only counts in the total.
        """
        hostname = extract_hostname(url)
        total = internal = external = 0
        for a_tag in soup.find_all("a", href=True):
            total += 1
            href = a_tag.get("href") or ""
            if href.startswith("/") or (hostname and hostname in href):
                internal += 1
            elif href.startswith("http"):
                external += 1
        return LinkFacts(total=total, internal=internal, external=external)
