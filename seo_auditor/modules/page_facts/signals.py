"""Small page signals: analytics tags, tracking pixels, social profiles and title clean-up."""

import logging
import re
from typing import Iterable, Optional, Sequence

from bs4 import BeautifulSoup

from seo_auditor.models import SocialProfiles
from seo_auditor.utils.text_processing import collapse_whitespace, leading_int

logger = logging.getLogger(__name__)

TRACKING_SRC_HINTS = ("tracking", "pixel", "analytics")


def detect_analytics(html: str, signatures: Iterable[str]) -> bool:
    """Return True when any tracking-script signature occurs in the raw HTML."""
    for signature in signatures:
        if signature and signature in html:
            logger.debug("Analytics signature matched: %s", signature)
            return True
    return False


def is_tracking_pixel(src: str, width: Optional[str], height: Optional[str]) -> bool:
    """True for 1x1 beacons and images whose source looks like a tracker.

    Dimensions are read like HTML authors write them, so ``"1px"`` counts as 1.
    """
    for dim in (width, height):
        value = leading_int(dim)
        if value is not None and value <= 1:
            return True
    return any(hint in src for hint in TRACKING_SRC_HINTS)


def find_social_profiles(
    soup: BeautifulSoup,
    platforms: Sequence[tuple[str, Sequence[str]]],
) -> SocialProfiles:
    """Find the first linked profile URL for each configured platform.

    Anchors are scanned in document order.  The ``og:url`` meta value is a
    fallback for Facebook only.
    """
    found: dict[str, str] = {}
    for a_tag in soup.find_all("a", href=True):
        href = a_tag.get("href") or ""
        for name, patterns in platforms:
            if name in found:
                continue
            if any(p in href for p in patterns):
                found[name] = href

    if "facebook" not in found:
        og_url = soup.find("meta", attrs={"property": "og:url"})
        content = (og_url.get("content") or "") if og_url else ""
        if "facebook.com/" in content:
            found["facebook"] = content

    ordered = tuple((name, found[name]) for name, _ in platforms if name in found)
    return SocialProfiles(profiles=ordered)


def clean_title(title: str, payment_keywords: Sequence[str]) -> str:
    """Strip payment-method words that storefront widgets inject into titles.

    Trailing keywords are removed one by one.  A second pass removing every
    occurrence is kept only when it shortens the title to under 80% of its
    length, so genuine uses of the words survive.
    """
    if not title or not payment_keywords:
        return title

    for keyword in payment_keywords:
        title = re.sub(rf"\s*\b{re.escape(keyword)}\s*$", "", title, flags=re.IGNORECASE).strip()

    alternation = "|".join(re.escape(k) for k in payment_keywords)
    cleaned = re.sub(rf"\s*[-|]?\s*({alternation})\s*", " ", title, flags=re.IGNORECASE)
    cleaned = collapse_whitespace(cleaned)
    if cleaned and len(cleaned) < len(title) * 0.8:
        logger.debug("Title cleaned of payment keywords: %r -> %r", title, cleaned)
        return cleaned
    return title
