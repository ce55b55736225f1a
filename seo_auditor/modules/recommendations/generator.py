"""Prioritised remediation list.

Rules are evaluated in a fixed order (high-priority on-page issues first,
then technical, local and social) and never suppress each other.  The
generator does not look at the score breakdown.
"""

import logging
from typing import Optional

from seo_auditor.models import (
    Category,
    ContactFacts,
    PageFacts,
    Priority,
    Recommendation,
    StructuredDataSet,
    TechnicalFlags,
)

logger = logging.getLogger(__name__)

TITLE_RANGE = (50, 60)
DESCRIPTION_RANGE = (120, 160)
MIN_WORDS = 300


def _length_advice(label: str, length: int, bounds: tuple[int, int]) -> Optional[str]:
    low, high = bounds
    if length < low:
        return f"Increase {label} length from {length} to {low}-{high} characters"
    if length > high:
        return f"Shorten {label} length from {length} to {low}-{high} characters"
    return None


class RecommendationGenerator:
    """Build the ordered :class:`Recommendation` list for one page."""

    def generate(
        self,
        page_facts: PageFacts,
        structured_data: StructuredDataSet,
        contact: ContactFacts,
        technical: TechnicalFlags,
    ) -> list[Recommendation]:
        recommendations = [
            *self._on_page(page_facts),
            *self._technical(technical, structured_data),
            *self._local(contact, structured_data),
            *self._social(page_facts),
        ]
        logger.debug("Generated %d recommendations", len(recommendations))
        return recommendations

    # ------------------------------------------------------------------
    # Rule groups
    # ------------------------------------------------------------------

    def _on_page(self, facts: PageFacts) -> list[Recommendation]:
        cat = Category.ON_PAGE
        meta, headings, images = facts.meta, facts.headings, facts.images
        recs: list[Recommendation] = []

        if not meta.has_title:
            recs.append(Recommendation("Add a Title Tag to your page", cat, Priority.HIGH))
        else:
            advice = _length_advice("Title Tag", meta.title_length, TITLE_RANGE)
            if advice:
                recs.append(Recommendation(advice, cat, Priority.HIGH))

        if not meta.has_description:
            recs.append(Recommendation("Add a Meta Description to your page", cat, Priority.HIGH))
        else:
            advice = _length_advice("Meta Description", meta.description_length, DESCRIPTION_RANGE)
            if advice:
                recs.append(Recommendation(advice, cat, Priority.HIGH))

        if headings.h1_count == 0:
            recs.append(Recommendation("Add exactly one H1 Header Tag to your page", cat, Priority.HIGH))
        elif headings.h1_count > 1:
            recs.append(Recommendation(
                f"Reduce H1 tags from {headings.h1_count} to exactly 1", cat, Priority.HIGH,
            ))

        if headings.h2_count < 2:
            recs.append(Recommendation(
                "Add more H2-H6 heading tags to improve content structure", cat, Priority.MEDIUM,
            ))

        if images.total > 0 and images.alt_percentage < 100:
            missing = 100 - images.alt_percentage
            recs.append(Recommendation(
                f"Add Alt Attributes to {images.without_alt} images ({missing}% missing)",
                cat, Priority.MEDIUM,
            ))

        words = facts.content.word_count
        if words < MIN_WORDS:
            recs.append(Recommendation(
                f"Increase content length from {words} to at least {MIN_WORDS} words", cat, Priority.MEDIUM,
            ))
        return recs

    def _technical(self, technical: TechnicalFlags, structured_data: StructuredDataSet) -> list[Recommendation]:
        cat = Category.TECHNICAL
        recs: list[Recommendation] = []
        if not technical.has_robots_txt:
            recs.append(Recommendation("Create a robots.txt file", cat, Priority.MEDIUM))
        if not technical.has_sitemap:
            recs.append(Recommendation("Create an XML Sitemap", cat, Priority.MEDIUM))
        if not technical.has_analytics:
            recs.append(Recommendation("Implement an Analytics Tracking Tool", cat, Priority.LOW))
        if not structured_data.has_any_structured_data:
            recs.append(Recommendation("Add Schema.org Structured Data", cat, Priority.MEDIUM))
        if not structured_data.has_identity_schema:
            recs.append(Recommendation("Add Identity Schema (Organization or Person)", cat, Priority.MEDIUM))
        return recs

    def _local(self, contact: ContactFacts, structured_data: StructuredDataSet) -> list[Recommendation]:
        cat = Category.LOCAL
        recs: list[Recommendation] = []
        if not contact.has_phone:
            recs.append(Recommendation("Add Phone Number to Website", cat, Priority.MEDIUM))
        if not contact.has_address:
            recs.append(Recommendation("Add Address Information to Website", cat, Priority.MEDIUM))
        if not structured_data.has_local_business_schema:
            recs.append(Recommendation("Add Local Business Schema", cat, Priority.LOW))
        return recs

    def _social(self, facts: PageFacts) -> list[Recommendation]:
        # Only the two primary platforms get a recommendation of their own.
        recs: list[Recommendation] = []
        if not facts.social.has("facebook"):
            recs.append(Recommendation("Create and link your Facebook Page", Category.SOCIAL, Priority.LOW))
        if not facts.social.has("instagram"):
            recs.append(Recommendation(
                "Create and link an associated Instagram Profile", Category.SOCIAL, Priority.LOW,
            ))
        return recs
