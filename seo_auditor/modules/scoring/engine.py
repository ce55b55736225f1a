"""Weighted four-category scoring.

On-Page (45) + Technical (30) + Local (15) + Social (10) = 100.  Each rule is
a flat award keyed to a threshold and produces one :class:`RuleResult`; the
category total is the sum of its rules.
"""

import logging

from seo_auditor.models import (
    Category,
    ContactFacts,
    PageFacts,
    RuleResult,
    ScoreBreakdown,
    StructuredDataSet,
    TechnicalFlags,
)
from seo_auditor.utils.helpers import round_half_up

logger = logging.getLogger(__name__)

ON_PAGE_MAX = 45
TECHNICAL_MAX = 30
LOCAL_MAX = 15
SOCIAL_MAX = 10

_GRADE_MAP = [
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "C-"),
    (45, "D+"),
    (40, "D"),
    (35, "D-"),
]

_ON_PAGE_MESSAGES = [
    (90, "Your On-Page SEO is excellent!"),
    (80, "Your On-Page SEO is very good!"),
    (70, "Your On-Page SEO is good!"),
    (60, "Your On-Page SEO needs improvement"),
]


def grade_for(score: int) -> str:
    for threshold, letter in _GRADE_MAP:
        if score >= threshold:
            return letter
    return "F"


def on_page_percentage(points: int) -> int:
    return round_half_up(points / ON_PAGE_MAX * 100)


def on_page_message(percentage: int) -> str:
    for threshold, message in _ON_PAGE_MESSAGES:
        if percentage >= threshold:
            return message
    return "Your On-Page SEO needs significant work"


def _rule(category: Category, rule: str, points: int, max_points: int, message: str) -> RuleResult:
    result = RuleResult(category=category, rule=rule, points=points, max_points=max_points, message=message)
    logger.debug(
        "%s", result,
        extra={"category": category.value, "rule": rule, "points": points},
    )
    return result


class ScoringEngine:
    """Turn extracted facts into a :class:`ScoreBreakdown`.

    Stateless; one instance may score any number of pages concurrently.
    """

    def score(
        self,
        page_facts: PageFacts,
        structured_data: StructuredDataSet,
        contact: ContactFacts,
        technical: TechnicalFlags,
    ) -> ScoreBreakdown:
        on_page = self.score_on_page(page_facts)
        tech = self.score_technical(technical, structured_data)
        local = self.score_local(contact, structured_data)
        social = self.score_social(page_facts)

        totals = [sum(r.points for r in rules) for rules in (on_page, tech, local, social)]
        percentage = on_page_percentage(totals[0])
        breakdown = ScoreBreakdown(
            on_page=totals[0],
            technical=totals[1],
            local=totals[2],
            social=totals[3],
            grade=grade_for(sum(totals)),
            on_page_percentage=percentage,
            on_page_message=on_page_message(percentage),
            details=tuple(on_page + tech + local + social),
        )

        logger.debug(
            "Score breakdown: on-page %d/%d, technical %d/%d, local %d/%d, social %d/%d, total %d (%s)",
            breakdown.on_page, ON_PAGE_MAX, breakdown.technical, TECHNICAL_MAX,
            breakdown.local, LOCAL_MAX, breakdown.social, SOCIAL_MAX,
            breakdown.total, breakdown.grade,
        )
        return breakdown

    # ------------------------------------------------------------------
    # On-Page SEO (45)
    # ------------------------------------------------------------------

    def score_on_page(self, facts: PageFacts) -> list[RuleResult]:
        cat = Category.ON_PAGE
        meta, headings, images = facts.meta, facts.headings, facts.images
        words = facts.content.word_count
        results: list[RuleResult] = []

        # Title (12)
        length = meta.title_length
        if not meta.has_title:
            results.append(_rule(cat, "title", 0, 12, "Missing Title Tag"))
        elif 50 <= length <= 60:
            results.append(_rule(cat, "title", 12, 12, "Title Tag Perfect (optimal length 50-60)"))
        elif 30 <= length <= 70:
            results.append(_rule(cat, "title", 4, 12, f"Title Tag Acceptable ({length} chars, optimal 50-60)"))
        else:
            results.append(_rule(cat, "title", 1, 12, f"Title Tag Poor ({length} chars, need 50-60)"))

        # Meta description (8)
        length = meta.description_length
        if not meta.has_description:
            results.append(_rule(cat, "description", 0, 8, "Missing Meta Description"))
        elif 120 <= length <= 160:
            results.append(_rule(cat, "description", 8, 8, "Meta Description Perfect (optimal length 120-160)"))
        elif 50 <= length <= 200:
            results.append(_rule(
                cat, "description", 2, 8, f"Meta Description Acceptable ({length} chars, optimal 120-160)",
            ))
        else:
            results.append(_rule(cat, "description", 1, 8, f"Meta Description Poor ({length} chars, need 120-160)"))

        # H1 (8)
        if headings.h1_count == 1:
            if headings.h1_texts and len(headings.h1_texts[0]) >= 20:
                results.append(_rule(cat, "h1", 8, 8, "Perfect H1 (exactly 1 with good length)"))
            else:
                results.append(_rule(cat, "h1", 1, 8, "H1 Too Short (needs 20+ characters)"))
        elif headings.h1_count > 1:
            results.append(_rule(cat, "h1", 1, 8, f"Multiple H1 Tags ({headings.h1_count}, need exactly 1)"))
        else:
            results.append(_rule(cat, "h1", 0, 8, "Missing H1 Tag"))

        # Heading hierarchy (5)
        if headings.h2_count >= 3 and (headings.h3_count >= 2 or headings.h4_count >= 1):
            results.append(_rule(cat, "headings", 5, 5, "Excellent Heading Hierarchy (3+ H2, 2+ H3)"))
        elif headings.h2_count >= 2:
            results.append(_rule(cat, "headings", 2, 5, "Basic Heading Structure (needs 3+ H2, 2+ H3)"))
        else:
            results.append(_rule(cat, "headings", 0, 5, "Poor Heading Structure (no proper hierarchy)"))

        # Image alt text (4)
        if images.total == 0:
            results.append(_rule(cat, "image_alt", 2, 4, "No Images Found"))
        else:
            shown = images.alt_percentage
            if shown == 100:
                results.append(_rule(cat, "image_alt", 4, 4, "All Images Have Alt Text (100%)"))
            elif shown >= 80:
                results.append(_rule(cat, "image_alt", 2, 4, f"Most Images Have Alt ({shown}%, need 100%)"))
            elif shown >= 50:
                results.append(_rule(cat, "image_alt", 1, 4, f"Only {shown}% Images Have Alt (need 100%)"))
            else:
                results.append(_rule(cat, "image_alt", 0, 4, f"Few Images Have Alt ({shown}%)"))

        # Content length (8)
        if words >= 1000:
            results.append(_rule(cat, "content", 8, 8, f"Excellent Content Length ({words} words)"))
        elif words >= 500:
            results.append(_rule(cat, "content", 3, 8, f"Content Too Short ({words} words, need 1000+)"))
        elif words >= 300:
            results.append(_rule(cat, "content", 1, 8, f"Very Low Content ({words} words, need 1000+)"))
        elif words >= 50:
            results.append(_rule(cat, "content", 1, 8, f"Minimal Content ({words} words)"))
        else:
            results.append(_rule(cat, "content", 0, 8, f"Almost No Content ({words} words)"))

        return results

    # ------------------------------------------------------------------
    # Technical SEO (30)
    # ------------------------------------------------------------------

    def score_technical(self, technical: TechnicalFlags, structured_data: StructuredDataSet) -> list[RuleResult]:
        cat = Category.TECHNICAL
        results: list[RuleResult] = []

        if technical.has_ssl:
            results.append(_rule(cat, "ssl", 5, 5, "HTTPS Enabled"))
        else:
            results.append(_rule(cat, "ssl", 0, 5, "No HTTPS"))

        # robots.txt and sitemap award their 3 + 2 points together.
        if technical.has_robots_txt:
            results.append(_rule(cat, "robots_txt", 5, 5, "robots.txt Exists (+3) with Proper Rules (+2)"))
        else:
            results.append(_rule(cat, "robots_txt", 0, 5, "No robots.txt"))

        if technical.has_sitemap:
            results.append(_rule(cat, "sitemap", 5, 5, "XML Sitemap Exists (+3) and Accessible (+2)"))
        else:
            results.append(_rule(cat, "sitemap", 0, 5, "No XML Sitemap"))

        if technical.has_analytics:
            results.append(_rule(cat, "analytics", 3, 3, "Analytics Installed"))
        else:
            results.append(_rule(cat, "analytics", 0, 3, "No Analytics"))

        if structured_data.has_valid_json_ld:
            results.append(_rule(cat, "schema", 12, 12, "Schema.org with Valid JSON-LD"))
        elif structured_data.has_microdata or structured_data.has_rdfa:
            results.append(_rule(cat, "schema", 4, 12, "Schema Present but NOT JSON-LD (use JSON-LD)"))
        else:
            results.append(_rule(cat, "schema", 0, 12, "No Schema.org Structured Data"))

        return results

    # ------------------------------------------------------------------
    # Local SEO (15)
    # ------------------------------------------------------------------

    def score_local(self, contact: ContactFacts, structured_data: StructuredDataSet) -> list[RuleResult]:
        cat = Category.LOCAL
        return [
            _rule(cat, "phone", 3, 3, "Phone Number Found") if contact.has_phone
            else _rule(cat, "phone", 0, 3, "No Phone Number"),
            _rule(cat, "address", 4, 4, "Address Found") if contact.has_address
            else _rule(cat, "address", 0, 4, "No Address"),
            _rule(cat, "local_business_schema", 8, 8, "Local Business Schema Present")
            if structured_data.has_local_business_schema
            else _rule(cat, "local_business_schema", 0, 8, "No Local Business Schema"),
        ]

    # ------------------------------------------------------------------
    # Social (10)
    # ------------------------------------------------------------------

    def score_social(self, facts: PageFacts) -> list[RuleResult]:
        count = facts.social.count
        if count >= 2:
            return [_rule(Category.SOCIAL, "social_links", 10, 10, f"Multiple Social Links ({count})")]
        if count == 1:
            return [_rule(Category.SOCIAL, "social_links", 5, 10, "One Social Link")]
        return [_rule(Category.SOCIAL, "social_links", 0, 10, "No Social Links")]
