"""Page fact extraction module."""

from seo_auditor.modules.page_facts.extractor import FactExtractor, body_text, parse_html
from seo_auditor.modules.page_facts.signals import (
    clean_title,
    detect_analytics,
    find_social_profiles,
    is_tracking_pixel,
)

__all__ = [
    "FactExtractor",
    "body_text",
    "parse_html",
    "clean_title",
    "detect_analytics",
    "find_social_profiles",
    "is_tracking_pixel",
]
