"""Immutable audit records. Import every record type from here."""

from seo_auditor.models.alt_tags import AltTagImage, AltTagReport
from seo_auditor.models.audit import (
    AuditInput,
    AuditResult,
    PerformanceFacts,
    TechnicalFlags,
)
from seo_auditor.models.contact import ContactFacts
from seo_auditor.models.page import (
    ContentFacts,
    HeadingFacts,
    ImageFacts,
    ImageInfo,
    LinkFacts,
    MetaFacts,
    PageFacts,
    SocialProfiles,
)
from seo_auditor.models.scoring import (
    Category,
    Priority,
    Recommendation,
    RuleResult,
    ScoreBreakdown,
)
from seo_auditor.models.structured_data import (
    SchemaItem,
    SchemaReport,
    StructuredDataSet,
)

__all__ = [
    "AltTagImage",
    "AltTagReport",
    "AuditInput",
    "AuditResult",
    "PerformanceFacts",
    "TechnicalFlags",
    "ContactFacts",
    "ContentFacts",
    "HeadingFacts",
    "ImageFacts",
    "ImageInfo",
    "LinkFacts",
    "MetaFacts",
    "PageFacts",
    "SocialProfiles",
    "Category",
    "Priority",
    "Recommendation",
    "RuleResult",
    "ScoreBreakdown",
    "SchemaItem",
    "SchemaReport",
    "StructuredDataSet",
]
