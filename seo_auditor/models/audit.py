"""Engine input and output contracts."""

from dataclasses import dataclass, field
from typing import Any, Optional

from seo_auditor.models.base import Record
from seo_auditor.models.contact import ContactFacts
from seo_auditor.models.page import PageFacts
from seo_auditor.models.scoring import Recommendation, ScoreBreakdown
from seo_auditor.models.structured_data import StructuredDataSet


@dataclass(frozen=True)
class TechnicalFlags(Record):
    """Infrastructure facts resolved outside the engine."""
    has_ssl: bool = False
    has_robots_txt: bool = False
    has_sitemap: bool = False
    has_analytics: bool = False


@dataclass(frozen=True)
class AuditInput(Record):
    url: str
    rendered_html: str
    technical: TechnicalFlags = field(default_factory=TechnicalFlags)


@dataclass(frozen=True)
class PerformanceFacts(Record):
    page_size_kb: int = 0
    load_time_ms: Optional[int] = None


@dataclass(frozen=True)
class AuditResult(Record):
    url: str
    page_facts: PageFacts
    structured_data: StructuredDataSet
    contact: ContactFacts
    technical: TechnicalFlags
    score_breakdown: ScoreBreakdown
    recommendations: tuple[Recommendation, ...]
    performance: PerformanceFacts = field(default_factory=PerformanceFacts)

    @property
    def score(self) -> int:
        return self.score_breakdown.total

    @property
    def grade(self) -> str:
        return self.score_breakdown.grade

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "score": self.score,
            "grade": self.grade,
            "page_facts": self.page_facts.to_dict(),
            "structured_data": self.structured_data.to_dict(),
            "contact": self.contact.to_dict(),
            "technical": self.technical.to_dict(),
            "score_breakdown": self.score_breakdown.to_dict(),
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "performance": self.performance.to_dict(),
        }
