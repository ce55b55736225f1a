"""Score breakdown and recommendation records."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from seo_auditor.models.base import Record


class Category(str, Enum):
    ON_PAGE = "On-Page SEO"
    TECHNICAL = "Technical SEO"
    LOCAL = "Local SEO"
    SOCIAL = "Social"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class RuleResult(Record):
    """Outcome of one scoring rule, kept for the audit trail."""
    category: Category
    rule: str
    points: int
    max_points: int
    message: str

    @property
    def passed(self) -> bool:
        return self.points == self.max_points

    def __str__(self) -> str:
        mark = "✓" if self.passed else "✗"
        return f"{mark} {self.message}: +{self.points}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "rule": self.rule,
            "points": self.points,
            "max_points": self.max_points,
            "passed": self.passed,
            "message": self.message,
        }


@dataclass(frozen=True)
class ScoreBreakdown(Record):
    on_page: int
    technical: int
    local: int
    social: int
    grade: str
    on_page_percentage: int
    on_page_message: str
    details: tuple[RuleResult, ...] = ()

    @property
    def total(self) -> int:
        return self.on_page + self.technical + self.local + self.social

    def to_dict(self) -> dict[str, Any]:
        return {
            "on_page": self.on_page,
            "technical": self.technical,
            "local": self.local,
            "social": self.social,
            "total": self.total,
            "grade": self.grade,
            "on_page_percentage": self.on_page_percentage,
            "on_page_message": self.on_page_message,
            "details": [rule.to_dict() for rule in self.details],
        }


@dataclass(frozen=True)
class Recommendation(Record):
    title: str
    category: Category
    priority: Priority

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "category": self.category.value,
            "priority": self.priority.value,
        }
