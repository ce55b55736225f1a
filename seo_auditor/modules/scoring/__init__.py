"""Scoring module."""

from seo_auditor.modules.scoring.engine import (
    ScoringEngine,
    grade_for,
    on_page_message,
    on_page_percentage,
)

__all__ = ["ScoringEngine", "grade_for", "on_page_message", "on_page_percentage"]
