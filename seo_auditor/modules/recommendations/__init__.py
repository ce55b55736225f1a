"""Recommendation generation module."""

from seo_auditor.modules.recommendations.generator import RecommendationGenerator

__all__ = ["RecommendationGenerator"]
