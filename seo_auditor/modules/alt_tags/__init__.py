"""Alt-attribute checker module."""

from seo_auditor.modules.alt_tags.checker import AltTagChecker

__all__ = ["AltTagChecker"]
