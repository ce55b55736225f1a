"""Single-page audit module."""

from seo_auditor.modules.audit.auditor import PageAuditor

__all__ = ["PageAuditor"]
