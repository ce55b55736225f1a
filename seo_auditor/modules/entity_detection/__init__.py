"""Business identity (phone / address) detection module."""

from seo_auditor.modules.entity_detection.detector import EntityDetector

__all__ = ["EntityDetector"]
