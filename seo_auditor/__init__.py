"""SEO Page Auditor: deterministic single-page SEO audit engine."""

__version__ = "1.0.0"
