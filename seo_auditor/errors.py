"""Audit-level error types.

The engine itself never raises these for missing page signals; they describe
failures of the rendering/fetching step (no result is produced at all) and
broken configuration.
"""

from typing import Optional


class AuditError(Exception):
    """Base class for every failure that aborts an audit."""

    default_message = "Failed to analyze website"

    def __init__(self, message: Optional[str] = None, url: str = "") -> None:
        self.message = message or self.default_message
        self.url = url
        super().__init__(self.message)


class PageNotFoundError(AuditError):
    default_message = "Page not found. Please check the URL and try again."


class PageTimeoutError(AuditError):
    default_message = "Request timed out. The website took too long to respond."


class PageForbiddenError(AuditError):
    default_message = "Access forbidden. The website blocked our request."


class UpstreamServerError(AuditError):
    default_message = "The website server returned an error. Please try again later."


class RenderError(AuditError):
    default_message = "The page could not be rendered."


class ConfigurationError(AuditError):
    default_message = "Invalid configuration."


def error_for_status(status: int, url: str = "") -> Optional[AuditError]:
    """Map an HTTP status code to the matching :class:`AuditError`, if any."""
    if status == 404:
        return PageNotFoundError("Page not found (404). Please check the URL.", url=url)
    if status == 403:
        return PageForbiddenError(url=url)
    if status >= 500:
        return UpstreamServerError(url=url)
    return None
