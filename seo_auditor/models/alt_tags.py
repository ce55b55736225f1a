"""Alt-attribute audit records produced by the alt-tag checker."""

from dataclasses import dataclass
from typing import Any

from seo_auditor.models.base import Record
from seo_auditor.utils.helpers import percentage


@dataclass(frozen=True)
class AltTagImage(Record):
    """One ``<img>``.  ``has_alt`` is attribute presence, so ``alt=""`` counts."""
    src: str = ""
    alt: str = ""
    has_alt: bool = False
    is_tracking_pixel: bool = False

    @property
    def alt_length(self) -> int:
        return len(self.alt)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["alt_length"] = self.alt_length
        return data


@dataclass(frozen=True)
class AltTagReport(Record):
    """Alt coverage for a page, with tracking pixels set aside.

    Tracking pixels never count as missing alt text, and coverage is computed
    over the relevant (non-tracking) images only.
    """
    url: str = ""
    images: tuple[AltTagImage, ...] = ()

    @property
    def with_alt(self) -> tuple[AltTagImage, ...]:
        return tuple(img for img in self.images if img.has_alt)

    @property
    def without_alt(self) -> tuple[AltTagImage, ...]:
        return tuple(img for img in self.images if not img.has_alt and not img.is_tracking_pixel)

    @property
    def total_images(self) -> int:
        return len(self.images)

    @property
    def relevant_images(self) -> int:
        return sum(1 for img in self.images if not img.is_tracking_pixel)

    @property
    def tracking_pixels(self) -> int:
        return self.total_images - self.relevant_images

    @property
    def alt_coverage(self) -> int:
        """Percentage of relevant images carrying an alt attribute (0 when there are none)."""
        relevant_with_alt = sum(1 for img in self.images if img.has_alt and not img.is_tracking_pixel)
        return percentage(relevant_with_alt, self.relevant_images)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "statistics": {
                "total_images": self.total_images,
                "relevant_images": self.relevant_images,
                "images_with_alt": len(self.with_alt),
                "images_without_alt": len(self.without_alt),
                "tracking_pixels": self.tracking_pixels,
                "alt_coverage": self.alt_coverage,
            },
            "images": {
                "all": [img.to_dict() for img in self.images],
                "with_alt": [img.to_dict() for img in self.with_alt],
                "without_alt": [img.to_dict() for img in self.without_alt],
            },
        }
