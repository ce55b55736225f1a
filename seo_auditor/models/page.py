"""Page fact records produced by the fact extractor."""

from dataclasses import dataclass, field
from typing import Optional

from seo_auditor.models.base import Record
from seo_auditor.utils.helpers import percentage


@dataclass(frozen=True)
class MetaFacts(Record):
    title: str = ""
    title_length: int = 0
    description: str = ""
    description_length: int = 0
    has_viewport: bool = False
    og_tag_count: int = 0
    twitter_tag_count: int = 0

    @property
    def has_title(self) -> bool:
        return self.title_length > 0

    @property
    def has_description(self) -> bool:
        return self.description_length > 0

    @property
    def has_og_tags(self) -> bool:
        return self.og_tag_count > 0

    @property
    def has_twitter_card(self) -> bool:
        return self.twitter_tag_count > 0


@dataclass(frozen=True)
class HeadingFacts(Record):
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    h4_count: int = 0
    h5_count: int = 0
    h6_count: int = 0
    h1_texts: tuple[str, ...] = ()

    @property
    def has_h1(self) -> bool:
        return self.h1_count > 0


@dataclass(frozen=True)
class ImageInfo(Record):
    src: str = ""
    alt_text: str = ""
    has_alt: bool = False
    is_tracking_pixel: bool = False


@dataclass(frozen=True)
class ImageFacts(Record):
    """Image inventory.  ``with_alt + without_alt == total`` always holds."""
    total: int = 0
    with_alt: int = 0
    images: tuple[ImageInfo, ...] = ()

    @property
    def without_alt(self) -> int:
        return self.total - self.with_alt

    @property
    def tracking_pixel_count(self) -> int:
        return sum(1 for image in self.images if image.is_tracking_pixel)

    @property
    def alt_percentage(self) -> int:
        """Share of images with alt text; 100 when the page has no images."""
        if self.total == 0:
            return 100
        return percentage(self.with_alt, self.total)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["without_alt"] = self.without_alt
        data["alt_percentage"] = self.alt_percentage
        data["tracking_pixel_count"] = self.tracking_pixel_count
        return data


@dataclass(frozen=True)
class LinkFacts(Record):
    """Anchor counts.  Links that are neither internal nor external only count in ``total``."""
    total: int = 0
    internal: int = 0
    external: int = 0


@dataclass(frozen=True)
class ContentFacts(Record):
    word_count: int = 0
    character_count: int = 0


@dataclass(frozen=True)
class SocialProfiles(Record):
    """First profile URL found per social platform."""
    profiles: tuple[tuple[str, str], ...] = ()

    def url_for(self, platform: str) -> Optional[str]:
        for name, url in self.profiles:
            if name == platform:
                return url
        return None

    def has(self, platform: str) -> bool:
        return self.url_for(platform) is not None

    @property
    def count(self) -> int:
        return len(self.profiles)

    def to_dict(self) -> dict:
        return {"profiles": dict(self.profiles), "count": self.count}


@dataclass(frozen=True)
class PageFacts(Record):
    meta: MetaFacts = field(default_factory=MetaFacts)
    headings: HeadingFacts = field(default_factory=HeadingFacts)
    images: ImageFacts = field(default_factory=ImageFacts)
    links: LinkFacts = field(default_factory=LinkFacts)
    content: ContentFacts = field(default_factory=ContentFacts)
    social: SocialProfiles = field(default_factory=SocialProfiles)
    rendering_ratio: int = 0

    def to_dict(self) -> dict:
        return {
            "meta": self.meta.to_dict(),
            "headings": self.headings.to_dict(),
            "images": self.images.to_dict(),
            "links": self.links.to_dict(),
            "content": self.content.to_dict(),
            "social": self.social.to_dict(),
            "rendering_ratio": self.rendering_ratio,
        }
