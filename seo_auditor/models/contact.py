"""Business identity (NAP) facts."""

from dataclasses import dataclass
from typing import Optional

from seo_auditor.models.base import Record


@dataclass(frozen=True)
class ContactFacts(Record):
    phone: Optional[str] = None
    phone_source: Optional[str] = None
    address: Optional[str] = None
    address_source: Optional[str] = None

    @property
    def has_phone(self) -> bool:
        return self.phone is not None

    @property
    def has_address(self) -> bool:
        return self.address is not None
