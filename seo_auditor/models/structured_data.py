"""Structured-data records: the scoring view and the validation view."""

from dataclasses import dataclass, field
from typing import Any

from seo_auditor.models.base import Record


@dataclass(frozen=True)
class StructuredDataSet(Record):
    """Schema.org signals found on a page.

    ``schema_types`` keeps first-seen order without duplicates.
    ``postal_addresses`` holds address candidates found while walking the
    JSON-LD graphs, in document order.
    """
    schema_types: tuple[str, ...] = ()
    has_identity_schema: bool = False
    identity_type: str = ""
    has_local_business_schema: bool = False
    has_valid_json_ld: bool = False
    json_ld_script_count: int = 0
    json_ld_errors: int = 0
    has_microdata: bool = False
    has_rdfa: bool = False
    postal_addresses: tuple[str, ...] = ()

    @property
    def has_any_structured_data(self) -> bool:
        return bool(self.schema_types) or self.has_microdata or self.has_rdfa

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["has_any_structured_data"] = self.has_any_structured_data
        return data


@dataclass(frozen=True)
class SchemaItem(Record):
    """One Microdata or RDFa item with its flattened properties."""
    type: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SchemaReport(Record):
    """Full structured-data extraction for a page (validation view)."""
    url: str
    json_ld: tuple[dict[str, Any], ...] = ()
    microdata: tuple[SchemaItem, ...] = ()
    rdfa: tuple[SchemaItem, ...] = ()
    types: tuple[str, ...] = ()

    @property
    def total_schemas(self) -> int:
        return len(self.json_ld) + len(self.microdata) + len(self.rdfa)

    @property
    def has_schema(self) -> bool:
        return self.total_schemas > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "schemas": {
                "json_ld": list(self.json_ld),
                "microdata": [item.to_dict() for item in self.microdata],
                "rdfa": [item.to_dict() for item in self.rdfa],
            },
            "summary": {
                "total_schemas": self.total_schemas,
                "types": list(self.types),
                "has_schema": self.has_schema,
            },
        }
