"""Structured data (JSON-LD / Microdata / RDFa) module."""

from seo_auditor.modules.structured_data.extractor import (
    StructuredDataExtractor,
    format_postal_address,
    is_local_business_type,
)
from seo_auditor.modules.structured_data.validator import (
    SchemaValidator,
    validate_schema_structure,
)

__all__ = [
    "StructuredDataExtractor",
    "SchemaValidator",
    "format_postal_address",
    "is_local_business_type",
    "validate_schema_structure",
]
