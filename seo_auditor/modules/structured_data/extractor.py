"""Structured data extraction for scoring.

Walks every JSON-LD payload recursively to collect Schema.org types (and any
postal addresses on the way), and checks for the presence of Microdata and
RDFa attributes.  One malformed script never stops the others from being read.
"""

import json
import logging
from typing import Any, Optional

from bs4 import BeautifulSoup

from seo_auditor.models import StructuredDataSet
from seo_auditor.settings import Settings, default_settings

logger = logging.getLogger(__name__)

JSON_LD_SELECTOR = {"type": "application/ld+json"}

IDENTITY_TYPES = frozenset({"Organization", "Person", "Corporation", "LocalBusiness"})
LOCAL_BUSINESS_TYPES = frozenset({"Restaurant", "Store", "MedicalBusiness", "ProfessionalService"})

_ADDRESS_PARTS = ("streetAddress", "addressLocality", "addressRegion", "postalCode")
_MIN_ADDRESS_LENGTH = 15


def is_local_business_type(schema_type: str) -> bool:
    return "LocalBusiness" in schema_type or schema_type in LOCAL_BUSINESS_TYPES


def format_postal_address(address: Any) -> Optional[str]:
    """Render an ``address`` value as one line, or None when too short.

    Strings are used as-is; PostalAddress objects join street, locality,
    region and postal code with ``", "``.  Results of 15 characters or fewer
    are rejected.
    """
    if isinstance(address, str):
        text = address.strip()
    elif isinstance(address, dict):
        parts = [str(address[key]).strip() for key in _ADDRESS_PARTS if address.get(key)]
        text = ", ".join(p for p in parts if p)
    else:
        return None
    return text if len(text) > _MIN_ADDRESS_LENGTH else None


def _types_of(node: dict[str, Any]) -> list[str]:
    raw = node.get("@type")
    values = raw if isinstance(raw, list) else [raw]
    return [value for value in values if isinstance(value, str) and value]


class _SchemaWalk:
    """Accumulator for one extraction run; never shared between audits."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        self.types: list[str] = []
        self.identity_type = ""
        self.has_local_business = False
        self.addresses: list[str] = []
        self.depth_exceeded = False

    def visit(self, node: Any, depth: int = 0) -> int:
        """Walk *node*, returning the number of typed entries encountered."""
        if depth > self.max_depth:
            if not self.depth_exceeded:
                logger.warning("JSON-LD nesting exceeds %d levels; deeper nodes ignored", self.max_depth)
                self.depth_exceeded = True
            return 0

        if isinstance(node, list):
            return sum(self.visit(item, depth + 1) for item in node if isinstance(item, (dict, list)))
        if not isinstance(node, dict):
            return 0

        graph = node.get("@graph")
        if isinstance(graph, list):
            return sum(self.visit(member, depth + 1) for member in graph if isinstance(member, (dict, list)))

        node_types = _types_of(node)
        for schema_type in node_types:
            self._record_type(schema_type)
        self._record_address(node, node_types)

        encountered = len(node_types)
        for value in node.values():
            if isinstance(value, (dict, list)):
                encountered += self.visit(value, depth + 1)
        return encountered

    def _record_type(self, schema_type: str) -> None:
        if schema_type in self.types:
            return
        self.types.append(schema_type)
        if schema_type in IDENTITY_TYPES and not self.identity_type:
            self.identity_type = schema_type
        if is_local_business_type(schema_type):
            self.has_local_business = True

    def _record_address(self, node: dict[str, Any], node_types: list[str]) -> None:
        candidates = []
        if "address" in node:
            candidates.append(format_postal_address(node["address"]))
        if "PostalAddress" in node_types:
            candidates.append(format_postal_address(node))
        for candidate in candidates:
            if candidate and candidate not in self.addresses:
                self.addresses.append(candidate)


class StructuredDataExtractor:
    """Produce a :class:`StructuredDataSet` from a parsed document."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or default_settings()

    def extract(self, soup: BeautifulSoup) -> StructuredDataSet:
        walk = _SchemaWalk(self._settings.max_schema_depth)
        scripts = soup.find_all("script", attrs=JSON_LD_SELECTOR)
        errors = 0
        has_valid_json_ld = False

        for index, script in enumerate(scripts):
            raw = script.string or ""
            if not raw:
                continue
            try:
                payload = json.loads(raw)
            except (ValueError, RecursionError) as exc:
                errors += 1
                logger.warning("Invalid JSON-LD in script #%d skipped: %s", index, exc)
                continue
            if walk.visit(payload) > 0:
                has_valid_json_ld = True

        has_microdata = soup.select_one("[itemtype], [itemscope]") is not None
        has_rdfa = soup.select_one("[vocab], [typeof]") is not None

        result = StructuredDataSet(
            schema_types=tuple(walk.types),
            has_identity_schema=bool(walk.identity_type),
            identity_type=walk.identity_type,
            has_local_business_schema=walk.has_local_business,
            has_valid_json_ld=has_valid_json_ld,
            json_ld_script_count=len(scripts),
            json_ld_errors=errors,
            has_microdata=has_microdata,
            has_rdfa=has_rdfa,
            postal_addresses=tuple(walk.addresses),
        )
        logger.debug(
            "Structured data: %d JSON-LD scripts (%d invalid), types=%s, microdata=%s, rdfa=%s",
            len(scripts), errors, list(result.schema_types), has_microdata, has_rdfa,
        )
        return result
