"""Shared behaviour for the immutable audit records."""

from dataclasses import asdict
from typing import Any


class Record:
    """Mixin for frozen dataclasses that serialise to plain dicts."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]
