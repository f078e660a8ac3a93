"""Shared helpers for API models."""

from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Optional


class ApiModel:
    """Mixin for dataclasses whose field names match the wire keys."""

    @classmethod
    def from_api(cls, data: Optional[dict[str, Any]]):
        """Create the model from an API payload.

        Unknown keys are ignored; absent keys stay None.
        """
        data = data or {}
        return cls(**{
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__
        })

    def to_dict(self) -> dict[str, Any]:
        """Wire representation; None fields are omitted."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out[f.name] = value
        return out


def from_timestamp(value: Optional[int]) -> Optional[datetime]:
    """Convert a Unix timestamp in seconds to an aware UTC datetime."""
    if not value:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)
