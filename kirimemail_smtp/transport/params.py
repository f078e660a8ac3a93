"""URL and parameter helpers shared by the transport modules."""

import json
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional


def join_url(base_url: str, path: str) -> str:
    """Join a base URL and a path with exactly one separator.

    >>> join_url("https://host/", "/api/domains")
    'https://host/api/domains'
    """
    base = base_url.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def stringify(value: Any) -> str:
    """Render a scalar the way the API expects it on the wire.

    Booleans become ``true``/``false``, dates and datetimes ISO-8601 (UTC
    datetimes with a ``Z`` suffix), mappings JSON, anything else ``str()``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
            return value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def build_query(params: Optional[Mapping[str, Any]]) -> tuple[tuple[str, str], ...]:
    """Build ordered query pairs; ``None`` values are omitted.

    List and tuple values repeat the key once per element.
    """
    if not params:
        return ()

    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, stringify(item)) for item in value if item is not None)
        else:
            pairs.append((key, stringify(value)))
    return tuple(pairs)
