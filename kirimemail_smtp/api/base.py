"""Shared plumbing for the resource API classes."""

import functools
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote

from ..exceptions import ApiError
from ..transport.http_client import SmtpClient

F = TypeVar("F", bound=Callable[..., Any])


def api_call(func: F) -> F:
    """Let ApiError through untouched; wrap anything else in ApiError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ApiError:
            raise
        except Exception as e:
            raise ApiError(str(e)) from e

    return wrapper  # type: ignore[return-value]


def domain_path(domain: str, *parts: Any) -> str:
    """Build ``api/domains/<domain>/<parts...>`` with each segment quoted."""
    segments = ["api", "domains", quote(str(domain), safe="")]
    segments.extend(quote(str(p), safe="") for p in parts)
    return "/".join(segments)


def field(payload: Any, key: str) -> Any:
    """``payload[key]`` when payload is a mapping, else None."""
    if isinstance(payload, dict):
        return payload.get(key)
    return None


def first_present(*values: Any, default: Optional[Any] = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


class ResourceApi:
    """Base class holding the shared SmtpClient."""

    def __init__(self, client: SmtpClient):
        self.client = client
