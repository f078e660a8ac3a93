"""Suppression lists.

GET    /api/domains/:domain/suppressions[/unsubscribes|/bounces|/whitelist]
POST   /api/domains/:domain/suppressions/whitelist
DELETE /api/domains/:domain/suppressions/{unsubscribes,bounces,whitelist}
"""

from typing import Any, Optional, Sequence

from ..models.pagination import Page, pagination_from
from ..models.suppression import Suppression
from .base import ResourceApi, api_call, domain_path, field


class SuppressionsApi(ResourceApi):
    """Reads and edits a domain's suppression lists."""

    def get_suppressions(
        self,
        domain: str,
        limit: Optional[int] = None,
        page: Optional[int] = None,
        offset: Optional[int] = None,
        type: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Page[Suppression]:
        """List all suppressions, optionally filtered by ``type``."""
        params = {"limit": limit, "page": page, "offset": offset, "type": type, "search": search}
        return self._list(domain_path(domain, "suppressions"), params)

    def get_unsubscribe_suppressions(self, domain: str, **params) -> Page[Suppression]:
        return self._list(domain_path(domain, "suppressions", "unsubscribes"), params)

    def get_bounce_suppressions(self, domain: str, **params) -> Page[Suppression]:
        return self._list(domain_path(domain, "suppressions", "bounces"), params)

    def get_whitelist_suppressions(self, domain: str, **params) -> Page[Suppression]:
        return self._list(domain_path(domain, "suppressions", "whitelist"), params)

    @api_call
    def create_whitelist_suppression(self, domain: str, recipient: str) -> Suppression:
        response = self.client.post(
            domain_path(domain, "suppressions", "whitelist"), {"recipient": recipient}
        )
        return Suppression.from_api(field(response, "data"))

    def delete_unsubscribe_suppressions(self, domain: str, ids: Sequence[int]) -> dict[str, Any]:
        return self._delete(domain_path(domain, "suppressions", "unsubscribes"), ids)

    def delete_bounce_suppressions(self, domain: str, ids: Sequence[int]) -> dict[str, Any]:
        return self._delete(domain_path(domain, "suppressions", "bounces"), ids)

    def delete_whitelist_suppressions(self, domain: str, ids: Sequence[int]) -> dict[str, Any]:
        return self._delete(domain_path(domain, "suppressions", "whitelist"), ids)

    @api_call
    def _list(self, path: str, params: dict[str, Any]) -> Page[Suppression]:
        response = self.client.get(path, params)
        inner = field(response, "data")
        return Page(
            data=[Suppression.from_api(item) for item in field(inner, "data") or []],
            pagination=pagination_from(field(response, "pagination")),
        )

    @api_call
    def _delete(self, path: str, ids: Sequence[int]) -> dict[str, Any]:
        return self.client.delete(path, {"ids": list(ids)})
