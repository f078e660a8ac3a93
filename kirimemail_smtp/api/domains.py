"""Domain management.

GET    /api/domains
POST   /api/domains
GET    /api/domains/:domain
PUT    /api/domains/:domain
DELETE /api/domains/:domain
POST   /api/domains/:domain/setup-auth-domain
POST   /api/domains/:domain/verify-mandatory
POST   /api/domains/:domain/verify-auth-domain
POST   /api/domains/:domain/setup-tracklink
POST   /api/domains/:domain/verify-tracklink
"""

from typing import Any, Optional

from ..models.domain import Domain
from ..models.pagination import Page, pagination_from
from .base import ResourceApi, api_call, domain_path, field


class DomainsApi(ResourceApi):
    """Manages sending domains and their DNS setup."""

    @api_call
    def list_domains(
        self,
        limit: Optional[int] = None,
        page: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[Domain]:
        response = self.client.get("api/domains", {"limit": limit, "page": page, "search": search})
        inner = field(response, "data")
        return Page(
            data=[Domain.from_api(item) for item in field(inner, "data") or []],
            pagination=pagination_from(field(response, "pagination")),
        )

    @api_call
    def create_domain(self, domain: str, dkim_key_length: int = 2048) -> dict[str, Any]:
        return self.client.post(
            "api/domains", {"domain": domain, "dkim_key_length": dkim_key_length}
        )

    @api_call
    def get_domain(self, domain: str) -> Domain:
        response = self.client.get(domain_path(domain))
        return Domain.from_api(field(response, "data"))

    @api_call
    def update_domain(
        self,
        domain: str,
        open_track: Optional[bool] = None,
        click_track: Optional[bool] = None,
        unsub_track: Optional[bool] = None,
    ) -> dict[str, Any]:
        """Update tracking settings; only the given flags are sent."""
        settings = {
            "open_track": open_track,
            "click_track": click_track,
            "unsub_track": unsub_track,
        }
        return self.client.put(
            domain_path(domain), {k: v for k, v in settings.items() if v is not None}
        )

    @api_call
    def delete_domain(self, domain: str) -> dict[str, Any]:
        return self.client.delete(domain_path(domain))

    @api_call
    def setup_auth_domain(
        self,
        domain: str,
        dkim_key_length: int = 2048,
        auth_domain: Optional[str] = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"dkim_key_length": dkim_key_length}
        if auth_domain is not None:
            payload["auth_domain"] = auth_domain
        return self.client.post(domain_path(domain, "setup-auth-domain"), payload)

    @api_call
    def verify_mandatory_records(self, domain: str) -> dict[str, Any]:
        return self.client.post(domain_path(domain, "verify-mandatory"))

    @api_call
    def verify_auth_domain_records(self, domain: str) -> dict[str, Any]:
        return self.client.post(domain_path(domain, "verify-auth-domain"))

    @api_call
    def setup_tracking_domain(self, domain: str, tracking_domain: str) -> dict[str, Any]:
        return self.client.post(
            domain_path(domain, "setup-tracklink"), {"tracking_domain": tracking_domain}
        )

    @api_call
    def verify_tracking_domain_records(self, domain: str) -> dict[str, Any]:
        return self.client.post(domain_path(domain, "verify-tracklink"))
