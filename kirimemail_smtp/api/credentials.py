"""SMTP credential management.

GET    /api/domains/:domain/credentials
POST   /api/domains/:domain/credentials
GET    /api/domains/:domain/credentials/:id
DELETE /api/domains/:domain/credentials/:id
PUT    /api/domains/:domain/credentials/:id/reset-password
"""

from typing import Any, Optional

from ..models.credential import Credential
from ..models.pagination import Page, pagination_from
from .base import ResourceApi, api_call, domain_path, field


class CredentialsApi(ResourceApi):
    """Manages the SMTP credentials of a domain."""

    @api_call
    def list_credentials(
        self,
        domain: str,
        limit: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Page[Credential]:
        response = self.client.get(
            domain_path(domain, "credentials"), {"limit": limit, "page": page}
        )
        inner = field(response, "data")
        items = field(inner, "data")
        if items is None:
            items = inner if isinstance(inner, list) else []

        return Page(
            data=[Credential.from_api(item) for item in items],
            pagination=pagination_from(field(inner, "pagination")),
            domain=field(response, "domain") or domain,
        )

    @api_call
    def create_credential(self, domain: str, username: str) -> Credential:
        """Create a credential.

        Returns:
            The new Credential with its generated ``password`` set.
        """
        response = self.client.post(domain_path(domain, "credentials"), {"username": username})
        return self._credential_with_secret(field(response, "data"), "password")

    @api_call
    def get_credential(self, domain: str, credential_id: str) -> Credential:
        response = self.client.get(domain_path(domain, "credentials", credential_id))
        return Credential.from_api(field(response, "data"))

    @api_call
    def delete_credential(self, domain: str, credential_id: str) -> dict[str, Any]:
        return self.client.delete(domain_path(domain, "credentials", credential_id))

    @api_call
    def reset_password(self, domain: str, credential_id: str) -> Credential:
        """Reset a credential's password.

        Returns:
            The Credential with the new ``password`` and ``strength_info``.
        """
        response = self.client.put(
            domain_path(domain, "credentials", credential_id, "reset-password")
        )
        return self._credential_with_secret(field(response, "data"), "new_password")

    @staticmethod
    def _credential_with_secret(data: Any, password_key: str) -> Credential:
        credential = Credential.from_api(field(data, "credential"))
        if field(data, password_key):
            credential.password = data[password_key]
        if field(data, "strength_info") is not None:
            credential.strength_info = data["strength_info"]
        if field(data, "remote_synced") is not None:
            credential.remote_synced = data["remote_synced"]
        return credential
