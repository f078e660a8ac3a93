"""SMTP credential model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .base import ApiModel, from_timestamp


@dataclass
class Credential(ApiModel):
    """An SMTP credential of a domain.

    ``password``, ``strength_info`` and ``remote_synced`` are only present
    right after creating a credential or resetting its password.
    """
    id: Optional[int] = None
    user_smtp_guid: Optional[str] = None
    username: Optional[str] = None
    is_verified: Optional[bool] = None
    status: Optional[bool] = None
    is_deleted: Optional[bool] = None
    created_at: Optional[int] = None
    modified_at: Optional[int] = None
    deleted_at: Optional[int] = None
    last_password_changed: Optional[int] = None
    password: Optional[str] = None
    strength_info: Optional[dict[str, Any]] = None
    remote_synced: Optional[bool] = None

    @property
    def created_date(self) -> Optional[datetime]:
        return from_timestamp(self.created_at)

    @property
    def modified_date(self) -> Optional[datetime]:
        return from_timestamp(self.modified_at)

    @property
    def deleted_date(self) -> Optional[datetime]:
        return from_timestamp(self.deleted_at)

    @property
    def last_password_changed_date(self) -> Optional[datetime]:
        return from_timestamp(self.last_password_changed)

    @property
    def is_active(self) -> bool:
        return bool(self.status) and not self.is_deleted

    @property
    def is_active_and_verified(self) -> bool:
        return self.is_active and bool(self.is_verified)
