"""Suppression list entry model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .base import ApiModel, from_timestamp


@dataclass
class Suppression(ApiModel):
    id: Optional[int] = None
    user_guid: Optional[str] = None
    user_domain_guid: Optional[str] = None
    recipient: Optional[str] = None
    type: Optional[str] = None
    reason: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None
    message_guid: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    @property
    def created_date(self) -> Optional[datetime]:
        return from_timestamp(self.created_at)

    @property
    def updated_date(self) -> Optional[datetime]:
        return from_timestamp(self.updated_at)
