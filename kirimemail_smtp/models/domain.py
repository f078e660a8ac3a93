"""Sending domain model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .base import ApiModel, from_timestamp


@dataclass
class Domain(ApiModel):
    """A sending domain with its DNS and tracking configuration."""
    id: Optional[int] = None
    domain: Optional[str] = None
    user_guid: Optional[str] = None
    is_verified: Optional[bool] = None
    dkim_public_key: Optional[str] = None
    dkim_selector: Optional[str] = None
    verification_token: Optional[str] = None
    spf_record: Optional[str] = None
    mx_records: Optional[list[str]] = None
    dkim_record: Optional[str] = None
    tracking_domain: Optional[str] = None
    tracking_cname: Optional[str] = None
    auth_domain: Optional[str] = None
    auth_dkim_record: Optional[str] = None
    auth_spf_record: Optional[str] = None
    auth_mx_records: Optional[list[str]] = None
    open_track: Optional[bool] = None
    click_track: Optional[bool] = None
    unsub_track: Optional[bool] = None
    created_at: Optional[int] = None
    modified_at: Optional[int] = None
    verified_at: Optional[int] = None

    @property
    def created_date(self) -> Optional[datetime]:
        return from_timestamp(self.created_at)

    @property
    def modified_date(self) -> Optional[datetime]:
        return from_timestamp(self.modified_at)

    @property
    def verified_date(self) -> Optional[datetime]:
        return from_timestamp(self.verified_at)

    @property
    def is_active(self) -> bool:
        return bool(self.is_verified)

    @property
    def has_tracking_configured(self) -> bool:
        return bool(self.tracking_domain and self.tracking_cname)

    @property
    def has_auth_domain_configured(self) -> bool:
        return bool(self.auth_domain and self.auth_dkim_record)

    def tracking_settings(self) -> dict[str, bool]:
        return {
            "open_track": bool(self.open_track),
            "click_track": bool(self.click_track),
            "unsub_track": bool(self.unsub_track),
        }
