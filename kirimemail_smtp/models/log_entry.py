"""Email log entry model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .base import ApiModel, from_timestamp


class SmtpEvent(str, Enum):
    """Event types reported in email logs."""
    QUEUED = "queued"
    SEND = "send"
    DELIVERED = "delivered"
    BOUNCED = "bounced"
    FAILED = "failed"
    PERMANENT_FAIL = "permanent_fail"
    OPENED = "opened"
    CLICKED = "clicked"
    UNSUBSCRIBED = "unsubscribed"
    TEMP_FAILURE = "temp_fail"
    DEFERRED = "deferred"


FAILED_EVENTS = {SmtpEvent.FAILED, SmtpEvent.PERMANENT_FAIL, SmtpEvent.TEMP_FAILURE}
SEND_EVENTS = {SmtpEvent.SEND, SmtpEvent.QUEUED}
TRACKING_EVENTS = {SmtpEvent.OPENED, SmtpEvent.CLICKED, SmtpEvent.UNSUBSCRIBED}


@dataclass
class LogEntry(ApiModel):
    """One event in a domain's email log."""
    id: Optional[str] = None
    user_guid: Optional[str] = None
    user_domain_guid: Optional[str] = None
    user_smtp_guid: Optional[str] = None
    webhook_guid: Optional[str] = None
    message_guid: Optional[str] = None
    server_message_guid: Optional[str] = None
    type: Optional[str] = None
    sender: Optional[str] = None
    sender_domain: Optional[str] = None
    sender_ip: Optional[str] = None
    recipient: Optional[str] = None
    recipient_domain: Optional[str] = None
    recipient_ip: Optional[str] = None
    recipient_hash: Optional[str] = None
    server: Optional[str] = None
    event_type: Optional[str] = None
    event: Optional[str] = None
    event_detail: Optional[str] = None
    tags: Optional[str] = None
    subject: Optional[str] = None
    created_at: Optional[int] = None
    sending_at: Optional[int] = None
    delivered_at: Optional[int] = None
    in_date: Optional[int] = None
    in_date_hour: Optional[int] = None
    in_year_week: Optional[int] = None
    in_year_month: Optional[int] = None
    in_year: Optional[int] = None

    @property
    def created_date(self) -> Optional[datetime]:
        return from_timestamp(self.created_at)

    @property
    def sending_date(self) -> Optional[datetime]:
        return from_timestamp(self.sending_at)

    @property
    def delivered_date(self) -> Optional[datetime]:
        return from_timestamp(self.delivered_at)

    @property
    def is_delivery_event(self) -> bool:
        return self.event_type == SmtpEvent.DELIVERED

    @property
    def is_bounce_event(self) -> bool:
        return self.event_type == SmtpEvent.BOUNCED

    @property
    def is_open_event(self) -> bool:
        return self.event_type == SmtpEvent.OPENED

    @property
    def is_click_event(self) -> bool:
        return self.event_type == SmtpEvent.CLICKED

    @property
    def is_send_event(self) -> bool:
        return self.event_type in SEND_EVENTS

    @property
    def is_failed_event(self) -> bool:
        return self.event_type in FAILED_EVENTS

    @property
    def is_deferred_event(self) -> bool:
        return self.event_type == SmtpEvent.DEFERRED

    @property
    def is_unsubscribe_event(self) -> bool:
        return self.event_type == SmtpEvent.UNSUBSCRIBED

    @property
    def is_tracking_event(self) -> bool:
        return self.event_type in TRACKING_EVENTS

    @property
    def is_error_event(self) -> bool:
        if not self.event_type:
            return False
        return any(k in self.event_type for k in ("failed", "bounce", "error"))

    @property
    def event_category(self) -> str:
        """One of delivery, tracking, bounce, failed, deferred, send, other."""
        if self.is_delivery_event:
            return "delivery"
        if self.is_tracking_event:
            return "tracking"
        if self.is_bounce_event:
            return "bounce"
        if self.is_failed_event:
            return "failed"
        if self.is_deferred_event:
            return "deferred"
        if self.is_send_event:
            return "send"
        return "other"

    def __str__(self) -> str:
        created = self.created_date.isoformat() if self.created_date else "Unknown"
        return (
            f"LogEntry(id={self.id}, type={self.event_type}, "
            f"created={created}, recipient={self.recipient})"
        )
