"""Models module - typed API entities."""

from .credential import Credential
from .domain import Domain
from .log_entry import LogEntry, SmtpEvent
from .message import EmailMessage, MessageValidation, TemplateMessage
from .pagination import Page, Pagination
from .suppression import Suppression

__all__ = [
    "Credential",
    "Domain",
    "LogEntry",
    "SmtpEvent",
    "EmailMessage",
    "MessageValidation",
    "TemplateMessage",
    "Page",
    "Pagination",
    "Suppression",
]
