"""API module - resource wrappers over SmtpClient."""

from .credentials import CredentialsApi
from .domains import DomainsApi
from .logs import LogsApi
from .messages import MessagesApi
from .suppressions import SuppressionsApi

__all__ = [
    "CredentialsApi",
    "DomainsApi",
    "LogsApi",
    "MessagesApi",
    "SuppressionsApi",
]
