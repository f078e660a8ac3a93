"""Python client for the Kirim.Email SMTP API."""

from .api import CredentialsApi, DomainsApi, LogsApi, MessagesApi, SuppressionsApi
from .config import ClientConfig, load_config, load_credentials
from .exceptions import (
    ApiError,
    AuthenticationError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    ProtocolError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
)
from .models import (
    Credential,
    Domain,
    EmailMessage,
    LogEntry,
    MessageValidation,
    Page,
    Pagination,
    SmtpEvent,
    Suppression,
    TemplateMessage,
)
from .transport import FileUpload, Failure, RetryPolicy, SmtpClient, Success

__version__ = "0.1.0"

__all__ = [
    "CredentialsApi",
    "DomainsApi",
    "LogsApi",
    "MessagesApi",
    "SuppressionsApi",
    "ClientConfig",
    "load_config",
    "load_credentials",
    "ApiError",
    "AuthenticationError",
    "ErrorKind",
    "NetworkError",
    "NotFoundError",
    "ProtocolError",
    "RequestTimeoutError",
    "ServerError",
    "ValidationError",
    "Credential",
    "Domain",
    "EmailMessage",
    "LogEntry",
    "MessageValidation",
    "Page",
    "Pagination",
    "SmtpEvent",
    "Suppression",
    "TemplateMessage",
    "FileUpload",
    "Failure",
    "RetryPolicy",
    "SmtpClient",
    "Success",
]
