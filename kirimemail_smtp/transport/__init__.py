"""Transport module - HTTP communication."""

from .http_client import (
    DEFAULT_BASE_URL,
    Endpoint,
    Failure,
    SmtpClient,
    Success,
    TransportResult,
)
from .multipart import FileUpload, MultipartBody, encode_multipart
from .params import build_query, join_url, stringify
from .retry_policy import (
    RetryPolicy,
    aggressive_retry_policy,
    default_retry_policy,
    no_retry_policy,
)
from .streaming import LogStream, LogStreamDecoder, StreamState

__all__ = [
    "DEFAULT_BASE_URL",
    "Endpoint",
    "Failure",
    "SmtpClient",
    "Success",
    "TransportResult",
    "FileUpload",
    "MultipartBody",
    "encode_multipart",
    "build_query",
    "join_url",
    "stringify",
    "RetryPolicy",
    "aggressive_retry_policy",
    "default_retry_policy",
    "no_retry_policy",
    "LogStream",
    "LogStreamDecoder",
    "StreamState",
]
