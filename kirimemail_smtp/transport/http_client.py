"""HTTP client for the Kirim.Email SMTP API.

Every API call goes through ``SmtpClient.execute``, which:
- joins the path onto the base URL
- stringifies query parameters
- attaches Basic authentication
- encodes JSON or multipart bodies
- retries transient failures for idempotent methods
- classifies the response as ``Success`` or ``Failure``

Configuration mutators (``set_base_url``, ``set_basic_auth``) are not safe to
call concurrently with in-flight requests; serialize them with request
issuance.
"""

import base64
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Mapping, Optional, Sequence, Union

import requests

from ..exceptions import (
    ApiError,
    ErrorKind,
    classify_error,
    classify_transport_error,
    error_for,
)
from .multipart import FileUpload, encode_multipart
from .params import build_query, join_url
from .retry_policy import RetryPolicy, default_retry_policy
from .streaming import LogStream, SkipHook

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://smtp-app.kirim.email"
DEFAULT_TIMEOUT = 30.0
DEFAULT_STREAM_TIMEOUT = 60.0
DEFAULT_USER_AGENT = "kirimemail-smtp-python/0.1.0"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class Endpoint:
    """One outgoing call, built once per request."""
    method: str
    path: str
    query: tuple[tuple[str, str], ...] = ()
    headers: tuple[tuple[str, str], ...] = ()
    timeout: Optional[float] = None
    retries: Optional[int] = None

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
    ) -> "Endpoint":
        return cls(
            method=method.upper(),
            path=path,
            query=build_query(query),
            headers=tuple((headers or {}).items()),
            timeout=timeout,
            retries=retries,
        )


@dataclass(frozen=True)
class Success:
    """A 2xx/3xx response with its parsed JSON body."""
    data: Any
    status_code: int

    ok: ClassVar[bool] = True

    def unwrap(self) -> Any:
        return self.data


@dataclass(frozen=True)
class Failure:
    """A classified failed call."""
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    errors: Optional[dict[str, list[str]]] = None

    ok: ClassVar[bool] = False

    @classmethod
    def from_error(cls, error: ApiError) -> "Failure":
        return cls(
            kind=error.kind,
            message=error.message,
            status_code=error.status_code,
            errors=error.errors,
        )

    def to_exception(self) -> ApiError:
        return error_for(self.kind, self.message, self.status_code, self.errors)

    def unwrap(self) -> Any:
        raise self.to_exception()


TransportResult = Union[Success, Failure]


class SmtpClient:
    """HTTP client for the Kirim.Email SMTP API.

    Holds the base URL, the Basic auth credentials and one HTTP session
    whose connection pool is shared by every call.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: float = DEFAULT_TIMEOUT,
        stream_timeout: float = DEFAULT_STREAM_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the client.

        Args:
            username: Username for Basic authentication.
            token: API token for Basic authentication. Credentials are only
                used when both username and token are given.
            base_url: Base URL of the API.
            retry_policy: Retry policy for idempotent requests.
            timeout: Default request timeout in seconds.
            stream_timeout: Default timeout for streaming requests.
            user_agent: User-Agent header value.
            session: HTTP backend. Defaults to a new ``requests.Session``.
            sleep: Called with the backoff delay between retries.
        """
        self._base_url = base_url.rstrip("/")
        self._credentials: Optional[tuple[str, str]] = None
        if username and token:
            self._credentials = (username, token)
        self.retry_policy = retry_policy or default_retry_policy()
        self.timeout = timeout
        self.stream_timeout = stream_timeout
        self.user_agent = user_agent
        self._session = session if session is not None else requests.Session()
        self._sleep = sleep

    @classmethod
    def from_config(cls, config, **kwargs) -> "SmtpClient":
        """Create a client from a ``ClientConfig``."""
        return cls(
            config.username,
            config.token,
            config.base_url,
            retry_policy=RetryPolicy(max_retries=config.max_retries),
            timeout=config.timeout,
            stream_timeout=config.stream_timeout,
            user_agent=config.user_agent,
            **kwargs,
        )

    # Configuration

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_base_url(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    def set_basic_auth(self, username: str, token: str) -> None:
        self._credentials = (username, token)

    def clear_basic_auth(self) -> None:
        self._credentials = None

    def has_basic_auth(self) -> bool:
        return self._credentials is not None

    def authorization_header(self) -> Optional[str]:
        """Current ``Authorization`` header value, or None when anonymous."""
        credentials = self._credentials
        if credentials is None:
            return None
        raw = f"{credentials[0]}:{credentials[1]}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def url_for(self, path: str) -> str:
        return join_url(self._base_url, path)

    # Core

    def execute(
        self,
        method: str,
        path: str,
        *,
        query: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        fields: Optional[Mapping[str, Any]] = None,
        files: Optional[Sequence[FileUpload]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
    ) -> TransportResult:
        """Execute one API call.

        Args:
            method: HTTP method.
            path: Path below the base URL, e.g. ``api/domains/example.com``.
            query: Query parameters; None values are omitted.
            json: JSON request body.
            fields: Form fields for a multipart body.
            files: Files for a multipart body.
            headers: Extra request headers.
            timeout: Per-call timeout in seconds.
            retries: Per-call retry budget overriding the policy's.

        Returns:
            Success with the parsed body, or a classified Failure. HTTP and
            transport errors are never raised from here.
        """
        endpoint = Endpoint.build(method, path, query, headers, timeout, retries)

        content_type = None
        data = None
        if fields is not None or files:
            multipart = encode_multipart(fields, files or ())
            data = multipart.body
            content_type = multipart.content_type
            json = None
        elif json is not None:
            content_type = JSON_CONTENT_TYPE

        return self._request_with_retry(
            endpoint,
            lambda: self._call_once(endpoint, data=data, json=json, content_type=content_type),
        )

    def stream(
        self,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        on_skip: Optional[SkipHook] = None,
        chunk_size: Optional[int] = None,
    ) -> LogStream:
        """Open a streamed GET lazily and iterate its JSON records.

        The request is issued on the first ``next()``. Connect failures raise
        the classified ApiError there.
        """
        endpoint = Endpoint.build(
            "GET",
            path,
            query,
            headers,
            timeout if timeout is not None else self.stream_timeout,
            retries,
        )
        return LogStream(
            lambda: self._open_stream(endpoint),
            on_skip=on_skip,
            chunk_size=chunk_size,
        )

    # Convenience verbs: return the parsed body or raise ApiError.

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None, **options) -> Any:
        return self.execute("GET", path, query=params, **options).unwrap()

    def post(self, path: str, data: Any = None, **options) -> Any:
        return self.execute("POST", path, json=data, **options).unwrap()

    def put(self, path: str, data: Any = None, **options) -> Any:
        return self.execute("PUT", path, json=data, **options).unwrap()

    def delete(self, path: str, data: Any = None, **options) -> Any:
        return self.execute("DELETE", path, json=data, **options).unwrap()

    def post_multipart(
        self,
        path: str,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Sequence[FileUpload]] = None,
        **options,
    ) -> Any:
        return self.execute("POST", path, fields=data or {}, files=files, **options).unwrap()

    # Internals

    def _request_with_retry(self, endpoint: Endpoint, attempt_fn: Callable[[], Any]) -> Any:
        """Run ``attempt_fn`` until it succeeds or the retry budget is spent.

        The last Failure is returned verbatim once retries are exhausted.
        """
        attempt = 0
        while True:
            outcome = attempt_fn()
            if not isinstance(outcome, Failure):
                return outcome
            if not self.retry_policy.should_retry(
                endpoint.method, outcome, attempt, endpoint.retries
            ):
                return outcome

            delay = self.retry_policy.get_delay(attempt)
            logger.warning(
                "Retrying %s %s after %s (attempt %d, delay %.2fs)",
                endpoint.method,
                endpoint.path,
                outcome.status_code or outcome.kind.value,
                attempt + 1,
                delay,
            )
            self._sleep(delay)
            attempt += 1

    def _call_once(
        self,
        endpoint: Endpoint,
        data: Optional[bytes] = None,
        json: Any = None,
        content_type: Optional[str] = None,
    ) -> TransportResult:
        try:
            response = self._send(endpoint, data=data, json=json, content_type=content_type)
        except (requests.RequestException, OSError) as e:
            return Failure.from_error(classify_transport_error(e))

        try:
            return self._parse_response(response)
        finally:
            response.close()

    def _open_stream(self, endpoint: Endpoint) -> requests.Response:
        outcome = self._request_with_retry(endpoint, lambda: self._open_stream_once(endpoint))
        if isinstance(outcome, Failure):
            raise outcome.to_exception()
        return outcome

    def _open_stream_once(self, endpoint: Endpoint) -> Union[requests.Response, Failure]:
        try:
            response = self._send(endpoint, stream=True)
        except (requests.RequestException, OSError) as e:
            return Failure.from_error(classify_transport_error(e))

        if response.status_code >= 400:
            try:
                return self._failure_from(response)
            finally:
                response.close()
        return response

    def _send(
        self,
        endpoint: Endpoint,
        data: Optional[bytes] = None,
        json: Any = None,
        content_type: Optional[str] = None,
        stream: bool = False,
    ) -> requests.Response:
        url = self.url_for(endpoint.path)
        timeout = endpoint.timeout if endpoint.timeout is not None else self.timeout
        logger.debug("%s %s", endpoint.method, url)

        response = self._session.request(
            endpoint.method,
            url,
            params=list(endpoint.query) or None,
            data=data,
            json=json,
            headers=self._build_headers(endpoint, content_type),
            timeout=timeout,
            stream=stream,
        )
        logger.debug("%s %s -> %s", endpoint.method, url, response.status_code)
        return response

    def _build_headers(self, endpoint: Endpoint, content_type: Optional[str]) -> dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": JSON_CONTENT_TYPE,
        }
        if content_type == JSON_CONTENT_TYPE:
            headers["Content-Type"] = content_type
        headers.update(endpoint.headers)
        if content_type and content_type != JSON_CONTENT_TYPE:
            # multipart: the boundary must match the encoded body
            headers["Content-Type"] = content_type

        authorization = self.authorization_header()
        if authorization:
            headers["Authorization"] = authorization
        return headers

    def _parse_response(self, response: requests.Response) -> TransportResult:
        status = response.status_code
        if status >= 400:
            return self._failure_from(response)
        if status == 204 or not response.content:
            return Success(data=None, status_code=status)

        try:
            data = response.json()
        except ValueError:
            return Failure(
                kind=ErrorKind.PROTOCOL,
                message=f"Malformed JSON in response body (HTTP {status})",
                status_code=status,
            )
        return Success(data=data, status_code=status)

    def _failure_from(self, response: requests.Response) -> Failure:
        try:
            body = response.json()
        except ValueError:
            body = None
        error = classify_error(response.status_code, body, reason=response.reason)
        return Failure.from_error(error)

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
