"""Shared fakes for the HTTP backend."""

import json
from typing import Any, Optional

import pytest

from kirimemail_smtp.transport.http_client import SmtpClient


class FakeResponse:
    """Stands in for ``requests.Response``."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        content: Optional[bytes] = None,
        reason: str = "OK",
        chunks: Optional[list[bytes]] = None,
        stream_error: Optional[BaseException] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        if content is None:
            content = json.dumps(body).encode("utf-8") if body is not None else b""
        self.content = content
        self.chunks = chunks if chunks is not None else [content]
        self.stream_error = stream_error
        self.closed = False
        self.chunk_sizes = []

    def json(self):
        return json.loads(self.content.decode("utf-8"))

    def iter_content(self, chunk_size=None):
        self.chunk_sizes.append(chunk_size)
        for chunk in self.chunks:
            if self.closed:
                return
            yield chunk
        if self.stream_error is not None:
            raise self.stream_error

    def close(self):
        self.closed = True


class FakeSession:
    """Stands in for ``requests.Session``; replays scripted outcomes in order.

    An outcome is a FakeResponse to return or an exception to raise. The
    last outcome repeats once the script is exhausted.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes) or [FakeResponse(200, {})]
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method, url, params=None, data=None, json=None,
                headers=None, timeout=None, stream=False):
        self.calls.append({
            "method": method,
            "url": url,
            "params": params,
            "data": data,
            "json": json,
            "headers": headers or {},
            "timeout": timeout,
            "stream": stream,
        })
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def last_call(self) -> dict[str, Any]:
        return self.calls[-1]

    def close(self):
        self.closed = True


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def make_client(sleeps):
    """Build an authenticated SmtpClient over a FakeSession."""

    def _make(*outcomes, **kwargs):
        session = FakeSession(*outcomes)
        kwargs.setdefault("username", "user")
        kwargs.setdefault("token", "secret")
        client = SmtpClient(
            kwargs.pop("username"),
            kwargs.pop("token"),
            kwargs.pop("base_url", "https://api.test"),
            session=session,
            sleep=sleeps.append,
            **kwargs,
        )
        return client, session

    return _make
