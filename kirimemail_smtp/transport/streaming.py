"""Incremental decoding of streamed event logs.

The log endpoint answers a long-lived GET with newline-delimited JSON, or
the same records framed as Server-Sent Events (``data: {...}``). Records
are decoded as bytes arrive and handed out one at a time:

    with client.stream("api/domains/example.com/log") as records:
        for record in records:
            ...
"""

import codecs
import json
import logging
from collections import deque
from enum import Enum
from typing import Any, Callable, Iterator, Optional, Union

import requests

from ..exceptions import classify_transport_error

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

SkipHook = Callable[[str, Exception], None]


class StreamState(str, Enum):
    """Lifecycle of a LogStream."""
    IDLE = "idle"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    CLOSED = "closed"


_SKIP = object()
_DONE = object()


class LogStreamDecoder:
    """Turns arbitrary chunks into parsed JSON records.

    Chunks need not align with line or character boundaries: the trailing
    partial line is buffered until its newline arrives, and bytes go
    through an incremental UTF-8 decoder.

    Lines that are not valid JSON are skipped. They are logged at DEBUG and
    passed to ``on_skip(line, error)`` when a hook is given.
    """

    def __init__(self, on_skip: Optional[SkipHook] = None, encoding: str = "utf-8"):
        self.on_skip = on_skip
        self.done = False
        self.skipped = 0
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    def feed(self, chunk: Union[bytes, str]) -> list[Any]:
        """Consume one chunk and return the records it completed."""
        if self.done:
            return []
        if isinstance(chunk, bytes):
            chunk = self._decoder.decode(chunk)
        self._buffer += chunk

        *lines, self._buffer = self._buffer.split("\n")
        return self._parse_lines(lines)

    def finish(self) -> list[Any]:
        """Flush the decoder at end of stream.

        A final line without a trailing newline is parsed here.
        """
        if self.done:
            return []
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return self._parse_lines(tail.split("\n"))

    def _parse_lines(self, lines: list[str]) -> list[Any]:
        records = []
        for line in lines:
            record = self._parse_line(line)
            if record is _DONE:
                self.done = True
                self._buffer = ""
                break
            if record is not _SKIP:
                records.append(record)
        return records

    def _parse_line(self, line: str) -> Any:
        line = line.rstrip("\r")
        if not line.strip():
            return _SKIP

        payload = line
        if line.startswith(SSE_DATA_PREFIX):
            payload = line[len(SSE_DATA_PREFIX):]
            if payload.strip() == DONE_SENTINEL:
                return _DONE

        try:
            return json.loads(payload)
        except ValueError as e:
            self._skip(line, e)
            return _SKIP

    def _skip(self, line: str, error: Exception) -> None:
        self.skipped += 1
        logger.debug("Skipping unparseable stream line: %.200r", line)
        if self.on_skip:
            self.on_skip(line, error)


class LogStream:
    """Pull-based iterator over records of one streamed response.

    The connection is opened lazily on the first ``next()``. The stream is
    not restartable; call ``SmtpClient.stream`` again to re-open.

    ``close()`` may be called at any time, releases the response and makes
    further iteration stop without error.
    """

    def __init__(
        self,
        opener: Callable[[], requests.Response],
        on_skip: Optional[SkipHook] = None,
        chunk_size: Optional[int] = None,
    ):
        """Initialize the stream.

        Args:
            opener: Issues the GET and returns a response whose status is
                already known to be successful. Raises ApiError otherwise.
            on_skip: Hook called for each line that is not valid JSON.
            chunk_size: Read size passed to ``iter_content``. None reads
                data as it arrives.
        """
        self.state = StreamState.IDLE
        self._opener = opener
        self._on_skip = on_skip
        self._chunk_size = chunk_size
        self._response: Optional[requests.Response] = None
        self._chunks: Optional[Iterator[bytes]] = None
        self._decoder: Optional[LogStreamDecoder] = None
        self._pending: deque[Any] = deque()

    @property
    def skipped(self) -> int:
        """Number of lines skipped so far."""
        return self._decoder.skipped if self._decoder else 0

    def __iter__(self) -> "LogStream":
        return self

    def __next__(self) -> Any:
        if self.state is StreamState.IDLE:
            self._connect()

        while not self._pending:
            if self.state is StreamState.CLOSED:
                raise StopIteration
            self._read_chunk()

        return self._pending.popleft()

    def close(self) -> None:
        """Stop the stream and release the connection."""
        self._pending.clear()
        self._release()

    def _connect(self) -> None:
        self.state = StreamState.CONNECTING
        try:
            response = self._opener()
        except BaseException:
            self.state = StreamState.CLOSED
            raise

        self._response = response
        self._chunks = iter(response.iter_content(chunk_size=self._chunk_size))
        self._decoder = LogStreamDecoder(on_skip=self._on_skip)
        self.state = StreamState.STREAMING
        logger.debug("Stream connected")

    def _read_chunk(self) -> None:
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._pending.extend(self._decoder.finish())
            self._release()
            return
        except (requests.RequestException, OSError) as e:
            self._release()
            raise classify_transport_error(e) from e

        if not chunk:
            return

        self._pending.extend(self._decoder.feed(chunk))
        if self._decoder.done:
            self._release()

    def _release(self) -> None:
        response = self._response
        self._response = None
        self._chunks = None
        if self.state is not StreamState.CLOSED:
            self.state = StreamState.CLOSED
            logger.debug("Stream closed")
        if response is not None:
            response.close()

    def __enter__(self) -> "LogStream":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_response", None) is not None:
            self._release()
