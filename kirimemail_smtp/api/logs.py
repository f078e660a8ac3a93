"""Email log retrieval and streaming.

GET /api/domains/:domain/log                 - Paged log events
GET /api/domains/:domain/log/:message_guid   - Events of one message
GET /api/domains/:domain/log (streamed)      - Live event feed
"""

import logging
from datetime import datetime
from typing import Iterator, Optional, Union

from ..exceptions import ApiError
from ..models.log_entry import LogEntry
from ..models.pagination import Page, pagination_from
from ..transport.streaming import SkipHook
from .base import ResourceApi, api_call, domain_path, field, first_present

logger = logging.getLogger(__name__)

DateLike = Union[str, datetime]
DEFAULT_LOG_LIMIT = 1000


class LogsApi(ResourceApi):
    """Reads a domain's email event log."""

    @api_call
    def get_logs(
        self,
        domain: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        sender: Optional[str] = None,
        recipient: Optional[str] = None,
        limit: Optional[int] = None,
        page: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Page[LogEntry]:
        """Get one page of log events for a domain.

        Args:
            domain: Domain name.
            start: Only events at or after this time.
            end: Only events before this time.
            sender: Filter by sender address.
            recipient: Filter by recipient address.
            limit: Page size.
            page: Page number (1-indexed).
            offset: Item offset, alternative to ``page``.

        Returns:
            Page of LogEntry with count/offset/limit and pagination.
        """
        params = {
            "start": start,
            "end": end,
            "sender": sender,
            "recipient": recipient,
            "limit": limit,
            "page": page,
            "offset": offset,
        }
        response = self.client.get(domain_path(domain, "log"), params)
        inner = field(response, "data")

        return Page(
            data=[LogEntry.from_api(item) for item in field(inner, "data") or []],
            pagination=pagination_from(field(response, "pagination")),
            count=first_present(field(response, "count"), field(inner, "count"), default=0),
            offset=first_present(field(response, "offset"), field(inner, "offset"), default=0),
            limit=first_present(
                field(response, "limit"), field(inner, "limit"), default=DEFAULT_LOG_LIMIT
            ),
        )

    @api_call
    def get_logs_by_message(self, domain: str, message_guid: str) -> list[LogEntry]:
        """Get all log events of one message."""
        response = self.client.get(domain_path(domain, "log", message_guid))
        inner = field(response, "data")
        return [LogEntry.from_api(item) for item in field(inner, "data") or []]

    def get_logs_by_date_range(
        self,
        domain: str,
        start: DateLike,
        end: DateLike,
        **filters,
    ) -> Page[LogEntry]:
        """Get log events between ``start`` and ``end``."""
        return self.get_logs(domain, start=start, end=end, **filters)

    def stream_logs(
        self,
        domain: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        sender: Optional[str] = None,
        recipient: Optional[str] = None,
        limit: Optional[int] = None,
        on_skip: Optional[SkipHook] = None,
    ) -> Iterator[LogEntry]:
        """Stream log events as they arrive.

        Closing the returned generator (or breaking out of a ``for`` loop
        and dropping it) releases the connection. Records that are not JSON
        objects are ignored.
        """
        params = {
            "start": start,
            "end": end,
            "sender": sender,
            "recipient": recipient,
            "limit": limit,
        }
        stream = self.client.stream(domain_path(domain, "log"), params, on_skip=on_skip)
        try:
            with stream:
                for record in stream:
                    if isinstance(record, dict):
                        yield LogEntry.from_api(record)
                    else:
                        logger.debug("Ignoring non-object log record: %r", record)
        except ApiError:
            raise
        except Exception as e:
            raise ApiError(str(e)) from e
