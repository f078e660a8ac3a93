"""Retry policy for HTTP transport.

Provides bounded retry with exponential backoff for idempotent methods and
transient failures.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..exceptions import ErrorKind

if TYPE_CHECKING:
    from .http_client import Failure


DEFAULT_RETRY_METHODS = frozenset({"GET", "PUT", "DELETE", "HEAD", "OPTIONS", "TRACE"})
DEFAULT_RETRY_STATUS_CODES = frozenset({408, 413, 429, 500, 502, 503, 504})
RETRYABLE_KINDS = frozenset({ErrorKind.NETWORK, ErrorKind.TIMEOUT})


@dataclass
class RetryPolicy:
    """Configurable retry policy with exponential backoff.

    ``max_retries`` counts retries after the first attempt, so the default
    of 2 allows three calls in total.
    """
    max_retries: int = 2
    initial_delay: float = 0.5
    backoff_factor: float = 2.0
    max_delay: float = 10.0
    retry_methods: frozenset[str] = field(default=DEFAULT_RETRY_METHODS)
    retry_status_codes: frozenset[int] = field(default=DEFAULT_RETRY_STATUS_CODES)

    @property
    def max_attempts(self) -> int:
        return max(0, self.max_retries) + 1

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for a given retry attempt (0-indexed).

        Args:
            attempt: Current attempt number (0 = first retry).

        Returns:
            Delay in seconds before next retry.
        """
        delay = self.initial_delay * (max(1.0, self.backoff_factor) ** attempt)
        return max(0.0, min(delay, self.max_delay))

    def is_retryable_method(self, method: str) -> bool:
        return method.upper() in self.retry_methods

    def is_retryable_failure(self, failure: "Failure") -> bool:
        """Whether a failure is transient.

        Transport-level failures (no response) are retryable; HTTP failures
        only when their status is in the transient set.
        """
        if failure.kind in RETRYABLE_KINDS:
            return True
        return failure.status_code in self.retry_status_codes

    def should_retry(
        self,
        method: str,
        failure: "Failure",
        attempt: int,
        max_retries: int | None = None,
    ) -> bool:
        """Decide whether to re-attempt after ``failure``.

        Args:
            method: HTTP method of the call.
            failure: The failure observed on this attempt.
            attempt: Retries already made (0 after the first call).
            max_retries: Per-call override of ``self.max_retries``.
        """
        budget = self.max_retries if max_retries is None else max_retries
        if attempt >= max(0, budget):
            return False
        if not self.is_retryable_method(method):
            return False
        return self.is_retryable_failure(failure)


def default_retry_policy() -> RetryPolicy:
    """Create default retry policy.

    2 retries (3 attempts), 0.5s initial delay, 2x backoff, 10s max.
    """
    return RetryPolicy()


def aggressive_retry_policy() -> RetryPolicy:
    """Create aggressive retry policy for flaky connections.

    5 retries, 0.5s initial delay, 1.5x backoff, 10s max.
    """
    return RetryPolicy(
        max_retries=5,
        initial_delay=0.5,
        backoff_factor=1.5,
        max_delay=10.0,
    )


def no_retry_policy() -> RetryPolicy:
    """Create a no-retry policy (fail immediately)."""
    return RetryPolicy(max_retries=0)
