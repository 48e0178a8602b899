"""Retry decoration for promise-returning action providers.

Implements:
- Bounded retry with linear backoff (attempt n waits ``delay * n`` ms)
- Short-circuit on failures the retry predicate rejects
- Error classification for transient failures
- Building the executable provider of an asynchronous action
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Any, Awaitable, Iterable, Optional, Tuple, Type

from httpx import HTTPStatusError

from ..actions.classify import field_value
from ..actions.normalize import compute_async_action_input
from ..actions.types import PromiseProvider, RetryPredicate
from ..config import DecoratorConfig
from ..errors import RetrySequenceError


logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 1000


class ErrorClass(str, Enum):
    """Classification of errors for retry logic."""

    RETRYABLE = "retryable"
    NON_RETRYABLE = "non_retryable"


class TransientErrorClassifier:
    """Retry predicate for action providers backed by HTTP calls.

    Timeouts, dropped connections, HTTP 429/5xx responses and rate-limit
    messages are transient. The exception chain (``__cause__``) is followed,
    so a provider that wraps an ``httpx`` failure in its own error is still
    classified by the underlying response. Instances are callable and are
    meant to be declared as an action's ``is_retry_error``.
    """

    DEFAULT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
    DEFAULT_EXCEPTIONS = (TimeoutError, ConnectionError, asyncio.TimeoutError)
    DEFAULT_PHRASES = ("rate limit", "too many requests", "quota exceeded")

    def __init__(
        self,
        status_codes: Optional[Iterable[int]] = None,
        exceptions: Tuple[Type[BaseException], ...] = (),
        phrases: Optional[Iterable[str]] = None,
    ):
        self.status_codes = frozenset(
            self.DEFAULT_STATUS_CODES if status_codes is None else status_codes
        )
        self.exceptions = self.DEFAULT_EXCEPTIONS + tuple(exceptions)
        self.phrases = tuple(
            p.lower() for p in (self.DEFAULT_PHRASES if phrases is None else phrases)
        )

    def _classify_one(self, error: BaseException) -> Optional[ErrorClass]:
        if isinstance(error, HTTPStatusError):
            if error.response.status_code in self.status_codes:
                return ErrorClass.RETRYABLE
            return ErrorClass.NON_RETRYABLE
        if isinstance(error, self.exceptions):
            return ErrorClass.RETRYABLE
        message = str(error).lower()
        if any(phrase in message for phrase in self.phrases):
            return ErrorClass.RETRYABLE
        return None

    def classify(self, error: BaseException) -> ErrorClass:
        """Classify a provider failure, walking its ``__cause__`` chain.

        The first error in the chain that decides (an HTTP response, a known
        transient exception, a rate-limit message) wins; an undecided chain
        is non-retryable.
        """
        seen = set()
        current: Optional[BaseException] = error
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            decided = self._classify_one(current)
            if decided is not None:
                return decided
            current = current.__cause__
        return ErrorClass.NON_RETRYABLE

    def __call__(self, error: BaseException) -> bool:
        return self.classify(error) == ErrorClass.RETRYABLE


def always_retry(error: BaseException) -> bool:
    """Default retry predicate: every failure is retryable."""
    return True


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt bound and linear backoff."""

    max_calls: int = 1
    delay_ms: int = DEFAULT_DELAY_MS

    def __post_init__(self):
        if self.max_calls < 1:
            raise ValueError("max_calls must be at least 1")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must not be negative")

    def calculate_backoff(self, attempt: int) -> float:
        """Seconds to wait after the failed ``attempt`` (1-based)."""
        return self.delay_ms * attempt / 1000

    def worst_case_wait(self) -> float:
        """Seconds spent sleeping between attempts when every attempt fails."""
        return sum(self.calculate_backoff(n) for n in range(1, self.max_calls))


class RetryState(str, Enum):
    """States of a retry sequence."""

    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


async def _failed(error: Exception) -> Any:
    raise error


class RetrySequence:
    """Drives the attempts of one invocation of a retry-decorated provider.

    The sequence starts in ATTEMPTING and settles exactly once, into
    SUCCEEDED or FAILED. Attempts are strictly sequential.
    """

    def __init__(
        self,
        provider: PromiseProvider,
        call_args: tuple,
        policy: RetryPolicy,
        is_retry_error: RetryPredicate = always_retry,
    ):
        self.provider = provider
        self.call_args = call_args
        self.policy = policy
        self.is_retry_error = is_retry_error
        self.state = RetryState.ATTEMPTING
        self.attempt = 1
        self.result: Any = None
        self.error: Optional[BaseException] = None

    @property
    def settled(self) -> bool:
        return self.state != RetryState.ATTEMPTING

    def _settle(self, state: RetryState, result: Any = None, error: BaseException = None) -> Any:
        if self.settled:
            raise RetrySequenceError()
        self.state = state
        self.result = result
        self.error = error
        return result

    def _call(self) -> Optional[Awaitable[Any]]:
        try:
            return self.provider(*self.call_args)
        except Exception as e:
            return _failed(e)

    async def run(self, pending: Optional[Awaitable[Any]]) -> Any:
        """Await ``pending`` (the first attempt) and retry until settled.

        Returns:
            Result of the attempt that succeeded, or None when a later attempt
            has nothing to do

        Raises:
            The failure of the terminal attempt, unchanged
        """
        while True:
            if pending is None:
                return self._settle(RetryState.SUCCEEDED, None)
            try:
                result = await pending
            except Exception as e:
                if not self.is_retry_error(e):
                    logger.debug(
                        "Non-retryable failure on attempt %d/%d: %r",
                        self.attempt, self.policy.max_calls, e,
                    )
                    self._settle(RetryState.FAILED, error=e)
                    raise

                if self.attempt >= self.policy.max_calls:
                    logger.debug(
                        "Retries exhausted after %d attempts: %r", self.attempt, e
                    )
                    self._settle(RetryState.FAILED, error=e)
                    raise

                backoff = self.policy.calculate_backoff(self.attempt)
                logger.debug(
                    "Retry %d/%d after %.3fs: %r",
                    self.attempt + 1, self.policy.max_calls, backoff, e,
                )
                await asyncio.sleep(backoff)
                self.attempt += 1
                pending = self._call()
                continue

            return self._settle(RetryState.SUCCEEDED, result)


def retry_decorator(
    provider: PromiseProvider,
    max_calls: int = 1,
    delay: int = DEFAULT_DELAY_MS,
    is_retry_error: Optional[RetryPredicate] = None,
) -> PromiseProvider:
    """Wrap a promise provider with bounded retry and linear backoff.

    Args:
        provider: Callable ``(args, state, props, actions)`` returning an
            awaitable, or None when there is nothing to do
        max_calls: Total attempts including the first. 1 returns ``provider``
            itself.
        delay: Base backoff in milliseconds
        is_retry_error: Predicate over the failure; False fails immediately.
            Defaults to retrying every failure.

    Returns:
        A provider with the same call signature
    """
    policy = RetryPolicy(max_calls=max_calls, delay_ms=delay)
    if policy.max_calls == 1:
        return provider

    predicate = is_retry_error or always_retry

    @wraps(provider)
    def wrapper(*call_args):
        pending = provider(*call_args)
        if pending is None:
            return None
        sequence = RetrySequence(provider, call_args, policy, predicate)
        return sequence.run(pending)

    return wrapper


def build_promise_provider(action: Any, config: Optional[DecoratorConfig] = None) -> PromiseProvider:
    """Build the executable provider of an asynchronous action.

    The action is normalized first, so factory actions get their three
    attempts; promise actions use their own ``retry_count`` (1 when absent).
    """
    canonical = compute_async_action_input(action)
    default_delay = config.default_delay_ms if config else DEFAULT_DELAY_MS
    delay = field_value(canonical, "delay")
    return retry_decorator(
        field_value(canonical, "promise"),
        max_calls=field_value(canonical, "retry_count") or 1,
        delay=default_delay if delay is None else delay,
        is_retry_error=field_value(canonical, "is_retry_error"),
    )
