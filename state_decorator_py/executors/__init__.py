"""Retry decoration and executable action providers."""

from .retry import (
    ErrorClass,
    RetryPolicy,
    RetrySequence,
    RetryState,
    TransientErrorClassifier,
    always_retry,
    build_promise_provider,
    retry_decorator,
)

__all__ = [
    "ErrorClass",
    "RetryPolicy",
    "RetrySequence",
    "RetryState",
    "TransientErrorClassifier",
    "always_retry",
    "build_promise_provider",
    "retry_decorator",
]
