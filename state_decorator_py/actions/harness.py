"""Helpers for testing action declarations.

Each helper runs a test callback against the action discriminated as the
expected variant, or raises ``ActionVariantError`` when the action is of a
different variant. The callback may be a plain function or return an
awaitable.
"""

import inspect
from typing import Any, Callable

from ..errors import ActionVariantError
from .classify import is_advanced_sync_action, is_async_action, is_sync_action
from .normalize import compute_async_action_input


async def _run(test: Callable[[Any], Any], action: Any) -> Any:
    result = test(action)
    if inspect.isawaitable(result):
        return await result
    return result


async def exercise_async_action(action: Any, test: Callable[[Any], Any]) -> Any:
    """Run ``test`` against the canonical promise form of an asynchronous action."""
    if is_async_action(action):
        return await _run(test, compute_async_action_input(action))
    raise ActionVariantError("an asynchronous action")


async def exercise_sync_action(action: Any, test: Callable[[Any], Any]) -> Any:
    """Run ``test`` against a synchronous action."""
    if is_sync_action(action):
        return await _run(test, action)
    raise ActionVariantError("a synchronous action")


async def exercise_advanced_sync_action(action: Any, test: Callable[[Any], Any]) -> Any:
    """Run ``test`` against an advanced synchronous action."""
    if is_advanced_sync_action(action):
        return await _run(test, action)
    raise ActionVariantError("a synchronous advanced action")
