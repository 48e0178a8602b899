"""Normalization of asynchronous actions into the canonical promise shape."""

from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .classify import PROMISE_GET_KEY, is_async_action, owns
from .types import AsyncActionGet, AsyncActionPromise, ConflictPolicy


FACTORY_RETRY_COUNT = 3
FACTORY_CONFLICT_POLICY = ConflictPolicy.REUSE


def _fields(action: Any) -> dict:
    if isinstance(action, Mapping):
        return dict(action)
    if isinstance(action, BaseModel):
        # Iterating a model yields fields and extras without copying values
        return dict(action)
    return dict(vars(action))


def compute_async_action_input(action: Union[AsyncActionPromise, AsyncActionGet, Mapping]) -> Any:
    """Return the canonical promise form of an asynchronous action.

    Factory actions (owning ``promise_get``) become a new ``AsyncActionPromise``
    whose ``promise`` is the factory provider, with ``retry_count`` forced to 3
    and ``conflict_policy`` forced to REUSE. Actions already owning ``promise``
    are returned unchanged.

    Raises:
        TypeError: If the action is not an asynchronous action
    """
    if not is_async_action(action):
        raise TypeError(f"Expected an asynchronous action, got {type(action).__name__}")

    if not owns(action, PROMISE_GET_KEY):
        return action

    names = {PROMISE_GET_KEY, to_camel(PROMISE_GET_KEY)}
    source = _fields(action)
    provider = next(v for k, v in source.items() if k in names)
    fields = {k: v for k, v in source.items() if k not in names}
    fields.update(
        promise=provider,
        retry_count=FACTORY_RETRY_COUNT,
        conflict_policy=FACTORY_CONFLICT_POLICY,
    )
    # Drop camelCase spellings the defaults above replace
    fields.pop("retryCount", None)
    fields.pop("conflictPolicy", None)
    return AsyncActionPromise(**fields)
