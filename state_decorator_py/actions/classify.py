"""Structural classification of action declarations.

An action's variant is decided by callability and by which keys it owns,
never by its nominal type:

- callable -> synchronous action
- owns ``promise`` -> asynchronous promise action
- owns ``promise_get`` -> asynchronous factory action
- anything else -> advanced synchronous action
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .types import (
    ActionDeclaration,
    ActionVariant,
    AdvancedSyncAction,
    AsyncActionGet,
    AsyncActionPromise,
)


PROMISE_KEY = "promise"
PROMISE_GET_KEY = "promise_get"


def owns(action: Any, key: str) -> bool:
    """Check whether an action record owns ``key`` (snake or camel spelling)."""
    names = {key, to_camel(key)}
    if isinstance(action, Mapping):
        return any(name in action for name in names)
    if isinstance(action, BaseModel):
        present = set(type(action).model_fields) | set(action.model_extra or {})
        return not names.isdisjoint(present)
    storage = getattr(action, "__dict__", None)
    if storage is None:
        return False
    return not names.isdisjoint(storage)


def field_value(action: Any, key: str, default: Any = None) -> Any:
    """Read ``key`` (snake or camel spelling) from an action record."""
    if isinstance(action, Mapping):
        if key in action:
            return action[key]
        return action.get(to_camel(key), default)
    return getattr(action, key, getattr(action, to_camel(key), default))


def is_async_action(action: Any) -> bool:
    """Test if an action is an asynchronous action."""
    return not callable(action) and (owns(action, PROMISE_KEY) or owns(action, PROMISE_GET_KEY))


def is_sync_action(action: Any) -> bool:
    """Test if an action is a synchronous action."""
    return callable(action)


def is_advanced_sync_action(action: Any) -> bool:
    """Test if an action is an advanced synchronous action."""
    return (
        not callable(action)
        and not owns(action, PROMISE_KEY)
        and not owns(action, PROMISE_GET_KEY)
    )


def classify(action: Any) -> ActionVariant:
    """Return the variant of an action declaration."""
    if is_sync_action(action):
        return ActionVariant.SYNC
    if owns(action, PROMISE_KEY):
        return ActionVariant.ASYNC_PROMISE
    if owns(action, PROMISE_GET_KEY):
        return ActionVariant.ASYNC_FACTORY
    return ActionVariant.ADVANCED_SYNC


_MODELS = {
    ActionVariant.ASYNC_PROMISE: AsyncActionPromise,
    ActionVariant.ASYNC_FACTORY: AsyncActionGet,
    ActionVariant.ADVANCED_SYNC: AdvancedSyncAction,
}


def declare_action(action: Any, name: Optional[str] = None) -> ActionDeclaration:
    """Classify an action once and wrap it with its variant.

    Mappings are validated into the model of their variant; callables and
    models are kept as given.

    Raises:
        pydantic.ValidationError: If a record does not fit its variant's model
    """
    variant = classify(action)
    if isinstance(action, Mapping):
        action = _MODELS[variant].model_validate(dict(action))
    return ActionDeclaration(variant=variant, action=action, name=name)
