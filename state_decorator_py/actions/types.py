"""Action declaration models.

Record-shaped actions are frozen pydantic models so that normalization always
produces a new value instead of mutating the declaration. Field names accept
both snake_case and camelCase spellings (``retry_count`` / ``retryCount``).
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# (args, state, props, actions) -> awaitable result, or None for "nothing to do"
PromiseProvider = Callable[..., Optional[Awaitable[Any]]]
RetryPredicate = Callable[[BaseException], bool]


class ConflictPolicy(str, Enum):
    """How overlapping calls of the same action are reconciled.

    The tag is only carried here; the state container enforces it.
    """
    IGNORE = "ignore"
    REJECT = "reject"
    REUSE = "reuse"
    KEEP_ALL = "keep_all"
    KEEP_LAST = "keep_last"
    PARALLEL = "parallel"


class ActionVariant(str, Enum):
    """Discriminant of an action declaration."""
    SYNC = "sync"
    ASYNC_PROMISE = "async_promise"
    ASYNC_FACTORY = "async_factory"
    ADVANCED_SYNC = "advanced_sync"


RECORD_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    extra="allow",  # Keep reducers and any other metadata the container uses
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


class AsyncActionBase(BaseModel):
    """Metadata shared by both asynchronous action shapes."""

    model_config = RECORD_CONFIG

    retry_count: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum attempts including the first. None means a single attempt.",
    )
    conflict_policy: Optional[ConflictPolicy] = None
    is_retry_error: Optional[RetryPredicate] = None
    delay: Optional[int] = Field(
        default=None,
        ge=0,
        description="Base backoff in milliseconds",
    )


class AsyncActionPromise(AsyncActionBase):
    """Canonical asynchronous action: owns a ``promise`` provider."""

    promise: PromiseProvider


class AsyncActionGet(AsyncActionBase):
    """Lazy factory action: owns a ``promise_get`` refresh provider."""

    promise_get: PromiseProvider


class AdvancedSyncAction(BaseModel):
    """Synchronous action declared as a record of hooks."""

    model_config = RECORD_CONFIG

    action: Optional[Callable[..., Any]] = None


class ActionDeclaration(BaseModel):
    """An action together with its variant, computed once when declared."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    variant: ActionVariant
    action: Any
    name: Optional[str] = None

    @property
    def is_async(self) -> bool:
        return self.variant in (ActionVariant.ASYNC_PROMISE, ActionVariant.ASYNC_FACTORY)
