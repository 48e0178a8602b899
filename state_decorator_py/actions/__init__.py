"""Action declarations: variants, classification and normalization."""

from .types import (
    ActionDeclaration,
    ActionVariant,
    AdvancedSyncAction,
    AsyncActionBase,
    AsyncActionGet,
    AsyncActionPromise,
    ConflictPolicy,
    PromiseProvider,
    RetryPredicate,
)
from .classify import (
    classify,
    declare_action,
    is_advanced_sync_action,
    is_async_action,
    is_sync_action,
)
from .normalize import compute_async_action_input
from .harness import (
    exercise_advanced_sync_action,
    exercise_async_action,
    exercise_sync_action,
)

__all__ = [
    # Models
    "ActionDeclaration",
    "ActionVariant",
    "AdvancedSyncAction",
    "AsyncActionBase",
    "AsyncActionGet",
    "AsyncActionPromise",
    "ConflictPolicy",
    "PromiseProvider",
    "RetryPredicate",
    # Classification
    "classify",
    "declare_action",
    "is_advanced_sync_action",
    "is_async_action",
    "is_sync_action",
    # Normalization
    "compute_async_action_input",
    # Test harness
    "exercise_advanced_sync_action",
    "exercise_async_action",
    "exercise_sync_action",
]
