"""
State Decorator Python Implementation

Action decoration and retry control for a state-management helper:
structural classification of action declarations, normalization of lazy
factory actions, bounded retry with linear backoff, and development-time
diffs of state changes.
"""

# Configuration and errors
from .config import DecoratorConfig
from .errors import StateDecoratorError, ActionVariantError, RetrySequenceError

# Actions - declaration models, classification, normalization
from .actions import (
    ActionDeclaration,
    ActionVariant,
    AdvancedSyncAction,
    AsyncActionGet,
    AsyncActionPromise,
    ConflictPolicy,
    classify,
    declare_action,
    is_advanced_sync_action,
    is_async_action,
    is_sync_action,
    compute_async_action_input,
    exercise_advanced_sync_action,
    exercise_async_action,
    exercise_sync_action,
)

# Executors - retry decoration
from .executors import (
    ErrorClass,
    RetryPolicy,
    RetrySequence,
    RetryState,
    TransientErrorClassifier,
    always_retry,
    build_promise_provider,
    retry_decorator,
)

# State diffs and change logging
from .state import StateDiffEngine, build_diff
from .logs import ChangeLogger

# Collection helpers
from .utils import to_map, are_same_args

__version__ = "0.1.0"

__all__ = [
    # Configuration
    'DecoratorConfig',
    # Errors
    'StateDecoratorError',
    'ActionVariantError',
    'RetrySequenceError',
    # Actions
    'ActionDeclaration',
    'ActionVariant',
    'AdvancedSyncAction',
    'AsyncActionGet',
    'AsyncActionPromise',
    'ConflictPolicy',
    'classify',
    'declare_action',
    'is_advanced_sync_action',
    'is_async_action',
    'is_sync_action',
    'compute_async_action_input',
    'exercise_advanced_sync_action',
    'exercise_async_action',
    'exercise_sync_action',
    # Executors
    'ErrorClass',
    'RetryPolicy',
    'RetrySequence',
    'RetryState',
    'TransientErrorClassifier',
    'always_retry',
    'build_promise_provider',
    'retry_decorator',
    # State
    'StateDiffEngine',
    'build_diff',
    'ChangeLogger',
    # Utils
    'to_map',
    'are_same_args',
]
