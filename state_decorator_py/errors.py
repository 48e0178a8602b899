"""Custom error types for state-decorator-py."""


class StateDecoratorError(Exception):
    """Base error for all state decorator errors."""
    pass


class ActionVariantError(StateDecoratorError):
    """Raised when an action is exercised as a variant it does not belong to."""

    def __init__(self, expected: str):
        super().__init__(f"This action is not {expected}")
        self.expected = expected


class RetrySequenceError(StateDecoratorError, RuntimeError):
    """Raised when a retry sequence is settled more than once."""

    message = "Retry sequence has already settled"

    def __init__(self):
        super().__init__(self.message)
