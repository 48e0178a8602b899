"""Diagnostic change logging for state decorator actions."""

from .change_logger import ChangeLogger, CHANGES_LOGGER

__all__ = [
    "ChangeLogger",
    "CHANGES_LOGGER",
]
