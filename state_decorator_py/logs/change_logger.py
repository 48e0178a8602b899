"""Diagnostic logging of action state changes.

Output is grouped the way a browser console groups it: an identity line for
the action, then labeled groups for the arguments, the state before and after
the action, and the diff between the two. Groups are rendered as indented
log records; collapsed groups are marked with ``[+]``.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Sequence

from ..config import DecoratorConfig
from ..state.diff import StateDiffEngine, snapshot_fields


CHANGES_LOGGER = "state_decorator_py.changes"
PREFIX = "[StateDecorator]"
INDENT = "  "


def _entries(args: Any) -> list:
    if args is None:
        return []
    if isinstance(args, Mapping):
        return list(args.items())
    return list(enumerate(args))


class ChangeLogger:
    """Emits grouped before/after/diff output for action executions.

    Nothing is emitted unless the configuration is a development one and the
    caller enables logging for the call.
    """

    def __init__(
        self,
        config: Optional[DecoratorConfig] = None,
        logger: Optional[logging.Logger] = None,
        level: int = logging.INFO,
    ):
        self.config = config or DecoratorConfig()
        self.logger = logger or logging.getLogger(CHANGES_LOGGER)
        self.level = level
        self.diff_engine = StateDiffEngine(self.config)
        self._depth = 0

    def is_active(self, log_enabled: bool) -> bool:
        return self.config.development and bool(log_enabled)

    def _emit(self, text: str, *values: Any) -> None:
        self.logger.log(self.level, INDENT * self._depth + text, *values)

    @contextmanager
    def group(self, label: str, collapsed: bool = False) -> Iterator[None]:
        """Indent records emitted inside the block under ``label``."""
        self._emit("[+] %s" if collapsed else "%s", label)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def _fields(self, entries: Sequence) -> None:
        for name, value in entries:
            self._emit("%s : %r", name, value)

    def _arguments(self, args: Any) -> None:
        entries = _entries(args)
        if entries:
            with self.group("Arguments"):
                self._fields(entries)

    def log_state_change(
        self,
        name: str,
        log_enabled: bool,
        old_state: Any,
        new_state: Any,
        args: Any,
        source: Optional[str] = None,
        failed: bool = False,
    ) -> None:
        """Log an action's arguments, before/after state and diff.

        Returns without output when inactive or when ``new_state`` is None
        (the action produced no state change to log).
        """
        if not self.is_active(log_enabled) or new_state is None:
            return

        title = f"{PREFIX} Action {name} {source or ''} {'FAILED' if failed else ''}"
        try:
            with self.group(title.rstrip()):
                self._arguments(args)
                with self.group("Before", collapsed=True):
                    self._fields(snapshot_fields(old_state).items())
                with self.group("After", collapsed=True):
                    self._fields(snapshot_fields(new_state).items())
                with self.group("Diff"):
                    self._fields(self.diff_engine.diff(old_state, new_state).items())
        except Exception:
            self.logger.exception("Failed to log state change of action %s", name)

    def log_single(self, name: str, args: Any, log_enabled: bool, state: str = "") -> None:
        """Log a single action event with its arguments."""
        if not self.is_active(log_enabled):
            return

        try:
            with self.group(f"{PREFIX} Action {name} {state}".rstrip()):
                self._arguments(args)
        except Exception:
            self.logger.exception("Failed to log action %s", name)
