"""State snapshot comparison for state-decorator-py."""

from .diff import StateDiffEngine, build_diff, snapshot_fields

__all__ = [
    "StateDiffEngine",
    "build_diff",
    "snapshot_fields",
]
