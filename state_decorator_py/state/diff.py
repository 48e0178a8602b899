"""State diff computation for change logging.

Compares two state snapshots field by field and describes what changed in a
compact form suitable for diagnostic output.
"""

from collections.abc import Mapping, Sequence, Set
from numbers import Number
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from ..config import DecoratorConfig


# Number covers int, float, Decimal and Fraction
PRIMITIVE_TYPES = (bool, Number, str)
MAX_LISTED_ELEMENTS = 10
DELETED = "was deleted"


def snapshot_fields(snapshot: Any) -> Dict[str, Any]:
    """Return the top-level fields of a snapshot without copying values."""
    if snapshot is None:
        return {}
    if isinstance(snapshot, (Mapping, BaseModel)):
        return dict(snapshot)
    return dict(getattr(snapshot, "__dict__", {}))


def _is_sequence(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return isinstance(value, (Sequence, Set))


def _unchanged(old: Any, new: Any) -> bool:
    if old is new:
        return True
    # Primitives compare by value, everything else by reference
    return (
        isinstance(old, PRIMITIVE_TYPES)
        and type(old) is type(new)
        and old == new
    )


def _deep_equal(a: Any, b: Any) -> bool:
    """Structural equality: same type, then recursive comparison of contents."""
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, Mapping):
        return a.keys() == b.keys() and all(_deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, BaseModel):
        return _deep_equal(dict(a), dict(b))
    if isinstance(a, Set):
        return bool(a == b)
    if _is_sequence(a):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    storage = getattr(a, "__dict__", None)
    if storage is not None and type(a).__eq__ is object.__eq__:
        # Plain objects compare by their own fields
        return _deep_equal(storage, vars(b))
    return bool(a == b)


def _missing_from(values: Any, others: Any) -> List[Any]:
    return [a for a in values if not any(_deep_equal(a, b) for b in others)]


def _sequence_diff(old: Any, new: Any) -> Union[str, Dict[str, Any]]:
    if old is None:
        return f"was null, now contains {len(new)} elements"
    if new is None:
        return f"contained {len(old)} elements, now is null"
    if len(old) == 0:
        return f"was empty, now contains {len(new)} elements"
    if len(new) == 0:
        return f"contained {len(old)} elements, now is empty"

    added: Union[str, List[Any]] = _missing_from(new, old)
    removed: Union[str, List[Any]] = _missing_from(old, new)
    if len(added) > MAX_LISTED_ELEMENTS:
        added = f"{len(added)} elements added"
    if len(removed) > MAX_LISTED_ELEMENTS:
        removed = f"{len(removed)} elements removed"
    return {"added": added, "removed": removed}


def _describe(old: Any, new: Any) -> Any:
    resolved = old if new is None else new
    if isinstance(resolved, PRIMITIVE_TYPES):
        rendered = '""' if new == "" else new
        return f"{old} => {rendered}"

    old_ok = old is None or _is_sequence(old)
    new_ok = new is None or _is_sequence(new)
    if old_ok and new_ok and (_is_sequence(old) or _is_sequence(new)):
        return _sequence_diff(old, new)

    return new


def build_diff(old_state: Any, new_state: Any) -> Dict[str, Any]:
    """Describe the fields that differ between two snapshots.

    Args:
        old_state: Snapshot before the action
        new_state: Snapshot after the action

    Returns:
        Mapping of changed field name to a description. Unchanged fields are
        omitted; removed fields map to "was deleted"; fields only present in
        ``new_state`` map to their string form.
    """
    old_fields = snapshot_fields(old_state)
    new_fields = snapshot_fields(new_state)
    diff: Dict[str, Any] = {}

    for key, old_value in old_fields.items():
        if key not in new_fields:
            diff[key] = DELETED
            continue
        new_value = new_fields[key]
        if not _unchanged(old_value, new_value):
            diff[key] = _describe(old_value, new_value)

    for key, new_value in new_fields.items():
        if key not in old_fields:
            diff[key] = str(new_value)

    return diff


class StateDiffEngine:
    """Diff engine active only in development configuration."""

    def __init__(self, config: Optional[DecoratorConfig] = None):
        self.config = config or DecoratorConfig()

    @property
    def active(self) -> bool:
        return self.config.development

    def diff(self, old_state: Any, new_state: Any) -> Dict[str, Any]:
        """Return ``build_diff(old_state, new_state)``, or {} when inactive."""
        if not self.active:
            return {}
        return build_diff(old_state, new_state)
