"""Collection helpers used by the state container."""

from typing import Any, Callable, Dict, List, Optional, Sequence


def to_map(
    items: List[Any],
    key_func: Callable[[Any], Optional[str]] = None,
    map_func: Callable[[Any, int], Any] = None,
) -> Dict[str, Any]:
    """Index a list by key.

    Args:
        items: Items to index
        key_func: Key of an item; defaults to its ``id``. Items whose key is
            None are skipped.
        map_func: Value stored for an item and its index; defaults to the item

    Returns:
        Dict of key to mapped item. Later items win on duplicate keys.
    """
    key_func = key_func or _item_id
    result = {}
    for index, item in enumerate(items):
        key = key_func(item)
        if key is not None:
            result[key] = map_func(item, index) if map_func else item
    return result


def _item_id(item: Any) -> Optional[str]:
    if isinstance(item, dict):
        return item.get("id")
    return getattr(item, "id", None)


def are_same_args(args1: Sequence[Any], args2: Sequence[Any]) -> bool:
    """Check that two argument lists hold the same values in the same order."""
    if len(args1) != len(args2):
        return False
    return all(_same(a, b) for a, b in zip(args1, args2))


def _same(a: Any, b: Any) -> bool:
    if a is b:
        return True
    # Primitives compare by value, objects by identity
    return isinstance(a, (bool, int, float, str)) and type(a) is type(b) and a == b
