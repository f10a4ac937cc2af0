"""Value classification for store trees."""

from collections.abc import Mapping, Sequence
from typing import Any, Iterator, Tuple, Type, Union
from .types import ValueKind


TypeSpec = Union[Type[Any], Tuple[Type[Any], ...]]


def detect_value_kind(value: Any) -> ValueKind:
    """
    Detect the kind of a single tree value.

    Args:
        value: Value taken from a tree node

    Returns:
        ValueKind enum indicating the value kind

    Raises:
        TypeError: If the value cannot appear in a decoded JSON tree
    """
    if value is None:
        return ValueKind.NULL
    elif isinstance(value, bool):
        return ValueKind.BOOLEAN
    elif isinstance(value, (int, float)):
        return ValueKind.NUMBER
    elif isinstance(value, str):
        return ValueKind.STRING
    elif isinstance(value, Mapping):
        return ValueKind.NODE
    elif isinstance(value, Sequence):
        return ValueKind.SEQUENCE
    else:
        raise TypeError(f"Unsupported tree value type: {type(value).__name__}")


def is_node(value: Any) -> bool:
    """Check if a value is a tree node."""
    return isinstance(value, Mapping)


def is_compatible(value: Any, expected: TypeSpec) -> bool:
    """
    Check if a value matches an expected type.

    Booleans only match when bool itself is expected, so a number slot
    never silently accepts true/false.

    Args:
        value: Value to check
        expected: Type or tuple of types

    Returns:
        True if the value is compatible
    """
    if expected is object:
        return True

    expected_types = expected if isinstance(expected, tuple) else (expected,)
    if isinstance(value, bool) and bool not in expected_types:
        return False

    # JSON numbers decode to int or float depending on their text
    if float in expected_types and isinstance(value, int):
        return True

    return isinstance(value, expected_types)


def iter_entries(tree: Any) -> Iterator[Tuple[str, Any]]:
    """
    Iterate over the (sub_key, value) entries of a tree of nodes.

    Arrays are produced by the store for consecutive integer keys; their
    indices become sub-keys and empty slots are skipped.
    """
    if isinstance(tree, Mapping):
        for key, value in tree.items():
            yield str(key), value
    elif isinstance(tree, Sequence) and not isinstance(tree, str):
        for index, value in enumerate(tree):
            if value is not None:
                yield str(index), value


def describe_value(value: Any) -> str:
    """Name the kind of a value for error messages."""
    try:
        return detect_value_kind(value).value
    except TypeError:
        return type(value).__name__
