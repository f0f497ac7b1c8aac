"""Dotted-path access over tree-shaped values.

Paths such as ``"data.items.0.title"`` walk mappings by key, sequences by
integer index and any other object by attribute. Reads never raise: a
missing segment yields the ``default``. Writes replace absent or scalar
intermediate nodes with dicts and report what they replaced so the write can
be undone.
"""

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any

SEPARATOR = "."

# Leaves: never descended into
_SCALARS = (str, bytes, int, float, complex)


class _Missing:
    """Sentinel for absent values."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def split_path(path: str) -> list[str]:
    """Split a dotted path into segments."""
    if not isinstance(path, str) or not path:
        raise ValueError(f"Invalid property path: {path!r}")
    return path.split(SEPARATOR)


def _index(container: Sequence, segment: str) -> int | None:
    try:
        index = int(segment)
    except ValueError:
        return None
    if -len(container) <= index < len(container):
        return index
    return None


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment, MISSING)
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        index = _index(node, segment)
        return MISSING if index is None else node[index]
    if node is None or node is MISSING or isinstance(node, _SCALARS):
        return MISSING
    return getattr(node, segment, MISSING)


def _get(node: Any, segments: list[str]) -> Any:
    if not segments:
        return node
    child = _child(node, segments[0])
    if child is MISSING:
        return MISSING
    return _get(child, segments[1:])


def get_path(obj: Any, path: str, default: Any = MISSING) -> Any:
    """
    Read the value at ``path``.

    Examples:
        >>> get_path({"data": {"text": "hi"}}, "data.text")
        'hi'
        >>> get_path({"data": None}, "data.text", default=None) is None
        True
    """
    value = _get(obj, split_path(path))
    return default if value is MISSING else value


def _assign(node: Any, segment: str, value: Any) -> None:
    if isinstance(node, MutableMapping):
        node[segment] = value
    elif isinstance(node, MutableSequence):
        index = _index(node, segment)
        if index is None:
            raise KeyError(f"Index {segment!r} out of range")
        node[index] = value
    else:
        setattr(node, segment, value)


def _is_branch(node: Any) -> bool:
    return node is not None and node is not MISSING and not isinstance(node, _SCALARS)


def set_path(obj: Any, path: str, value: Any) -> tuple[str, Any]:
    """
    Write ``value`` at ``path``.

    An intermediate segment that is absent, ``None`` or a scalar is replaced
    by a fresh dict holding the rest of the path, in a single assignment.

    Returns:
        The path of the outermost node that was replaced and its previous
        value (``MISSING`` if it was absent). Passing both to
        ``restore_path`` undoes the write.

    Examples:
        >>> props = {"data": "hello"}
        >>> set_path(props, "data.text", "hi")
        ('data', 'hello')
        >>> props
        {'data': {'text': 'hi'}}
    """
    segments = split_path(path)
    node = obj
    for depth, segment in enumerate(segments[:-1]):
        child = _child(node, segment)
        if not _is_branch(child):
            subtree = value
            for name in reversed(segments[depth + 1:]):
                subtree = {name: subtree}
            _assign(node, segment, subtree)
            return SEPARATOR.join(segments[: depth + 1]), child
        node = child
    previous = _child(node, segments[-1])
    _assign(node, segments[-1], value)
    return path, previous


def delete_path(obj: Any, path: str) -> None:
    """Remove the leaf at ``path`` if it exists."""
    segments = split_path(path)
    parent = _get(obj, segments[:-1])
    leaf = segments[-1]
    if isinstance(parent, MutableMapping):
        parent.pop(leaf, None)
    elif _is_branch(parent) and not isinstance(parent, Sequence) and hasattr(parent, leaf):
        delattr(parent, leaf)


def restore_path(obj: Any, path: str, previous: Any) -> None:
    """Put back a value recorded by ``set_path``."""
    if previous is MISSING:
        delete_path(obj, path)
    else:
        set_path(obj, path, previous)


__all__ = ["MISSING", "SEPARATOR", "split_path", "get_path", "set_path", "delete_path", "restore_path"]
