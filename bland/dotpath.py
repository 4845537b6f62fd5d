"""Dot-path traversal over JSON trees.

A path such as ``"servers.0.host"`` is split on ``.`` into segments. Each
segment is used as an object key, or as a list index when the node being
traversed is a list. Segments are literal: there is no escaping, and an
empty path or an empty segment (``"a..b"``, ``".a"``, ``"a."``) is
rejected with :class:`InvalidPathError`.
"""

import copy
from typing import Any, Optional

from bland.errors import InvalidPathError, PathTraversalError

SEPARATOR = "."

_MISSING = object()


def parse(path: str) -> list[str]:
    """Split a dot path into its segments.

    Args:
        path: Dot-separated path, e.g. ``"a.b.c"``.

    Returns:
        The list of segments.

    Raises:
        InvalidPathError: If the path is empty or has an empty segment.
    """
    if not isinstance(path, str):
        raise InvalidPathError(f"Path must be a string, not {type(path).__name__}")
    if not path:
        raise InvalidPathError("Path must not be empty")
    segments = path.split(SEPARATOR)
    if any(segment == "" for segment in segments):
        raise InvalidPathError(f"Path '{path}' contains an empty segment")
    return segments


def _index(segment: str) -> Optional[int]:
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _is_container(node: Any) -> bool:
    return isinstance(node, (dict, list))


def _lookup(node: Any, segment: str) -> Any:
    """Return the child of ``node`` at ``segment`` or ``_MISSING``."""
    if isinstance(node, dict):
        return node.get(segment, _MISSING)
    if isinstance(node, list):
        index = _index(segment)
        if index is None or index >= len(node):
            return _MISSING
        return node[index]
    return _MISSING


def _list_index(node: list, segments: list[str], position: int) -> int:
    index = _index(segments[position])
    if index is None:
        raise PathTraversalError(SEPARATOR.join(segments), segments[position])
    return index


def _assign(node: Any, segments: list[str], position: int, value: Any) -> None:
    segment = segments[position]
    if isinstance(node, dict):
        node[segment] = value
        return
    index = _list_index(node, segments, position)
    if index < len(node):
        node[index] = value
    else:
        node.extend([None] * (index - len(node)))
        node.append(value)


def get(tree: Any, segments: list[str]) -> Any:
    """Return a copy of the value at ``segments``, or None when absent."""
    node = tree
    for segment in segments:
        node = _lookup(node, segment)
        if node is _MISSING:
            return None
    return copy.deepcopy(node)


def has(tree: Any, segments: list[str]) -> bool:
    """Return True if ``segments`` resolves to a value, including ``null``."""
    node = tree
    for segment in segments:
        node = _lookup(node, segment)
        if node is _MISSING:
            return False
    return True


def set(tree: Any, segments: list[str], value: Any) -> None:
    """Store ``value`` at ``segments``, creating missing objects on the way.

    Lists may be extended by indexing at or past their end; any gap is
    filled with ``None``. The tree is not modified when an error is raised.

    Raises:
        PathTraversalError: If an intermediate value is not a container, or
            a list is addressed with a non-numeric segment.
    """
    if not _is_container(tree):
        raise PathTraversalError(SEPARATOR.join(segments), segments[0])

    node = tree
    for position in range(len(segments) - 1):
        child = _lookup(node, segments[position])
        if child is _MISSING:
            child = {}
            _assign(node, segments, position, child)
        elif not _is_container(child):
            raise PathTraversalError(
                SEPARATOR.join(segments), segments[position + 1]
            )
        node = child
    _assign(node, segments, len(segments) - 1, value)


def delete(tree: Any, segments: list[str]) -> Any:
    """Remove the value at ``segments`` and return it, or None when absent.

    Raises:
        PathTraversalError: If an intermediate value is not a container, or
            a list is addressed with a non-numeric segment.
    """
    if not _is_container(tree):
        raise PathTraversalError(SEPARATOR.join(segments), segments[0])

    node = tree
    for position in range(len(segments) - 1):
        if isinstance(node, list):
            _list_index(node, segments, position)
        child = _lookup(node, segments[position])
        if child is _MISSING:
            return None
        if not _is_container(child):
            raise PathTraversalError(
                SEPARATOR.join(segments), segments[position + 1]
            )
        node = child

    last = len(segments) - 1
    if isinstance(node, dict):
        return node.pop(segments[last], None)
    index = _list_index(node, segments, last)
    if index >= len(node):
        return None
    return node.pop(index)
