"""Dotted and indexed path navigation over document trees.

Paths such as ``"a.b[0].c"``, ``"a.0.c"`` or ``'a["x.y"]'`` are parsed into
string segments. Reads resolve missing segments to None; writes create
intermediate containers typed by the following segment (a list before an
index segment, a dict otherwise).
"""

from __future__ import annotations

from typing import Any

from core.errors import DocStorePatchError, DocStoreQueryError


def parse_path(path: str) -> tuple[str, ...]:
    """Split a path string into key-or-index segments.

    Args:
        path: Dotted/bracketed path, "" for the root value.

    Returns:
        Ordered path segments.

    Raises:
        DocStoreQueryError: If a bracket is never closed.
    """
    segments: list[str] = []
    current = ""
    index = 0
    while index < len(path):
        character = path[index]
        if character == ".":
            if current:
                segments.append(current)
                current = ""
        elif character == "[":
            if current:
                segments.append(current)
                current = ""
            closing_index = path.find("]", index + 1)
            if closing_index == -1:
                raise DocStoreQueryError(f"Invalid path '{path}': unclosed '['.")
            segments.append(path[index + 1 : closing_index].strip().strip("\"'"))
            index = closing_index
        else:
            current += character
        index += 1
    if current:
        segments.append(current)
    return tuple(segments)


def is_index_segment(segment: str) -> bool:
    """Return True when a segment addresses a list position."""
    return segment.isascii() and segment.isdigit()


def get_path(document: Any, path: str) -> Any:
    """Resolve a path inside a document tree.

    Args:
        document: Root value to navigate from.
        path: Path string, "" for the root itself.

    Returns:
        Resolved value, or None when any segment is missing.
    """
    return _resolve_segments(document, parse_path(path))


def _resolve_segments(document: Any, segments: tuple[str, ...]) -> Any:
    current = document
    for segment in segments:
        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list) and is_index_segment(segment):
            position = int(segment)
            if position >= len(current):
                return None
            current = current[position]
        else:
            return None
    return current


def set_path(document: dict[str, Any], path: str, value: Any) -> None:
    """Assign a value at a path, creating intermediate containers.

    Args:
        document: Root document, mutated in place.
        path: Non-empty path string.
        value: Value to store at the leaf.

    Raises:
        DocStorePatchError: If the path is empty or crosses a list with a key.
    """
    segments = parse_path(path)
    if not segments:
        raise DocStorePatchError("Cannot set the document root; provide a non-empty path.")
    current: Any = document
    for position, segment in enumerate(segments[:-1]):
        next_segment = segments[position + 1]
        existing = _read_child(current, segment, path)
        if not isinstance(existing, (dict, list)):
            existing = [] if is_index_segment(next_segment) else {}
            _write_child(current, segment, existing, path)
        current = existing
    _write_child(current, segments[-1], value, path)


def unset_path(document: dict[str, Any], path: str) -> bool:
    """Remove the leaf at a path.

    Dict keys are deleted; list slots are reset to None so the
    positions of later elements do not shift.

    Args:
        document: Root document, mutated in place.
        path: Path string.

    Returns:
        True when a value was removed, False when the path did not exist.
    """
    segments = parse_path(path)
    if not segments:
        return False
    parent = _resolve_segments(document, segments[:-1])
    leaf = segments[-1]
    if isinstance(parent, dict):
        if leaf not in parent:
            return False
        del parent[leaf]
        return True
    if isinstance(parent, list) and is_index_segment(leaf):
        position = int(leaf)
        if position >= len(parent):
            return False
        parent[position] = None
        return True
    return False


def _read_child(container: Any, segment: str, path: str) -> Any:
    if isinstance(container, dict):
        return container.get(segment)
    _require_index(container, segment, path)
    position = int(segment)
    return container[position] if position < len(container) else None


def _write_child(container: Any, segment: str, value: Any, path: str) -> None:
    if isinstance(container, dict):
        container[segment] = value
        return
    _require_index(container, segment, path)
    position = int(segment)
    if position >= len(container):
        container.extend([None] * (position + 1 - len(container)))
    container[position] = value


def _require_index(container: list[Any], segment: str, path: str) -> None:
    if not is_index_segment(segment):
        raise DocStorePatchError(
            f"Cannot set path '{path}': segment '{segment}' addresses a list "
            "and must be a non-negative integer."
        )
