"""Dotted-path access into the settings document.

A path such as ``features.booking.enabled`` names successive mapping keys
starting at the document root. Reads never create anything; writes only
assign below an existing parent.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from .exceptions import PathNotFoundError, SettingsValidationError
from .schema import Node, node_at, validate

PathLike = str | Sequence[str]


def split_path(path: PathLike) -> tuple[str, ...]:
    """Split a dotted path into segments.

    ``""`` is the root and yields ``()``. Sequences are taken as already split.

    Raises:
        PathNotFoundError: If any segment is empty (``"a..b"``, ``".a"``).
    """
    if isinstance(path, str):
        if path == "":
            return ()
        segments = tuple(path.split("."))
        dotted = path
    else:
        segments = tuple(path)
        dotted = ".".join(str(s) for s in segments)

    if any(not isinstance(s, str) or s == "" for s in segments):
        raise PathNotFoundError(dotted, detail=f"Setting path '{dotted}' is malformed")
    return segments


def join_path(segments: Sequence[str]) -> str:
    return ".".join(segments)


def resolve(root: Mapping[str, Any], path: PathLike) -> Any:
    """Return the node at ``path``.

    Raises:
        PathNotFoundError: If a segment is missing or an intermediate node is
            not a mapping.
    """
    segments = split_path(path)
    node: Any = root
    for segment in segments:
        if not isinstance(node, Mapping) or segment not in node:
            raise PathNotFoundError(join_path(segments))
        node = node[segment]
    return node


def set_at(
    root: MutableMapping[str, Any],
    path: PathLike,
    value: Any,
    schema: Node | None = None,
) -> None:
    """Assign ``value`` at ``path`` inside ``root``.

    Intermediate nodes are never created. With ``schema`` the target must be
    declared and ``value`` must match it; both are checked before ``root``
    is touched. Without a schema the write is untyped.

    An empty path replaces the contents of ``root`` with ``value``.

    Raises:
        PathNotFoundError: If the parent is missing or not a mapping, or the
            target is not declared in ``schema``.
        SettingsValidationError: If ``value`` does not match the declared node,
            or an empty-path value is not a mapping.
    """
    segments = split_path(path)
    dotted = join_path(segments)

    if schema is not None:
        value = validate(node_at(schema, segments), value, dotted)

    if not segments:
        if not isinstance(value, Mapping):
            raise SettingsValidationError(dotted, "the document root must be an object")
        replacement = copy.deepcopy(dict(value))
        root.clear()
        root.update(replacement)
        return

    parent = resolve(root, segments[:-1])
    if not isinstance(parent, MutableMapping):
        raise PathNotFoundError(dotted)
    parent[segments[-1]] = value
