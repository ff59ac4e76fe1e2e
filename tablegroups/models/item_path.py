"""Module: item_path.py

Author: Michael Economou
Date: 2026-10-02

Catalog item paths and membership tree levels.

Catalog paths look like "Prototypes/tableA/tableA.child". The category
(filter) nodes exist only in the catalog view and are removed before a path
is stored under a group.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from tablegroups.config import ITEM_CATEGORY_NODES, ITEM_PATH_SEPARATOR

# Levels of the nodes below the invisible tree root
GROUP_NODE_LEVEL = 1
ITEM_NODE_LEVEL = 2


class GroupRow(NamedTuple):
    """One group definition row; header-only groups use an empty item path."""

    group_name: str
    item_path: str = ""


def normalize_item_path(path: str, category_nodes: Iterable[str] = ITEM_CATEGORY_NODES) -> str:
    """Normalize a catalog path into the form stored in the membership tree.

    Segments are stripped of surrounding whitespace, empty segments are
    dropped, and category segments are removed from both ends.

    Args:
        path: Catalog path
        category_nodes: Names of the catalog category nodes

    Returns:
        The normalized path, or "" when the path names only category nodes

    """
    categories = set(category_nodes)
    segments = [segment.strip() for segment in path.split(ITEM_PATH_SEPARATOR)]
    segments = [segment for segment in segments if segment]

    while segments and segments[0] in categories:
        segments.pop(0)
    while segments and segments[-1] in categories:
        segments.pop()

    return ITEM_PATH_SEPARATOR.join(segments)


def normalize_item_paths(paths: Iterable[str]) -> list[str]:
    """Normalize several paths, dropping non-items and repeats (first one wins)."""
    result: list[str] = []
    for path in paths:
        item_path = normalize_item_path(path)
        if item_path and item_path not in result:
            result.append(item_path)
    return result
