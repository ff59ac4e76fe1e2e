"""Module: membership_tree.py

Author: Michael Economou
Date: 2026-10-02

Membership tree: group headers and the catalog items assigned to them.

The tree has two levels below its invisible root: group headers
(GROUP_NODE_LEVEL) and item leaves (ITEM_NODE_LEVEL). Nodes are addressed by
key, never by object: a header is (group_name, "") and a leaf is
(group_name, item_path). The same item may sit under several groups, but
only once under each.

Structural changes and selection changes are recorded in the EditHistory as
atomic edits; the selection is restored by undo/redo together with the
structure it refers to.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from tablegroups.core.errors import DuplicateNameError, NotFoundError
from tablegroups.core.history.edit_history import EditHistory
from tablegroups.core.history.edits import (
    SelectionEdit,
    TreeAddItemEdit,
    TreeInsertSubtreeEdit,
    TreeRemoveItemEdit,
    TreeRemoveSubtreeEdit,
    TreeRenameEdit,
)
from tablegroups.models.item_path import (
    GROUP_NODE_LEVEL,
    ITEM_NODE_LEVEL,
    GroupRow,
    normalize_item_paths,
)
from tablegroups.utils.events import Observable, Signal
from tablegroups.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

# (group_name, item_path); item_path is "" for a group header
NodeKey = tuple[str, str]


class MembershipTree(Observable):
    """Group headers with their item leaves, in document order."""

    tree_changed = Signal()
    selection_changed = Signal()

    def __init__(self, history: EditHistory, rows: Iterable[GroupRow] | None = None):
        """Initialize the tree.

        Args:
            history: Edit history receiving the tree edits
            rows: Initial group definition rows; loaded without recording history

        """
        self.history = history
        self._groups: dict[str, list[str]] = {}
        self._selected: set[NodeKey] = set()

        for group_name, item_path in rows or ():
            items = self._groups.setdefault(group_name, [])
            if item_path and item_path not in items:
                items.append(item_path)

    # =====================================
    # Queries
    # =====================================

    def has_group(self, name: str) -> bool:
        return name in self._groups

    def group_names(self) -> list[str]:
        return list(self._groups)

    def items_in_group(self, name: str) -> list[str]:
        if name not in self._groups:
            raise NotFoundError(name)
        return list(self._groups[name])

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def walk(self) -> Iterator[tuple[int, str, str]]:
        """Traverse the tree in document order.

        Yields:
            (level, group_name, item_path); item_path is "" for headers

        """
        for group_name, items in list(self._groups.items()):
            yield GROUP_NODE_LEVEL, group_name, ""
            for item_path in list(items):
                yield ITEM_NODE_LEVEL, group_name, item_path

    def item_to_groups(self, item_paths: Iterable[str]) -> list[str]:
        """Find the groups that contain every one of the given items.

        A single pass over the tree in document order: the match counter is
        reset at each header, a header qualifies once all queried items have
        been seen under it, and the counter is then disabled until the next
        header.

        Args:
            item_paths: Catalog paths; normalized before matching

        Returns:
            Names of the qualifying groups, in document order

        """
        targets = set(normalize_item_paths(item_paths))
        if not targets:
            return []

        matches: list[str] = []
        current_group = ""
        match_count = 0
        for level, group_name, item_path in self.walk():
            if level == GROUP_NODE_LEVEL:
                current_group = group_name
                match_count = 0
            elif match_count != -1 and item_path in targets:
                match_count += 1
                if match_count == len(targets):
                    matches.append(current_group)
                    match_count = -1

        return matches

    def definitions_from_tree(self) -> list[GroupRow]:
        """Build the group definition rows; an empty group gets one header row."""
        rows: list[GroupRow] = []
        for group_name, items in self._groups.items():
            if not items:
                rows.append(GroupRow(group_name, ""))
            else:
                rows.extend(GroupRow(group_name, item_path) for item_path in items)
        return rows

    # =====================================
    # Structure operations
    # =====================================

    def insert_group_header(self, name: str, index: int | None = None) -> None:
        """Insert an empty group header (appended when index is None).

        Raises:
            DuplicateNameError: If the tree already has this header

        """
        if name in self._groups:
            raise DuplicateNameError(name)

        index = len(self._groups) if index is None else index
        self._insert_header(name, index, [])
        self.history.record(TreeInsertSubtreeEdit(self, name, index, []))
        self.history.end_auto_sequence()

    def remove_group_subtree(self, names: Iterable[str]) -> list[str]:
        """Remove group headers and every item under them.

        Names without a header are ignored.

        Returns:
            Names of the headers actually removed

        """
        present = [name for name in dict.fromkeys(names) if name in self._groups]
        if not present:
            return []

        remaining = frozenset(key for key in self._selected if key[0] not in present)
        self._change_selection(remaining)

        for name in present:
            index = self._header_index(name)
            items = list(self._groups[name])
            self._remove_header(name)
            self.history.record(TreeRemoveSubtreeEdit(self, name, index, items))

        logger.debug("[MembershipTree] Removed subtrees: %s", present, extra={"dev_only": True})
        self.history.end_auto_sequence()
        return present

    def add_items_to_group(self, item_paths: Iterable[str], target_group: str) -> list[str]:
        """Assign catalog items to a group.

        Paths are normalized first; header/category-only paths and items
        already under the group are skipped.

        Returns:
            Item paths actually added

        Raises:
            NotFoundError: If the tree has no such group

        """
        if target_group not in self._groups:
            raise NotFoundError(target_group)

        added: list[str] = []
        for item_path in normalize_item_paths(item_paths):
            items = self._groups[target_group]
            if item_path in items:
                continue
            index = len(items)
            self._add_item(target_group, item_path, index)
            self.history.record(TreeAddItemEdit(self, target_group, item_path, index))
            added.append(item_path)

        if added:
            logger.debug(
                "[MembershipTree] Added %d items to %s",
                len(added),
                target_group,
                extra={"dev_only": True},
            )
        self.history.end_auto_sequence()
        return added

    def remove_selected_items(self) -> list[GroupRow]:
        """Remove the selected item leaves; group headers always stay.

        Returns:
            The removed (group_name, item_path) rows, in document order

        """
        leaves = self.selected_items()
        if not leaves:
            return []

        self._change_selection(frozenset(key for key in self._selected if not key[1]))

        for group_name, item_path in leaves:
            index = self._groups[group_name].index(item_path)
            self._remove_item(group_name, item_path)
            self.history.record(TreeRemoveItemEdit(self, group_name, item_path, index))

        self.history.end_auto_sequence()
        return [GroupRow(group_name, item_path) for group_name, item_path in leaves]

    def rename_group_subtree(self, old_name: str, new_name: str) -> None:
        """Rename a group header; its items and selection follow.

        Raises:
            NotFoundError: If the old header does not exist
            DuplicateNameError: If the new header already exists

        """
        if old_name not in self._groups:
            raise NotFoundError(old_name)
        if new_name in self._groups:
            raise DuplicateNameError(new_name)

        self._rename_header(old_name, new_name)
        self.history.record(TreeRenameEdit(self, old_name, new_name))
        self.history.end_auto_sequence()

    def copy_group_subtree(self, source_name: str, target_name: str) -> None:
        """Append a new header holding the same items as the source header.

        Raises:
            NotFoundError: If the source header does not exist
            DuplicateNameError: If the target header already exists

        """
        if source_name not in self._groups:
            raise NotFoundError(source_name)
        if target_name in self._groups:
            raise DuplicateNameError(target_name)

        index = len(self._groups)
        items = list(self._groups[source_name])
        self._insert_header(target_name, index, items)
        self.history.record(TreeInsertSubtreeEdit(self, target_name, index, items))
        self.history.end_auto_sequence()

    # =====================================
    # Selection
    # =====================================

    def selected_keys(self) -> frozenset[NodeKey]:
        return frozenset(self._selected)

    def selected_group_names(self) -> list[str]:
        """Selected group headers, in document order."""
        return [name for name in self._groups if (name, "") in self._selected]

    def selected_items(self) -> list[NodeKey]:
        """Selected item leaves, in document order."""
        return [
            (group_name, item_path)
            for level, group_name, item_path in self.walk()
            if level == ITEM_NODE_LEVEL and (group_name, item_path) in self._selected
        ]

    def select_groups(self, names: Iterable[str]) -> bool:
        """Select exactly the given group headers (unknown names are ignored)."""
        return self.select_nodes((name, "") for name in names)

    def select_nodes(self, keys: Iterable[NodeKey]) -> bool:
        """Select exactly the given nodes (unknown nodes are ignored).

        Returns:
            True if the selection changed

        """
        changed = self._change_selection(frozenset(key for key in keys if self._node_exists(key)))
        self.history.end_auto_sequence()
        return changed

    def clear_selection(self) -> bool:
        return self.select_nodes(())

    def _change_selection(self, new_keys: frozenset[NodeKey]) -> bool:
        old_keys = frozenset(self._selected)
        if new_keys == old_keys:
            return False

        self._set_selection(new_keys)
        self.history.record(SelectionEdit(self, old_keys, new_keys))
        return True

    def _node_exists(self, key: NodeKey) -> bool:
        group_name, item_path = key
        if group_name not in self._groups:
            return False
        return not item_path or item_path in self._groups[group_name]

    def _header_index(self, name: str) -> int:
        for index, group_name in enumerate(self._groups):
            if group_name == name:
                return index
        raise NotFoundError(name)

    # =====================================
    # Primitives (no history; used by the edits)
    # =====================================

    def _insert_header(self, name: str, index: int, items: list[str]) -> None:
        if name in self._groups:
            raise DuplicateNameError(name)

        entries = list(self._groups.items())
        entries.insert(index, (name, list(items)))
        self._groups = dict(entries)
        self.tree_changed.emit()

    def _remove_header(self, name: str) -> None:
        del self._groups[name]
        stale = {key for key in self._selected if key[0] == name}
        self.tree_changed.emit()
        if stale:
            self._set_selection(frozenset(self._selected - stale))

    def _add_item(self, group_name: str, item_path: str, index: int) -> None:
        self._groups[group_name].insert(index, item_path)
        self.tree_changed.emit()

    def _remove_item(self, group_name: str, item_path: str) -> None:
        self._groups[group_name].remove(item_path)
        self.tree_changed.emit()
        if (group_name, item_path) in self._selected:
            self._set_selection(frozenset(self._selected - {(group_name, item_path)}))

    def _rename_header(self, old_name: str, new_name: str) -> None:
        self._groups = {
            (new_name if key == old_name else key): value for key, value in self._groups.items()
        }
        # The same nodes stay selected under the new name
        self._selected = {
            (new_name if group_name == old_name else group_name, item_path)
            for group_name, item_path in self._selected
        }
        self.tree_changed.emit()

    def _set_selection(self, keys: frozenset[NodeKey]) -> None:
        if set(keys) == self._selected:
            return
        self._selected = set(keys)
        self.selection_changed.emit()
