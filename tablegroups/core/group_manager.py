"""Module: group_manager.py

Author: Michael Economou
Date: 2026-10-02

Group manager session: the facade used by the group manager window.

The session owns the registry, the membership tree, the edit history, the
selection coordinator and the committed snapshot. Every user action
validates first, then runs as one compound edit sequence so that a single
undo reverts the registry and tree halves together.

Lifecycle:
1. Load the stored groups (history suspended; the change indicator stays off)
2. Capture the committed snapshot
3. Edit / undo / redo (change indicator follows the diff)
4. Commit: the change-set goes to the store through the commit runner;
   on success the snapshot is replaced and the deleted list cleared. The
   history is cleared either way.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from tablegroups.app.ports.field_table_editor import FieldTableEditorPort
from tablegroups.app.ports.group_store import GroupStorePort, StoredGroups
from tablegroups.config import CHANGE_INDICATOR, DIALOG_TITLE
from tablegroups.core.commit_diff import ChangeSet, CommittedSnapshot, compute_change_set
from tablegroups.core.errors import CommitInProgressError, NotFoundError
from tablegroups.core.group_registry import GroupRegistry
from tablegroups.core.history.edit_history import EditHistory
from tablegroups.core.membership_tree import MembershipTree
from tablegroups.core.selection_coordinator import SelectionCoordinator
from tablegroups.core.workers import SynchronousCommitRunner
from tablegroups.models.field_information import FieldInformation
from tablegroups.models.group_information import GroupInformation
from tablegroups.models.item_path import GroupRow
from tablegroups.utils.events import Observable, Signal
from tablegroups.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class GroupManagerSession(Observable):
    """One editing session of the stored groups."""

    changed_state = Signal(bool)
    commit_started = Signal()
    commit_finished = Signal(bool)

    def __init__(
        self,
        store: GroupStorePort,
        field_editor: FieldTableEditorPort | None = None,
        commit_runner: Any = None,
        history: EditHistory | None = None,
        stored: StoredGroups | None = None,
    ):
        """Initialize the session.

        Args:
            store: Group store
            field_editor: Data field table editor, if one is open
            commit_runner: Object with run(change_set, callback); synchronous when None
            history: Edit history; a new one when None
            stored: Already loaded groups (e.g. from a SnapshotLoadWorker); loaded from the store when None

        """
        self.store = store
        self.field_editor = field_editor
        self.commit_runner = commit_runner or SynchronousCommitRunner(store)
        self.history = history or EditHistory()

        self._committing = False
        self._commit_change_set: ChangeSet | None = None
        self._changed = False
        self._indicator_armed = False

        if stored is None:
            stored = store.load_groups()
        rows, groups = self._reconcile(stored)

        with self.history.suspended():
            self.registry = GroupRegistry(self.history, groups)
            self.tree = MembershipTree(self.history, rows)

        self.committed = CommittedSnapshot.capture(self.registry, self.tree)
        self.coordinator = SelectionCoordinator(self.registry, self.tree, self.history)

        self.history.history_changed.connect(self._update_changed_state)
        self._indicator_armed = True

        logger.info(
            "[GroupManagerSession] Loaded %d groups, %d rows",
            len(self.registry),
            len(self.committed.rows),
        )

    @staticmethod
    def _reconcile(stored: StoredGroups) -> tuple[list[GroupRow], list[GroupInformation]]:
        """Give every stored group a tree header and every header a group."""
        rows = [GroupRow(*row) for row in stored.rows]
        groups = [group.copy() for group in stored.groups]

        known_groups = {group.name for group in groups}
        row_groups = dict.fromkeys(row.group_name for row in rows)
        for name in row_groups:
            if name not in known_groups:
                groups.append(GroupInformation(name=name))
                known_groups.add(name)
        for group in groups:
            if group.name not in row_groups:
                rows.append(GroupRow(group.name, ""))

        return rows, groups

    # =====================================
    # State queries
    # =====================================

    @property
    def changed(self) -> bool:
        """Last computed value of the change indicator."""
        return self._changed

    @property
    def is_committing(self) -> bool:
        return self._committing

    @property
    def active_group(self) -> str | None:
        return self.coordinator.active_group

    def change_set(self) -> ChangeSet:
        """Flush staged edits and diff the live state against the snapshot."""
        self.coordinator.flush()
        return self._compute_change_set()

    def is_changed(self) -> bool:
        return self.change_set().changed

    def has_unsaved_changes(self) -> bool:
        """True if closing now would lose group or field table edits."""
        if self.is_changed():
            return True
        return bool(self.field_editor is not None and self.field_editor.has_unsaved_changes())

    def window_title(self) -> str:
        return DIALOG_TITLE + (CHANGE_INDICATOR if self._changed else "")

    def _compute_change_set(self) -> ChangeSet:
        return compute_change_set(self.registry, self.tree, self.committed, self.registry.deleted_groups)

    def _update_changed_state(self) -> None:
        if not self._indicator_armed:
            return

        changed = self._compute_change_set().changed
        if changed != self._changed:
            self._changed = changed
            self.changed_state.emit(changed)

    def _check_not_committing(self) -> None:
        if self._committing:
            raise CommitInProgressError()

    # =====================================
    # Group operations
    # =====================================

    def new_group(self, name: str, description: str = "", is_application: bool = False) -> GroupInformation:
        """Create a group with an empty tree header.

        Raises:
            EmptyNameError: If the name is blank
            DuplicateNameError: If the name is already in use

        """
        self._check_not_committing()
        name = self.registry.validate_new_name(name)
        self.coordinator.flush()

        with self.history.compound(f"New group '{name}'"):
            group = self.registry.add_group(name, description, is_application)
            self.tree.insert_group_header(name)
        return group

    def delete_groups(self, names: Iterable[str]) -> list[str]:
        """Delete groups and their tree subtrees; unknown names are ignored.

        Returns:
            Names of the groups deleted

        """
        self._check_not_committing()
        present = [name for name in dict.fromkeys(names) if name in self.registry or self.tree.has_group(name)]
        if not present:
            return []
        self.coordinator.flush()

        label = f"Delete group '{present[0]}'" if len(present) == 1 else f"Delete {len(present)} groups"
        with self.history.compound(label):
            self.tree.remove_group_subtree(present)
            for name in present:
                self.registry.remove_group(name)
        return present

    def delete_selected_groups(self) -> list[str]:
        return self.delete_groups(self.tree.selected_group_names())

    def rename_group(self, old_name: str, new_name: str) -> GroupInformation:
        """Rename a group in the registry and the tree.

        Raises:
            NotFoundError: If the group does not exist
            EmptyNameError: If the new name is blank
            DuplicateNameError: If the new name is already in use

        """
        self._check_not_committing()
        if old_name not in self.registry:
            raise NotFoundError(old_name)
        new_name = self.registry.validate_new_name(new_name, allow=old_name)
        if new_name == old_name:
            return self.registry.lookup(old_name)  # type: ignore[return-value]
        self.coordinator.flush()

        with self.history.compound(f"Rename group '{old_name}' to '{new_name}'"):
            group = self.registry.rename_group(old_name, new_name)
            self.tree.rename_group_subtree(old_name, new_name)
        return group

    def copy_group(self, source_name: str, target_name: str) -> GroupInformation:
        """Copy a group (attributes, fields and items) under a new name.

        Raises:
            NotFoundError: If the source group does not exist
            EmptyNameError: If the target name is blank
            DuplicateNameError: If the target name is already in use

        """
        self._check_not_committing()
        if source_name not in self.registry:
            raise NotFoundError(source_name)
        target_name = self.registry.validate_new_name(target_name)
        self.coordinator.flush()

        with self.history.compound(f"Copy group '{source_name}' to '{target_name}'"):
            group = self.registry.copy_group(source_name, target_name)
            self.tree.copy_group_subtree(source_name, target_name)
        return group

    def add_items_to_group(self, item_paths: Iterable[str], group_name: str) -> list[str]:
        """Assign catalog items to a group.

        Raises:
            NotFoundError: If the group does not exist

        """
        self._check_not_committing()
        if not self.tree.has_group(group_name):
            raise NotFoundError(group_name)

        with self.history.compound(f"Add items to '{group_name}'"):
            return self.tree.add_items_to_group(item_paths, group_name)

    def remove_selected_items(self) -> list[GroupRow]:
        self._check_not_committing()
        with self.history.compound("Remove items"):
            return self.tree.remove_selected_items()

    # =====================================
    # Attribute and field operations
    # =====================================

    def set_description(self, name: str, description: str) -> bool:
        return self._group_edit(f"Change description of '{name}'", self.registry.set_description, name, description)

    def set_application(self, name: str, is_application: bool) -> bool:
        return self._group_edit(
            f"Change application flag of '{name}'", self.registry.set_application, name, is_application
        )

    def set_field_value(self, name: str, field_name: str, value: str) -> bool:
        return self._group_edit(
            f"Change '{field_name}' of '{name}'", self.registry.set_field_value, name, field_name, value
        )

    def add_field(self, name: str, field_info: FieldInformation, index: int | None = None) -> FieldInformation:
        return self._group_edit(f"Add field to '{name}'", self.registry.add_field, name, field_info, index)

    def remove_field(self, name: str, field_name: str) -> None:
        self._group_edit(f"Remove field '{field_name}' from '{name}'", self.registry.remove_field, name, field_name)

    def clear_field_values(self, name: str) -> bool:
        return self._group_edit(f"Clear field values of '{name}'", self.registry.clear_field_values, name)

    def _group_edit(self, label: str, operation: Callable[..., Any], *args: Any) -> Any:
        self._check_not_committing()
        self.coordinator.flush()
        with self.history.compound(label):
            return operation(*args)

    # =====================================
    # Selection
    # =====================================

    def select_group(self, name: str | None) -> bool:
        """Select one group header, or clear the selection when None."""
        self._check_not_committing()
        if name is None:
            return self.tree.clear_selection()
        return self.tree.select_groups([name])

    def select_groups(self, names: Iterable[str]) -> bool:
        self._check_not_committing()
        return self.tree.select_groups(names)

    def select_items(self, item_paths: Iterable[str]) -> list[str]:
        self._check_not_committing()
        return self.coordinator.select_items(item_paths)

    # =====================================
    # Undo / redo
    # =====================================

    def request_undo(self) -> bool:
        self._check_not_committing()
        self.coordinator.flush()
        return self.history.undo()

    def request_redo(self) -> bool:
        self._check_not_committing()
        self.coordinator.flush()
        return self.history.redo()

    # =====================================
    # Commit
    # =====================================

    def request_commit(self, confirm_discard: Callable[[], bool] | None = None) -> bool:
        """Send the change-set to the store.

        Args:
            confirm_discard: Asked when the change-set carries field updates
                and the field table editor has unsaved changes that the
                commit would discard; the commit is cancelled unless it
                returns True

        Returns:
            True if a commit was started

        """
        self._check_not_committing()
        change_set = self.change_set()
        if not change_set.changed:
            logger.info("[GroupManagerSession] No group changes to store")
            return False

        if change_set.field_updates and self.field_editor is not None and self.field_editor.has_unsaved_changes():
            if confirm_discard is None or not confirm_discard():
                logger.info("[GroupManagerSession] Commit cancelled; field table has unsaved changes")
                return False

        self._committing = True
        self._commit_change_set = change_set
        self.commit_started.emit()
        logger.info(
            "[GroupManagerSession] Storing groups: %d rows, %d field updates, %d deletions",
            len(change_set.group_rows),
            len(change_set.field_updates),
            len(change_set.deletions),
        )
        self.commit_runner.run(change_set, self.on_commit_complete)
        return True

    def on_commit_complete(self, success: bool) -> None:
        """Finish a commit started by request_commit().

        On success the committed snapshot is built from the change-set that
        was sent, so anything written to the live state while the store was
        busy still shows as a change.
        """
        change_set = self._commit_change_set
        self._committing = False
        self._commit_change_set = None
        if change_set is None:
            logger.warning("[GroupManagerSession] Commit completion without a commit in progress")
            return

        if success:
            self.committed = CommittedSnapshot.build(change_set.group_rows, change_set.groups)
            self.registry.clear_deleted()
            if self.field_editor is not None:
                self.field_editor.reload()
            logger.info("[GroupManagerSession] Group updates stored")
        else:
            logger.warning("[GroupManagerSession] Group updates failed; changes kept in memory")

        # History is cleared whether or not the store succeeded
        self.history.clear()
        self._update_changed_state()
        self.commit_finished.emit(success)
