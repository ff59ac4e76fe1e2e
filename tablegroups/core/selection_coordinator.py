"""Module: selection_coordinator.py

Author: Michael Economou
Date: 2026-10-02

Selection coordinator between the item catalog, the group tree and the
editors of the active group.

The active group is the single selected group header. Edits typed into the
description, application flag and field value editors are staged here and
written to the registry (as undoable edits) when the selection moves away,
before undo/redo and before change detection. Staged writes carry the name
of the group they were typed for; a write for a group that is no longer
active is rejected.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from tablegroups.core.group_registry import GroupRegistry
from tablegroups.core.history.edit_history import EditHistory
from tablegroups.core.membership_tree import MembershipTree
from tablegroups.models.group_information import GroupInformation
from tablegroups.utils.events import Observable, Signal
from tablegroups.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class SelectionCoordinator(Observable):
    """Keeps the active group and its staged edits in sync with the tree selection."""

    active_group_changed = Signal(object)  # str | None
    group_actions_enabled = Signal(bool)
    pending_changed = Signal()

    def __init__(self, registry: GroupRegistry, tree: MembershipTree, history: EditHistory):
        self.registry = registry
        self.tree = tree
        self.history = history

        self._active_group: str | None = None
        self._pending_description: str | None = None
        self._pending_application: bool | None = None
        self._pending_values: dict[str, str] = {}
        self._is_node_selection_changing = False

        tree.selection_changed.connect(self._on_tree_selection_changed)
        registry.group_renamed.connect(self._on_group_renamed)
        registry.group_removed.connect(self._on_group_removed)

    # =====================================
    # Active group
    # =====================================

    @property
    def active_group(self) -> str | None:
        return self._active_group

    def active_group_info(self) -> GroupInformation | None:
        if self._active_group is None:
            return None
        return self.registry.lookup(self._active_group)

    def select_items(self, item_paths: Iterable[str]) -> list[str]:
        """Select the groups that contain every one of the given catalog items.

        The tree selection is cleared when no group contains them all.

        Returns:
            The selected group names

        """
        if self._is_node_selection_changing:
            return self.tree.selected_group_names()

        self._is_node_selection_changing = True
        try:
            groups = self.tree.item_to_groups(item_paths)
            if groups:
                self.tree.select_groups(groups)
            else:
                self.tree.clear_selection()
        finally:
            self._is_node_selection_changing = False

        logger.debug("[SelectionCoordinator] Items select groups: %s", groups, extra={"dev_only": True})
        return groups

    def _on_tree_selection_changed(self) -> None:
        if self.history.is_recording:
            self.flush()
        else:
            # Undo/redo restores the stored values; staged edits are stale
            self.discard_pending()

        selected = self.tree.selected_group_names()
        new_active = selected[0] if len(selected) == 1 else None
        self._set_active_group(new_active)

    def _set_active_group(self, name: str | None) -> None:
        if name == self._active_group:
            return

        self.discard_pending()
        self._active_group = name
        logger.debug("[SelectionCoordinator] Active group: %s", name, extra={"dev_only": True})
        self.active_group_changed.emit(name)
        self.group_actions_enabled.emit(name is not None)

    def _on_group_renamed(self, old_name: str, new_name: str) -> None:
        if self._active_group == old_name:
            self._active_group = new_name
            self.active_group_changed.emit(new_name)

    def _on_group_removed(self, name: str) -> None:
        if self._active_group == name:
            self.discard_pending()

    # =====================================
    # Staged edits
    # =====================================

    def _accepts(self, owner: str, what: str) -> bool:
        if owner != self._active_group or self._active_group is None:
            logger.warning(
                "[SelectionCoordinator] Rejected %s for '%s'; active group is '%s'",
                what,
                owner,
                self._active_group,
            )
            return False
        return True

    def stage_description(self, owner: str, description: str) -> bool:
        """Stage a description typed for the given group."""
        if not self._accepts(owner, "description"):
            return False
        self._pending_description = description
        self.pending_changed.emit()
        return True

    def stage_application(self, owner: str, is_application: bool) -> bool:
        """Stage an application flag change for the given group."""
        if not self._accepts(owner, "application flag"):
            return False
        self._pending_application = is_application
        self.pending_changed.emit()
        return True

    def stage_field_value(self, owner: str, field_name: str, value: str) -> bool:
        """Stage a data field value typed for the given group."""
        if not self._accepts(owner, f"field '{field_name}'"):
            return False
        self._pending_values[field_name] = value
        self.pending_changed.emit()
        return True

    def has_pending(self) -> bool:
        return (
            self._pending_description is not None
            or self._pending_application is not None
            or bool(self._pending_values)
        )

    def pending_changes(self) -> dict[str, Any]:
        """Staged values of the active group (for display)."""
        changes: dict[str, Any] = {}
        if self._pending_description is not None:
            changes["description"] = self._pending_description
        if self._pending_application is not None:
            changes["is_application"] = self._pending_application
        if self._pending_values:
            changes["values"] = dict(self._pending_values)
        return changes

    def discard_pending(self) -> None:
        if not self.has_pending():
            return
        self._pending_description = None
        self._pending_application = None
        self._pending_values.clear()
        self.pending_changed.emit()

    def flush(self) -> bool:
        """Write the staged values of the active group into the registry.

        The writes form one undoable sequence, or join the sequence that is
        already open.

        Returns:
            True if anything was written

        """
        if not self.has_pending():
            return False

        name = self._active_group
        if name is None or name not in self.registry:
            self.discard_pending()
            return False

        description = self._pending_description
        is_application = self._pending_application
        values = dict(self._pending_values)
        self.discard_pending()

        group = self.registry.lookup(name)
        changed = False
        with self.history.compound(f"Update group '{name}'"):
            if description is not None:
                changed = self.registry.set_description(name, description) or changed
            if is_application is not None:
                changed = self.registry.set_application(name, is_application) or changed
            for field_name, value in values.items():
                if group is None or group.fields.get_field(field_name) is None:
                    logger.warning(
                        "[SelectionCoordinator] Field '%s' no longer exists in '%s'",
                        field_name,
                        name,
                    )
                    continue
                changed = self.registry.set_field_value(name, field_name, value) or changed

        if changed:
            logger.debug("[SelectionCoordinator] Flushed edits of %s", name, extra={"dev_only": True})
        return changed
