"""Module: group_registry.py

Author: Michael Economou
Date: 2026-10-02

Registry of the live groups.

The registry exclusively owns every GroupInformation and its FieldSet. Public
operations validate their arguments first, then apply the change through a
private primitive and record the matching atomic edit in the EditHistory.
Undo/redo replays the edits through the same primitives, so the registry
signals fire for user actions and history replays alike.

The deleted-groups list collects the names removed (or renamed away from)
since the last commit. Appending to it is itself an undoable edit.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from tablegroups.config import DEFAULT_APPLICATION_FIELDS
from tablegroups.core.errors import DuplicateNameError, EmptyNameError, NotFoundError
from tablegroups.core.history.edit_history import EditHistory
from tablegroups.core.history.edits import (
    AddGroupEdit,
    DeletedMarkerEdit,
    FieldSetEdit,
    GroupAttributeEdit,
    RemoveGroupEdit,
    RenameGroupEdit,
)
from tablegroups.models.field_information import FieldInformation, FieldSet
from tablegroups.models.group_information import GroupInformation
from tablegroups.utils.events import Observable, Signal
from tablegroups.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

# Attributes that GroupAttributeEdit may change
_EDITABLE_ATTRIBUTES = ("description", "is_application")


class GroupRegistry(Observable):
    """Ordered collection of the live groups, keyed by name."""

    group_added = Signal(str)  # name
    group_removed = Signal(str)  # name
    group_renamed = Signal(str, str)  # old name, new name
    group_changed = Signal(str)  # name (attributes or fields)
    deleted_groups_changed = Signal()

    def __init__(self, history: EditHistory, groups: Iterable[GroupInformation] | None = None):
        """Initialize the registry.

        Args:
            history: Edit history receiving the registry edits
            groups: Initial groups; stored as copies without recording history

        """
        self.history = history
        self._groups: dict[str, GroupInformation] = {}
        self._deleted: list[str] = []

        for group in groups or ():
            if group.name in self._groups:
                raise DuplicateNameError(group.name)
            self._groups[group.name] = group.copy()

    # =====================================
    # Queries
    # =====================================

    def lookup(self, name: str) -> GroupInformation | None:
        """Return the live group with this name.

        The returned object belongs to the registry; change it only through
        the registry methods so the change is recorded.
        """
        return self._groups.get(name)

    def lookup_all(self) -> list[GroupInformation]:
        """Return the live groups in insertion order."""
        return list(self._groups.values())

    def group_names(self) -> list[str]:
        return list(self._groups)

    def index_of(self, name: str) -> int:
        for index, group_name in enumerate(self._groups):
            if group_name == name:
                return index
        raise NotFoundError(name)

    @property
    def deleted_groups(self) -> list[str]:
        """Names deleted or renamed away from since the last commit."""
        return list(self._deleted)

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def __iter__(self) -> Iterator[GroupInformation]:
        return iter(list(self._groups.values()))

    def __len__(self) -> int:
        return len(self._groups)

    def _require(self, name: str) -> GroupInformation:
        group = self._groups.get(name)
        if group is None:
            raise NotFoundError(name)
        return group

    def validate_new_name(self, name: str, allow: str | None = None) -> str:
        """Check a name for a new or renamed group without changing anything.

        Args:
            name: Proposed name
            allow: Existing name that the proposed name may equal (rename)

        Returns:
            The trimmed name

        Raises:
            EmptyNameError: If the name is blank
            DuplicateNameError: If another group already uses the name

        """
        trimmed = name.strip()
        if not trimmed:
            raise EmptyNameError("Group")
        if trimmed in self._groups and trimmed != allow:
            raise DuplicateNameError(trimmed)
        return trimmed

    # =====================================
    # Group operations
    # =====================================

    def add_group(
        self,
        name: str,
        description: str = "",
        is_application: bool = False,
        fields: FieldSet | None = None,
    ) -> GroupInformation:
        """Create a group at the end of the registry.

        Raises:
            EmptyNameError: If the name is blank
            DuplicateNameError: If the name is already in use

        """
        name = self.validate_new_name(name)
        group = GroupInformation(
            name=name,
            description=description,
            fields=fields if fields is not None else FieldSet(name),
        )
        index = len(self._groups)
        self._insert(group.copy(), index)
        self.history.record(AddGroupEdit(self, group, index))

        if is_application:
            self.set_application(name, True)

        logger.info("[GroupRegistry] Added group: %s", name)
        self.history.end_auto_sequence()
        return self._groups[name]

    def remove_group(self, name: str) -> bool:
        """Remove a group and mark its name deleted.

        Returns:
            False if no group has this name (nothing changes)

        """
        if name not in self._groups:
            logger.debug("[GroupRegistry] Remove ignored, no group: %s", name, extra={"dev_only": True})
            return False

        index = self.index_of(name)
        group, _ = self._detach(name)
        self.history.record(RemoveGroupEdit(self, group, index))
        self._mark_deleted(name)

        logger.info("[GroupRegistry] Removed group: %s", name)
        self.history.end_auto_sequence()
        return True

    def rename_group(self, old_name: str, new_name: str) -> GroupInformation:
        """Rename a group in place; its position in the registry is kept.

        Every field of the group is reassigned to the new name and the old
        name is marked deleted.

        Raises:
            NotFoundError: If no group has the old name
            EmptyNameError: If the new name is blank
            DuplicateNameError: If another group already uses the new name

        """
        self._require(old_name)
        new_name = self.validate_new_name(new_name, allow=old_name)
        if new_name == old_name:
            return self._groups[old_name]

        self._rename(old_name, new_name)
        self.history.record(RenameGroupEdit(self, old_name, new_name))
        self._mark_deleted(old_name)

        logger.info("[GroupRegistry] Renamed group: %s -> %s", old_name, new_name)
        self.history.end_auto_sequence()
        return self._groups[new_name]

    def copy_group(self, source_name: str, target_name: str) -> GroupInformation:
        """Create a deep copy of a group under a new name.

        Raises:
            NotFoundError: If the source group does not exist
            EmptyNameError: If the target name is blank
            DuplicateNameError: If the target name is already in use

        """
        source = self._require(source_name)
        target_name = self.validate_new_name(target_name)

        group = source.copy(target_name)
        index = len(self._groups)
        self._insert(group.copy(), index)
        self.history.record(AddGroupEdit(self, group, index))

        logger.info("[GroupRegistry] Copied group: %s -> %s", source_name, target_name)
        self.history.end_auto_sequence()
        return self._groups[target_name]

    # =====================================
    # Attribute operations
    # =====================================

    def set_description(self, name: str, description: str) -> bool:
        """Change a group's description; returns False if it is unchanged."""
        return self._change_attribute(name, "description", description)

    def set_application(self, name: str, is_application: bool) -> bool:
        """Change a group's application flag.

        Turning the flag on also adds the default application data fields
        the group does not have yet.

        Returns:
            False if nothing changed

        """
        group = self._require(name)
        changed = False

        if group.is_application != is_application:
            self._set_attribute(name, "is_application", is_application)
            self.history.record(
                GroupAttributeEdit(self, name, "is_application", not is_application, is_application)
            )
            changed = True

        if is_application:
            changed = self._add_application_fields(name) or changed

        self.history.end_auto_sequence()
        return changed

    def _add_application_fields(self, name: str) -> bool:
        group = self._groups[name]
        missing = [
            data for data in DEFAULT_APPLICATION_FIELDS if not group.fields.has_field(data["field_name"])
        ]
        if not missing:
            return False

        new_fields = group.fields.copy()
        for data in missing:
            new_fields.add_field(FieldInformation.from_mapping(name, data))
        self._record_fields(name, new_fields, f"Add application fields to '{name}'")
        logger.debug(
            "[GroupRegistry] Added %d application fields to %s",
            len(missing),
            name,
            extra={"dev_only": True},
        )
        return True

    def set_fields(self, name: str, fields: FieldSet) -> bool:
        """Replace a group's field set with a copy of the given one."""
        group = self._require(name)
        if group.fields == fields.copy(name):
            return False

        self._record_fields(name, fields.copy(name))
        self.history.end_auto_sequence()
        return True

    def add_field(self, name: str, field_info: FieldInformation, index: int | None = None) -> FieldInformation:
        """Add a data field to a group.

        Raises:
            NotFoundError: If the group does not exist
            EmptyNameError: If the field name is blank
            DuplicateNameError: If the group already has a field with this name

        """
        group = self._require(name)
        new_fields = group.fields.copy()
        stored = new_fields.add_field(field_info, index)

        self._record_fields(name, new_fields, f"Add field '{stored.field_name}' to '{name}'")
        self.history.end_auto_sequence()
        return self._groups[name].fields.get_field(stored.field_name)  # type: ignore[return-value]

    def remove_field(self, name: str, field_name: str) -> None:
        """Remove a data field from a group.

        Raises:
            NotFoundError: If the group or the field does not exist

        """
        group = self._require(name)
        new_fields = group.fields.copy()
        new_fields.remove_field(field_name)

        self._record_fields(name, new_fields, f"Remove field '{field_name}' from '{name}'")
        self.history.end_auto_sequence()

    def set_field_value(self, name: str, field_name: str, value: str) -> bool:
        """Change the value of one data field; returns False if unchanged."""
        group = self._require(name)
        field_info = group.fields.get_field(field_name)
        if field_info is None:
            raise NotFoundError(field_name, kind="Field")
        if field_info.value == value:
            return False

        new_fields = group.fields.copy()
        new_fields.set_value(field_name, value)
        self._record_fields(name, new_fields, f"Change '{field_name}' of '{name}'")
        self.history.end_auto_sequence()
        return True

    def clear_field_values(self, name: str) -> bool:
        """Blank every data field value of a group; returns False if all were blank."""
        group = self._require(name)
        if all(not f.value for f in group.fields):
            return False

        new_fields = group.fields.copy()
        new_fields.clear_values()
        self._record_fields(name, new_fields, f"Clear field values of '{name}'")
        self.history.end_auto_sequence()
        return True

    def clear_deleted(self) -> None:
        """Forget the deleted-group names (after a successful commit)."""
        if self._deleted:
            self._deleted.clear()
            self.deleted_groups_changed.emit()

    def _change_attribute(self, name: str, attribute: str, value: Any) -> bool:
        group = self._require(name)
        old_value = getattr(group, attribute)
        if old_value == value:
            return False

        self._set_attribute(name, attribute, value)
        self.history.record(GroupAttributeEdit(self, name, attribute, old_value, value))
        self.history.end_auto_sequence()
        return True

    def _record_fields(self, name: str, new_fields: FieldSet, description: str = "") -> None:
        old_fields = self._groups[name].fields.copy()
        self._set_fields(name, new_fields)
        self.history.record(FieldSetEdit(self, name, old_fields, new_fields, description))

    def _mark_deleted(self, name: str) -> None:
        self._append_deleted(name)
        self.history.record(DeletedMarkerEdit(self, name))

    # =====================================
    # Primitives (no history; used by the edits)
    # =====================================

    def _insert(self, group: GroupInformation, index: int) -> None:
        if group.name in self._groups:
            raise DuplicateNameError(group.name)

        items = list(self._groups.items())
        items.insert(index, (group.name, group))
        self._groups = dict(items)
        self.group_added.emit(group.name)

    def _detach(self, name: str) -> tuple[GroupInformation, int]:
        index = self.index_of(name)
        group = self._groups.pop(name)
        self.group_removed.emit(name)
        return group, index

    def _rename(self, old_name: str, new_name: str) -> None:
        group = self._require(old_name)
        group.rename(new_name)
        self._groups = {
            (new_name if key == old_name else key): value for key, value in self._groups.items()
        }
        self.group_renamed.emit(old_name, new_name)

    def _set_attribute(self, name: str, attribute: str, value: Any) -> None:
        if attribute not in _EDITABLE_ATTRIBUTES:
            raise AttributeError(f"Group attribute '{attribute}' cannot be edited")
        setattr(self._require(name), attribute, value)
        self.group_changed.emit(name)

    def _set_fields(self, name: str, fields: FieldSet) -> None:
        group = self._require(name)
        group.fields = fields.copy(name)
        self.group_changed.emit(name)

    def _append_deleted(self, name: str) -> None:
        self._deleted.append(name)
        self.deleted_groups_changed.emit()

    def _withdraw_deleted(self, name: str) -> None:
        # Remove the most recent marker for the name
        for index in range(len(self._deleted) - 1, -1, -1):
            if self._deleted[index] == name:
                del self._deleted[index]
                self.deleted_groups_changed.emit()
                return
