"""Module: edits.py

Author: Michael Economou
Date: 2026-10-02

Command pattern implementation for group manager edits.

Every edit is atomic and stores enough state to invert itself. Edits work on
the private primitives of GroupRegistry and MembershipTree, which apply a
change without recording it, so replaying an edit during undo/redo never
records new history.

Features:
- Group edits: add, remove, rename, attribute change, field set change
- Deleted-group markers
- Membership tree edits: subtree insert/remove, item add/remove, rename
- Tree selection edits
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tablegroups.core.group_registry import GroupRegistry
    from tablegroups.core.membership_tree import MembershipTree, NodeKey
    from tablegroups.models.field_information import FieldSet
    from tablegroups.models.group_information import GroupInformation


class GroupEdit(ABC):
    """Abstract base class for all atomic edits."""

    @abstractmethod
    def apply(self) -> None:
        """Apply (or re-apply) the edit."""

    @abstractmethod
    def revert(self) -> None:
        """Invert the edit."""

    @abstractmethod
    def get_description(self) -> str:
        """Human-readable description for the undo/redo menu."""

    @abstractmethod
    def get_command_type(self) -> str:
        """Short type tag of the edit."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_description()!r}>"


# =====================================
# Registry edits
# =====================================


class AddGroupEdit(GroupEdit):
    """A group was added to the registry at a given position."""

    def __init__(self, registry: GroupRegistry, group: GroupInformation, index: int):
        super().__init__()
        self.registry = registry
        self.group = group.copy()
        self.index = index

    def apply(self) -> None:
        self.registry._insert(self.group.copy(), self.index)

    def revert(self) -> None:
        self.registry._detach(self.group.name)

    def get_description(self) -> str:
        return f"Add group '{self.group.name}'"

    def get_command_type(self) -> str:
        return "add_group"


class RemoveGroupEdit(GroupEdit):
    """A group was removed from the registry; the snapshot restores it."""

    def __init__(self, registry: GroupRegistry, group: GroupInformation, index: int):
        super().__init__()
        self.registry = registry
        self.group = group.copy()
        self.index = index

    def apply(self) -> None:
        self.registry._detach(self.group.name)

    def revert(self) -> None:
        self.registry._insert(self.group.copy(), self.index)

    def get_description(self) -> str:
        return f"Delete group '{self.group.name}'"

    def get_command_type(self) -> str:
        return "remove_group"


class RenameGroupEdit(GroupEdit):
    def __init__(self, registry: GroupRegistry, old_name: str, new_name: str):
        super().__init__()
        self.registry = registry
        self.old_name = old_name
        self.new_name = new_name

    def apply(self) -> None:
        self.registry._rename(self.old_name, self.new_name)

    def revert(self) -> None:
        self.registry._rename(self.new_name, self.old_name)

    def get_description(self) -> str:
        return f"Rename group '{self.old_name}' to '{self.new_name}'"

    def get_command_type(self) -> str:
        return "rename_group"


class GroupAttributeEdit(GroupEdit):
    """Change of a scalar group attribute (description, application flag)."""

    def __init__(
        self,
        registry: GroupRegistry,
        group_name: str,
        attribute: str,
        old_value: Any,
        new_value: Any,
    ):
        super().__init__()
        self.registry = registry
        self.group_name = group_name
        self.attribute = attribute
        self.old_value = old_value
        self.new_value = new_value

    def apply(self) -> None:
        self.registry._set_attribute(self.group_name, self.attribute, self.new_value)

    def revert(self) -> None:
        self.registry._set_attribute(self.group_name, self.attribute, self.old_value)

    def get_description(self) -> str:
        return f"Change {self.attribute.replace('_', ' ')} of '{self.group_name}'"

    def get_command_type(self) -> str:
        return "group_attribute"


class FieldSetEdit(GroupEdit):
    """Replacement of a group's whole field set.

    Both field sets are held as private copies and copied again on every
    apply/revert so the registry never shares them.
    """

    def __init__(
        self,
        registry: GroupRegistry,
        group_name: str,
        old_fields: FieldSet,
        new_fields: FieldSet,
        description: str = "",
    ):
        super().__init__()
        self.registry = registry
        self.group_name = group_name
        self.old_fields = old_fields.copy()
        self.new_fields = new_fields.copy()
        self.description = description or f"Change data fields of '{group_name}'"

    def apply(self) -> None:
        self.registry._set_fields(self.group_name, self.new_fields.copy())

    def revert(self) -> None:
        self.registry._set_fields(self.group_name, self.old_fields.copy())

    def get_description(self) -> str:
        return self.description

    def get_command_type(self) -> str:
        return "field_set"


class DeletedMarkerEdit(GroupEdit):
    """A group name was appended to the deleted-groups list."""

    def __init__(self, registry: GroupRegistry, group_name: str):
        super().__init__()
        self.registry = registry
        self.group_name = group_name

    def apply(self) -> None:
        self.registry._append_deleted(self.group_name)

    def revert(self) -> None:
        self.registry._withdraw_deleted(self.group_name)

    def get_description(self) -> str:
        return f"Mark group '{self.group_name}' deleted"

    def get_command_type(self) -> str:
        return "deleted_marker"


# =====================================
# Membership tree edits
# =====================================


class TreeInsertSubtreeEdit(GroupEdit):
    """A group header (with its items) was inserted into the tree."""

    def __init__(self, tree: MembershipTree, group_name: str, index: int, items: list[str]):
        super().__init__()
        self.tree = tree
        self.group_name = group_name
        self.index = index
        self.items = list(items)

    def apply(self) -> None:
        self.tree._insert_header(self.group_name, self.index, self.items)

    def revert(self) -> None:
        self.tree._remove_header(self.group_name)

    def get_description(self) -> str:
        return f"Add group node '{self.group_name}'"

    def get_command_type(self) -> str:
        return "tree_insert"


class TreeRemoveSubtreeEdit(GroupEdit):
    """A group header and every item under it were removed from the tree."""

    def __init__(self, tree: MembershipTree, group_name: str, index: int, items: list[str]):
        super().__init__()
        self.tree = tree
        self.group_name = group_name
        self.index = index
        self.items = list(items)

    def apply(self) -> None:
        self.tree._remove_header(self.group_name)

    def revert(self) -> None:
        self.tree._insert_header(self.group_name, self.index, self.items)

    def get_description(self) -> str:
        return f"Remove group node '{self.group_name}'"

    def get_command_type(self) -> str:
        return "tree_remove"


class TreeAddItemEdit(GroupEdit):
    def __init__(self, tree: MembershipTree, group_name: str, item_path: str, index: int):
        super().__init__()
        self.tree = tree
        self.group_name = group_name
        self.item_path = item_path
        self.index = index

    def apply(self) -> None:
        self.tree._add_item(self.group_name, self.item_path, self.index)

    def revert(self) -> None:
        self.tree._remove_item(self.group_name, self.item_path)

    def get_description(self) -> str:
        return f"Add '{self.item_path}' to '{self.group_name}'"

    def get_command_type(self) -> str:
        return "tree_add_item"


class TreeRemoveItemEdit(GroupEdit):
    def __init__(self, tree: MembershipTree, group_name: str, item_path: str, index: int):
        super().__init__()
        self.tree = tree
        self.group_name = group_name
        self.item_path = item_path
        self.index = index

    def apply(self) -> None:
        self.tree._remove_item(self.group_name, self.item_path)

    def revert(self) -> None:
        self.tree._add_item(self.group_name, self.item_path, self.index)

    def get_description(self) -> str:
        return f"Remove '{self.item_path}' from '{self.group_name}'"

    def get_command_type(self) -> str:
        return "tree_remove_item"


class TreeRenameEdit(GroupEdit):
    def __init__(self, tree: MembershipTree, old_name: str, new_name: str):
        super().__init__()
        self.tree = tree
        self.old_name = old_name
        self.new_name = new_name

    def apply(self) -> None:
        self.tree._rename_header(self.old_name, self.new_name)

    def revert(self) -> None:
        self.tree._rename_header(self.new_name, self.old_name)

    def get_description(self) -> str:
        return f"Rename group node '{self.old_name}' to '{self.new_name}'"

    def get_command_type(self) -> str:
        return "tree_rename"


class SelectionEdit(GroupEdit):
    """Change of the tree node selection."""

    def __init__(
        self,
        tree: MembershipTree,
        old_keys: frozenset[NodeKey],
        new_keys: frozenset[NodeKey],
    ):
        super().__init__()
        self.tree = tree
        self.old_keys = frozenset(old_keys)
        self.new_keys = frozenset(new_keys)

    def apply(self) -> None:
        self.tree._set_selection(self.new_keys)

    def revert(self) -> None:
        self.tree._set_selection(self.old_keys)

    def get_description(self) -> str:
        return "Change selection"

    def get_command_type(self) -> str:
        return "selection"
