"""Module: group_store.py

Author: Michael Economou
Date: 2026-10-02

Port to the group store.

The store is called from a worker thread during a commit. It applies the
change-set in one transaction: delete the fields of the deleted and updated
groups, write the field updates, then replace the group definition rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tablegroups.models.group_information import GroupInformation
from tablegroups.models.item_path import GroupRow

if TYPE_CHECKING:
    from tablegroups.core.commit_diff import ChangeSet


@dataclass
class StoredGroups:
    """Groups as loaded from the store."""

    rows: list[GroupRow] = field(default_factory=list)
    groups: list[GroupInformation] = field(default_factory=list)


@runtime_checkable
class GroupStorePort(Protocol):
    """Protocol for loading and storing groups."""

    def load_groups(self) -> StoredGroups:
        """Load the group definition rows and the groups with their fields."""
        ...

    def commit_groups(self, change_set: ChangeSet) -> bool:
        """Store a change-set.

        Returns:
            True if the store accepted every change

        """
        ...
