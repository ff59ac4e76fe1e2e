"""Module: commit_diff.py

Author: Michael Economou
Date: 2026-10-02

Change detection against the committed snapshot.

compute_change_set() compares the live registry and membership tree with the
last committed snapshot and returns the change-set the group store needs:
the complete group definition rows, the field sets of new and changed groups,
and the names deleted since the last commit. The comparison is a full pass,
recomputed on every call.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tablegroups.models.field_information import FieldSet
from tablegroups.models.group_information import GroupInformation
from tablegroups.models.item_path import GroupRow
from tablegroups.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from tablegroups.core.group_registry import GroupRegistry
    from tablegroups.core.membership_tree import MembershipTree

logger = get_cached_logger(__name__)


@dataclass(frozen=True)
class CommittedSnapshot:
    """Last state known to be stored. Never changed in place."""

    rows: tuple[GroupRow, ...] = ()
    groups: tuple[GroupInformation, ...] = ()

    @classmethod
    def build(
        cls, rows: Iterable[GroupRow], groups: Iterable[GroupInformation]
    ) -> CommittedSnapshot:
        """Create a snapshot from deep copies of the given rows and groups."""
        return cls(
            rows=tuple(GroupRow(*row) for row in rows),
            groups=tuple(group.copy() for group in groups),
        )

    @classmethod
    def capture(cls, registry: GroupRegistry, tree: MembershipTree) -> CommittedSnapshot:
        """Snapshot the live state."""
        return cls.build(tree.definitions_from_tree(), registry.lookup_all())

    def lookup(self, name: str) -> GroupInformation | None:
        for group in self.groups:
            if group.name == name:
                return group
        return None


@dataclass
class ChangeSet:
    """Everything the store needs to bring the stored groups up to date.

    Attributes:
        changed: True if the live state differs from the committed snapshot
        group_rows: Complete group definition rows of the live tree
        field_updates: Field sets of new or changed groups (non-empty sets
            only) keyed by group name, in registry order
        deletions: Group names deleted or renamed away from since the last commit
        groups: Every live group (description and application flag included)
    """

    changed: bool = False
    group_rows: list[GroupRow] = field(default_factory=list)
    field_updates: dict[str, FieldSet] = field(default_factory=dict)
    deletions: list[str] = field(default_factory=list)
    groups: list[GroupInformation] = field(default_factory=list)


def rows_differ(current: Iterable[GroupRow], committed: Iterable[GroupRow]) -> bool:
    """Compare two row collections as unordered multisets of exact rows."""
    return Counter(tuple(row) for row in current) != Counter(tuple(row) for row in committed)


def group_differs(group: GroupInformation, committed: GroupInformation | None) -> bool:
    """Check one live group against its committed counterpart.

    A group differs when it is new, or when its description, application
    flag or field set differs.
    """
    if committed is None:
        return True
    if group.description != committed.description:
        return True
    if group.is_application != committed.is_application:
        return True
    return group.fields.differs_from(committed.fields)


def compute_change_set(
    registry: GroupRegistry,
    tree: MembershipTree,
    committed: CommittedSnapshot,
    deleted_groups: Iterable[str] | None = None,
) -> ChangeSet:
    """Compare the live state with the committed snapshot.

    Only the rows and the live groups decide whether anything changed. A
    committed group that was deleted still has rows in the snapshot, so its
    removal shows up as a row difference. The deleted list never marks a
    change by itself, but a live group whose name is in it (deleted and
    re-created, or renamed back) has its fields resent, since the store
    deletes the fields of those names before adding the updates.

    Args:
        registry: Live groups
        tree: Live membership tree
        committed: Last committed snapshot
        deleted_groups: Tracked deleted names; the registry's list when None

    Returns:
        The change-set; changed is False when nothing needs storing

    """
    deleted = list(registry.deleted_groups if deleted_groups is None else deleted_groups)
    rows = tree.definitions_from_tree()
    groups = registry.lookup_all()

    changed = rows_differ(rows, committed.rows)

    field_updates: dict[str, FieldSet] = {}
    for group in groups:
        if group_differs(group, committed.lookup(group.name)):
            changed = True
        elif group.name not in deleted:
            continue

        if group.fields:
            field_updates[group.name] = group.fields.copy()

    change_set = ChangeSet(
        changed=changed,
        group_rows=rows,
        field_updates=field_updates,
        deletions=deleted,
        groups=[group.copy() for group in groups],
    )

    logger.debug(
        "[compute_change_set] changed=%s updates=%d deletions=%d",
        changed,
        len(field_updates),
        len(deleted),
        extra={"dev_only": True},
    )
    return change_set
