"""
Module: mocks.py

Author: Michael Economou
Date: 2026-10-02

Test doubles for the group store and the data field table editor.
"""

from tablegroups.app.ports.group_store import StoredGroups
from tablegroups.models.field_information import FieldInformation, FieldSet
from tablegroups.models.group_information import GroupInformation
from tablegroups.models.item_path import GroupRow


def make_fields(owner, *names, values=None):
    """Build a FieldSet with one text field per name."""
    values = values or {}
    return FieldSet(
        owner,
        [
            FieldInformation(owner_name=owner, field_name=name, value=values.get(name, ""))
            for name in names
        ],
    )


class MockGroupStore:
    """In-memory group store recording every change-set it receives."""

    def __init__(self, rows=None, groups=None, *, accept=True, error=None):
        self.rows = [GroupRow(*row) for row in rows or []]
        self.groups = [group.copy() for group in groups or []]
        self.accept = accept
        self.error = error
        self.commits = []

    def load_groups(self):
        return StoredGroups(rows=list(self.rows), groups=[group.copy() for group in self.groups])

    def commit_groups(self, change_set):
        self.commits.append(change_set)
        if self.error is not None:
            raise self.error
        if self.accept:
            self.rows = list(change_set.group_rows)
            self.groups = [group.copy() for group in change_set.groups]
        return self.accept


class MockFieldTableEditor:
    """Field table editor port with a settable unsaved-changes flag."""

    def __init__(self, unsaved=False):
        self.unsaved = unsaved
        self.reload_count = 0

    def has_unsaved_changes(self):
        return self.unsaved

    def reload(self):
        self.reload_count += 1
        self.unsaved = False


def sample_store(**kwargs):
    """Store with G1 (two fields, items T1 and T2) and an empty G2."""
    groups = [
        GroupInformation(
            name="G1",
            description="First group",
            fields=make_fields("G1", "f1", "f2", values={"f1": "a", "f2": "b"}),
        ),
        GroupInformation(name="G2"),
    ]
    rows = [("G1", "T1"), ("G1", "T2"), ("G2", "")]
    return MockGroupStore(rows=rows, groups=groups, **kwargs)
