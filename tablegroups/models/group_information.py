"""Module: group_information.py

Author: Michael Economou
Date: 2026-10-02

Group model: a named collection of catalog items with a description, an
application flag and an ordered set of data fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tablegroups.models.field_information import FieldSet


@dataclass
class GroupInformation:
    """One group.

    The group owns its FieldSet exclusively: the set passed in is copied, and
    the owner name of the copy always equals the group name.
    """

    name: str
    description: str = ""
    is_application: bool = False
    fields: FieldSet = field(default_factory=FieldSet)

    def __post_init__(self) -> None:
        self.fields = self.fields.copy(self.name)

    def rename(self, new_name: str) -> None:
        """Change the group name and the owner of every field."""
        self.name = new_name
        self.fields.retarget(new_name)

    def copy(self, name: str | None = None) -> GroupInformation:
        """Return a deep copy, optionally under another name."""
        new_name = self.name if name is None else name
        return GroupInformation(
            name=new_name,
            description=self.description,
            is_application=self.is_application,
            fields=self.fields,
        )
