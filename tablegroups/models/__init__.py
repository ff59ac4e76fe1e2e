"""Data models for the group manager.

This package contains:
- FieldInformation / FieldSet: ordered data fields owned by one group
- GroupInformation: a group's name, description, application flag and fields
- item_path: catalog path normalization, tree levels and group definition rows
"""

from tablegroups.models.field_information import FieldInformation, FieldSet, InputType
from tablegroups.models.group_information import GroupInformation
from tablegroups.models.item_path import GroupRow

__all__ = [
    "FieldInformation",
    "FieldSet",
    "GroupInformation",
    "GroupRow",
    "InputType",
]
