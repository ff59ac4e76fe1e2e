"""Module: errors.py

Author: Michael Economou
Date: 2026-10-02

Exceptions raised by the group manager engine.

Name errors are validation errors: they are raised before any state is
touched, so a rejected operation never leaves a partial edit behind.
"""

from __future__ import annotations


class GroupManagerError(Exception):
    """Base class for group manager errors."""


class EmptyNameError(GroupManagerError, ValueError):
    """A group or field name is blank after trimming."""

    def __init__(self, kind: str = "Group"):
        super().__init__(f"{kind} name must be entered")
        self.kind = kind


class DuplicateNameError(GroupManagerError, ValueError):
    """A group or field name is already in use."""

    def __init__(self, name: str, kind: str = "Group"):
        super().__init__(f"{kind} name '{name}' is already in use")
        self.name = name
        self.kind = kind


class NotFoundError(GroupManagerError, KeyError):
    """An operation targets a group or field that does not exist."""

    def __init__(self, name: str, kind: str = "Group"):
        super().__init__(f"{kind} '{name}' does not exist")
        self.name = name
        self.kind = kind

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class CommitInProgressError(GroupManagerError, RuntimeError):
    """The groups are being stored; edits must wait for the commit to finish."""

    def __init__(self) -> None:
        super().__init__("Group updates are being stored")
