"""Module: field_table_editor.py

Author: Michael Economou
Date: 2026-10-02

Port to the data field table editor, a separate window that edits the same
fields. Its unsaved changes are discarded when groups are stored, and it is
reloaded after a successful commit.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FieldTableEditorPort(Protocol):
    """Protocol for the data field table editor."""

    def has_unsaved_changes(self) -> bool:
        ...

    def reload(self) -> None:
        """Reload the fields from the store."""
        ...
