"""Ports to the collaborators outside the engine.

- GroupStorePort: loads and stores groups (persistence)
- FieldTableEditorPort: the separate data field table editor
"""

from tablegroups.app.ports.field_table_editor import FieldTableEditorPort
from tablegroups.app.ports.group_store import GroupStorePort, StoredGroups

__all__ = ["FieldTableEditorPort", "GroupStorePort", "StoredGroups"]
