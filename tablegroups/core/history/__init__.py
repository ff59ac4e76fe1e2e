"""Undo/redo history for the group manager.

- edits: atomic, invertible edits of the registry and the membership tree
- edit_history: compound sequences of edits with undo/redo stacks
"""

from tablegroups.core.history.edit_history import EditHistory, EditSequence
from tablegroups.core.history.edits import GroupEdit

__all__ = ["EditHistory", "EditSequence", "GroupEdit"]
