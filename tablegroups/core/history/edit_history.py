"""Module: edit_history.py

Author: Michael Economou
Date: 2026-10-02

Edit history with compound undo/redo sequences.

Edits are recorded into an open sequence. A sequence is either opened
manually (begin_manual_sequence / compound) to batch the registry and tree
halves of one user action, or automatically by the first edit recorded while
no sequence is open. Every single mutating call closes an automatic sequence
when it is done; a manual sequence stays open until its owner ends it.

Features:
- Compound sequences undone and redone as one unit
- Nested compound blocks coalesced into the outermost one
- Recording suppressed while undoing/redoing and while suspended
- Bounded undo depth (UNDO_REDO_SETTINGS["MAX_UNDO_STEPS"])
- Observable signals for UI state updates
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, cast

from tablegroups.config import UNDO_REDO_SETTINGS
from tablegroups.core.history.edits import GroupEdit
from tablegroups.utils.events import Observable, Signal
from tablegroups.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


@dataclass
class EditSequence:
    """Ordered list of atomic edits undone/redone as one unit."""

    label: str
    auto: bool = True
    edits: list[GroupEdit] = field(default_factory=list)

    def apply(self) -> None:
        for edit in self.edits:
            edit.apply()

    def revert(self) -> None:
        for edit in reversed(self.edits):
            edit.revert()

    def __len__(self) -> int:
        return len(self.edits)


class EditHistory(Observable):
    """Undo/redo stacks of compound edit sequences."""

    sequence_closed = Signal(str)  # label
    undone = Signal(str)  # label
    redone = Signal(str)  # label
    history_changed = Signal()

    def __init__(self, max_history: int | None = None):
        """Initialize the edit history.

        Args:
            max_history: Maximum number of sequences kept on the undo stack

        """
        config_max_history: Any = UNDO_REDO_SETTINGS["MAX_UNDO_STEPS"]
        self.max_history = (
            int(max_history) if max_history is not None else int(cast("int", config_max_history))
        )
        self.auto_label = str(UNDO_REDO_SETTINGS["AUTO_SEQUENCE_LABEL"])

        self._undo_stack: list[EditSequence] = []
        self._redo_stack: list[EditSequence] = []
        self._open: EditSequence | None = None
        self._manual_depth = 0
        self._suspend_depth = 0
        self._applying = False

        logger.debug(
            "[EditHistory] Initialized with max_history=%d",
            self.max_history,
            extra={"dev_only": True},
        )

    # =====================================
    # Recording
    # =====================================

    @property
    def is_recording(self) -> bool:
        """False while suspended or while a sequence is being undone/redone."""
        return self._suspend_depth == 0 and not self._applying

    @property
    def has_open_sequence(self) -> bool:
        return self._open is not None

    @property
    def is_manual_sequence_open(self) -> bool:
        return self._open is not None and not self._open.auto

    def record(self, edit: GroupEdit) -> bool:
        """Record an edit that has already been applied.

        Opens an automatic sequence when none is open.

        Returns:
            True if the edit was recorded, False if recording is off

        """
        if not self.is_recording:
            return False

        if self._open is None:
            self._open = EditSequence(label=edit.get_description() or self.auto_label, auto=True)

        self._open.edits.append(edit)
        logger.debug("[EditHistory] Recorded: %s", edit.get_description(), extra={"dev_only": True})
        return True

    def begin_manual_sequence(self, label: str | None = None) -> None:
        """Open a manual sequence; nested calls join the outermost one.

        An automatic sequence that is still open is closed first.
        """
        if self._manual_depth == 0:
            if self._open is not None:
                self.end_sequence()
            self._open = EditSequence(label=label or self.auto_label, auto=False)
        self._manual_depth += 1

    def end_manual_sequence(self) -> None:
        """Close the manual sequence once the outermost owner ends it."""
        if self._manual_depth == 0:
            return

        self._manual_depth -= 1
        if self._manual_depth == 0 and self._open is not None:
            self._open.auto = True
            self.end_sequence()

    def end_auto_sequence(self) -> None:
        """Close the open sequence only if it was opened automatically."""
        if self._open is not None and self._open.auto:
            self.end_sequence()

    def end_sequence(self) -> None:
        """Close the open sequence and push it on the undo stack.

        No-op when no sequence is open; an empty sequence is discarded.
        """
        sequence = self._open
        if sequence is None:
            return

        self._open = None
        self._manual_depth = 0
        if not sequence.edits:
            return

        self._undo_stack.append(sequence)
        # A new sequence invalidates redo
        self._redo_stack.clear()
        if len(self._undo_stack) > self.max_history:
            self._undo_stack.pop(0)

        logger.debug(
            "[EditHistory] Sequence closed: %s (%d edits)",
            sequence.label,
            len(sequence),
            extra={"dev_only": True},
        )
        self.sequence_closed.emit(sequence.label)
        self.history_changed.emit()

    @contextmanager
    def compound(self, label: str) -> Iterator[None]:
        """Group every edit recorded inside the block into one sequence."""
        self.begin_manual_sequence(label)
        try:
            yield
        finally:
            self.end_manual_sequence()

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Apply changes inside the block without recording them."""
        self._suspend_depth += 1
        try:
            yield
        finally:
            self._suspend_depth -= 1

    @contextmanager
    def _applying_sequence(self) -> Iterator[None]:
        self._applying = True
        try:
            yield
        finally:
            self._applying = False

    # =====================================
    # Undo / redo
    # =====================================

    def undo(self) -> bool:
        """Revert the most recent sequence.

        Returns:
            True if a sequence was undone, False if there was nothing to undo

        """
        self.end_sequence()

        if not self._undo_stack:
            logger.debug("[EditHistory] No sequences to undo", extra={"dev_only": True})
            return False

        sequence = self._undo_stack.pop()
        with self._applying_sequence():
            sequence.revert()
        self._redo_stack.append(sequence)

        logger.info("[EditHistory] Undone: %s", sequence.label)
        self.undone.emit(sequence.label)
        self.history_changed.emit()
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone sequence.

        Returns:
            True if a sequence was redone, False if there was nothing to redo

        """
        self.end_sequence()

        if not self._redo_stack:
            logger.debug("[EditHistory] No sequences to redo", extra={"dev_only": True})
            return False

        sequence = self._redo_stack.pop()
        with self._applying_sequence():
            sequence.apply()
        self._undo_stack.append(sequence)

        logger.info("[EditHistory] Redone: %s", sequence.label)
        self.redone.emit(sequence.label)
        self.history_changed.emit()
        return True

    def can_undo(self) -> bool:
        return bool(self._undo_stack) or bool(self._open and self._open.edits)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def get_undo_description(self) -> str | None:
        if self._open is not None and self._open.edits:
            return self._open.label
        return self._undo_stack[-1].label if self._undo_stack else None

    def get_redo_description(self) -> str | None:
        return self._redo_stack[-1].label if self._redo_stack else None

    def undo_depth(self) -> int:
        return len(self._undo_stack)

    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def clear(self) -> None:
        """Discard every sequence, including one still open."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._open = None
        self._manual_depth = 0

        logger.info("[EditHistory] History cleared")
        self.history_changed.emit()
