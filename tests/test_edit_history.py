"""Module: test_edit_history.py

Author: Michael Economou
Date: 2026-10-02

Tests for the edit history: sequence handling, undo/redo, suspension and limits.
"""

from unittest.mock import MagicMock

from tablegroups.core.history.edit_history import EditHistory
from tablegroups.core.history.edits import GroupEdit


class RecordingEdit(GroupEdit):
    """Edit that appends apply/revert calls to a shared log."""

    def __init__(self, log, name):
        super().__init__()
        self.log = log
        self.name = name

    def apply(self):
        self.log.append(f"apply {self.name}")

    def revert(self):
        self.log.append(f"revert {self.name}")

    def get_description(self):
        return f"edit {self.name}"

    def get_command_type(self):
        return "recording"


class TestEditHistorySequences:
    """Test how edits are grouped into sequences."""

    def setup_method(self):
        """Set up test fixtures."""
        self.log = []
        self.history = EditHistory()

    def edit(self, name):
        return RecordingEdit(self.log, name)

    def test_record_opens_auto_sequence(self):
        self.history.record(self.edit("a"))

        assert self.history.has_open_sequence
        assert not self.history.is_manual_sequence_open
        assert self.history.can_undo()

    def test_end_auto_sequence_closes_auto_only(self):
        self.history.begin_manual_sequence("manual")
        self.history.record(self.edit("a"))
        self.history.end_auto_sequence()

        assert self.history.has_open_sequence
        assert self.history.undo_depth() == 0

        self.history.end_manual_sequence()
        assert self.history.undo_depth() == 1

    def test_end_sequence_when_idle_is_noop(self):
        self.history.end_sequence()
        assert self.history.undo_depth() == 0

    def test_empty_sequence_is_discarded(self):
        with self.history.compound("nothing"):
            pass
        assert self.history.undo_depth() == 0

    def test_compound_is_one_unit(self):
        with self.history.compound("both"):
            self.history.record(self.edit("a"))
            self.history.end_auto_sequence()
            self.history.record(self.edit("b"))

        assert self.history.undo_depth() == 1
        assert self.history.get_undo_description() == "both"

    def test_nested_compound_coalesces(self):
        with self.history.compound("outer"):
            self.history.record(self.edit("a"))
            with self.history.compound("inner"):
                self.history.record(self.edit("b"))
            self.history.record(self.edit("c"))

        assert self.history.undo_depth() == 1
        assert self.history.get_undo_description() == "outer"

    def test_manual_sequence_closes_open_auto_sequence(self):
        self.history.record(self.edit("a"))
        with self.history.compound("manual"):
            self.history.record(self.edit("b"))

        assert self.history.undo_depth() == 2

    def test_auto_sequence_label_is_edit_description(self):
        self.history.record(self.edit("a"))
        self.history.end_sequence()
        assert self.history.get_undo_description() == "edit a"

    def test_sequence_closed_signal(self):
        labels = []
        self.history.sequence_closed.connect(labels.append)

        with self.history.compound("label"):
            self.history.record(self.edit("a"))

        assert labels == ["label"]


class TestEditHistoryUndoRedo:
    """Test undo/redo ordering and stack behavior."""

    def setup_method(self):
        """Set up test fixtures."""
        self.log = []
        self.history = EditHistory()

    def record_sequence(self, label, *names):
        with self.history.compound(label):
            for name in names:
                self.history.record(RecordingEdit(self.log, name))

    def test_undo_reverts_in_reverse_order(self):
        self.record_sequence("s", "a", "b", "c")

        assert self.history.undo() is True
        assert self.log == ["revert c", "revert b", "revert a"]

    def test_redo_applies_in_forward_order(self):
        self.record_sequence("s", "a", "b")
        self.history.undo()
        self.log.clear()

        assert self.history.redo() is True
        assert self.log == ["apply a", "apply b"]

    def test_undo_redo_empty_return_false(self):
        assert self.history.undo() is False
        assert self.history.redo() is False

    def test_undo_closes_open_sequence_first(self):
        self.history.record(RecordingEdit(self.log, "a"))
        assert self.history.undo() is True
        assert self.log == ["revert a"]

    def test_new_sequence_clears_redo(self):
        self.record_sequence("s1", "a")
        self.history.undo()
        assert self.history.can_redo()

        self.record_sequence("s2", "b")
        assert not self.history.can_redo()

    def test_recording_suppressed_while_applying(self):
        history = self.history
        nested = []

        class ReentrantEdit(RecordingEdit):
            def revert(self):
                super().revert()
                nested.append(history.record(RecordingEdit(self.log, "nested")))

        with history.compound("s"):
            history.record(ReentrantEdit(self.log, "a"))
        history.undo()

        assert nested == [False]
        assert history.undo_depth() == 0
        assert history.redo_depth() == 1

    def test_descriptions(self):
        self.record_sequence("first", "a")
        self.record_sequence("second", "b")
        self.history.undo()

        assert self.history.get_undo_description() == "first"
        assert self.history.get_redo_description() == "second"

    def test_signals(self):
        undone = MagicMock()
        redone = MagicMock()
        self.history.undone.connect(undone)
        self.history.redone.connect(redone)

        self.record_sequence("s", "a")
        self.history.undo()
        self.history.redo()

        undone.assert_called_once_with("s")
        redone.assert_called_once_with("s")

    def test_max_history(self):
        history = EditHistory(max_history=2)
        for name in ("a", "b", "c"):
            with history.compound(name):
                history.record(RecordingEdit(self.log, name))

        assert history.undo_depth() == 2
        history.undo()
        history.undo()
        assert history.undo() is False
        assert self.log == ["revert c", "revert b"]

    def test_default_max_history_from_config(self):
        from tablegroups.config import UNDO_REDO_SETTINGS

        assert EditHistory().max_history == UNDO_REDO_SETTINGS["MAX_UNDO_STEPS"]

    def test_clear(self):
        self.record_sequence("s1", "a")
        self.record_sequence("s2", "b")
        self.history.undo()
        self.history.record(RecordingEdit(self.log, "open"))

        self.history.clear()

        assert not self.history.can_undo()
        assert not self.history.can_redo()
        assert not self.history.has_open_sequence
        assert self.history.undo() is False


class TestEditHistorySuspension:
    """Test suspended recording."""

    def test_suspended_edits_are_not_recorded(self):
        history = EditHistory()
        with history.suspended():
            assert history.is_recording is False
            assert history.record(RecordingEdit([], "a")) is False

        assert history.is_recording is True
        assert not history.can_undo()

    def test_suspension_nests(self):
        history = EditHistory()
        with history.suspended():
            with history.suspended():
                pass
            assert history.is_recording is False
        assert history.is_recording is True
