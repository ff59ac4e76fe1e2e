"""Module: test_observable.py

Author: Michael Economou
Date: 2026-10-02

Tests for the pure Python signal system.
"""

import logging
from unittest.mock import MagicMock

from tablegroups.utils.events import Observable, Signal


class Counter(Observable):
    value_changed = Signal(int)
    reset = Signal()


class TestSignal:
    """Test Signal connection and emission."""

    def test_emit_calls_callbacks(self):
        counter = Counter()
        callback = MagicMock()
        counter.value_changed.connect(callback)

        counter.value_changed.emit(3)

        callback.assert_called_once_with(3)

    def test_instances_do_not_share_callbacks(self):
        first, second = Counter(), Counter()
        callback = MagicMock()
        first.value_changed.connect(callback)

        second.value_changed.emit(1)

        callback.assert_not_called()

    def test_duplicate_connect_is_ignored(self):
        counter = Counter()
        callback = MagicMock()
        counter.reset.connect(callback)
        counter.reset.connect(callback)

        counter.reset.emit()

        assert callback.call_count == 1
        assert counter.reset.receiver_count() == 1

    def test_disconnect(self):
        counter = Counter()
        a, b = MagicMock(), MagicMock()
        counter.reset.connect(a)
        counter.reset.connect(b)

        counter.reset.disconnect(a)
        counter.reset.emit()
        a.assert_not_called()
        b.assert_called_once_with()

        counter.reset.disconnect()
        assert counter.reset.receiver_count() == 0

    def test_blocked_nests(self):
        counter = Counter()
        callback = MagicMock()
        counter.reset.connect(callback)

        with counter.reset.blocked():
            with counter.reset.blocked():
                counter.reset.emit()
            counter.reset.emit()
            assert counter.reset.is_blocked

        counter.reset.emit()
        assert callback.call_count == 1

    def test_failing_callback_does_not_stop_others(self, caplog):
        counter = Counter()
        after = MagicMock()
        counter.value_changed.connect(MagicMock(side_effect=RuntimeError("boom")))
        counter.value_changed.connect(after)

        with caplog.at_level(logging.ERROR):
            counter.value_changed.emit(1)

        after.assert_called_once_with(1)
        assert "Error in signal callback" in caplog.text

    def test_signals_lists_declared_signals(self):
        counter = Counter()
        assert set(counter.signals()) == {"value_changed", "reset"}
