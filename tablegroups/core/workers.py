"""Module: workers.py

Author: Michael Economou
Date: 2026-10-02

Background workers for loading and storing groups.

This module provides:
- WorkerResult: success flag, data and error message of one run
- SnapshotLoadWorker: loads the stored groups on a QThread
- CommitWorker: stores a change-set on a QThread
- QtCommitRunner / SynchronousCommitRunner: commit strategies used by the session

Workers never let an exception escape run(); a store failure is logged and
reported as a failed WorkerResult through finished_work, which Qt delivers
on the thread that owns the worker (the GUI thread).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from PyQt5.QtCore import QMutex, QMutexLocker, QThread, pyqtSignal

from tablegroups.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from tablegroups.app.ports.group_store import GroupStorePort
    from tablegroups.core.commit_diff import ChangeSet

logger = get_cached_logger(__name__)

CommitCallback = Callable[[bool], None]


class WorkerResult:
    """Container for worker execution results."""

    def __init__(
        self,
        success: bool = True,
        data: Any = None,
        error_message: str | None = None,
    ) -> None:
        """Initialize worker result.

        Args:
            success: Whether the work completed successfully.
            data: Result data (type varies by worker).
            error_message: Error message if success is False.

        """
        self.success = success
        self.data = data
        self.error_message = error_message

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return f"WorkerResult(success=True, data={type(self.data).__name__})"
        return f"WorkerResult(success=False, error={self.error_message!r})"


class CancellableMixin:
    """Thread-safe cancellation flag for workers."""

    def __init__(self) -> None:
        self._cancel_mutex = QMutex()
        self._cancelled = False

    def request_cancel(self) -> None:
        with QMutexLocker(self._cancel_mutex):
            self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        with QMutexLocker(self._cancel_mutex):
            return self._cancelled


class SnapshotLoadWorker(QThread, CancellableMixin):
    """Loads the stored groups without blocking the GUI thread."""

    finished_work = pyqtSignal(object)  # WorkerResult with StoredGroups data

    def __init__(self, store: GroupStorePort, parent: Any = None):
        QThread.__init__(self, parent)
        CancellableMixin.__init__(self)
        self.store = store

    def run(self) -> None:
        try:
            stored = self.store.load_groups()
        except Exception as e:
            logger.exception("[SnapshotLoadWorker] Loading groups failed")
            self.finished_work.emit(WorkerResult(success=False, error_message=str(e)))
            return

        if self.is_cancelled:
            logger.info("[SnapshotLoadWorker] Load cancelled")
            self.finished_work.emit(WorkerResult(success=False, error_message="Cancelled"))
            return

        logger.debug(
            "[SnapshotLoadWorker] Loaded %d groups",
            len(stored.groups),
            extra={"dev_only": True},
        )
        self.finished_work.emit(WorkerResult(success=True, data=stored))


class CommitWorker(QThread):
    """Stores one change-set."""

    finished_work = pyqtSignal(object)  # WorkerResult

    def __init__(self, store: GroupStorePort, change_set: ChangeSet, parent: Any = None):
        super().__init__(parent)
        self.store = store
        self.change_set = change_set

    def run(self) -> None:
        try:
            success = bool(self.store.commit_groups(self.change_set))
        except Exception as e:
            logger.exception("[CommitWorker] Storing groups failed")
            self.finished_work.emit(WorkerResult(success=False, error_message=str(e)))
            return

        if success:
            logger.info(
                "[CommitWorker] Stored %d field updates, %d deletions",
                len(self.change_set.field_updates),
                len(self.change_set.deletions),
            )
            self.finished_work.emit(WorkerResult(success=True, data=self.change_set))
        else:
            logger.warning("[CommitWorker] Store rejected the group updates")
            self.finished_work.emit(
                WorkerResult(success=False, error_message="Store rejected the group updates")
            )


class QtCommitRunner:
    """Runs commits on a CommitWorker thread."""

    def __init__(self, store: GroupStorePort):
        self.store = store
        self.worker: CommitWorker | None = None
        self.last_result: WorkerResult | None = None

    def run(self, change_set: ChangeSet, callback: CommitCallback) -> None:
        """Start a commit; callback(success) runs when the worker is done."""
        worker = CommitWorker(self.store, change_set)

        def _on_finished(result: WorkerResult) -> None:
            self.last_result = result
            callback(result.success)

        worker.finished_work.connect(_on_finished)
        # Held until the next commit so the thread object outlives run()
        self.worker = worker
        worker.start()

    def wait(self, msecs: int = 5000) -> bool:
        """Block until the running commit thread stops (shutdown)."""
        if self.worker is None:
            return True
        return self.worker.wait(msecs)


class SynchronousCommitRunner:
    """Runs commits on the calling thread (scripts and tests)."""

    def __init__(self, store: GroupStorePort):
        self.store = store
        self.last_result: WorkerResult | None = None

    def run(self, change_set: ChangeSet, callback: CommitCallback) -> None:
        try:
            success = bool(self.store.commit_groups(change_set))
            self.last_result = WorkerResult(success=success, data=change_set)
        except Exception as e:
            logger.exception("[SynchronousCommitRunner] Storing groups failed")
            self.last_result = WorkerResult(success=False, error_message=str(e))
        callback(self.last_result.success)
