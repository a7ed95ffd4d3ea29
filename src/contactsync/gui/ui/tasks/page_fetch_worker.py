"""Background page fetching on the Qt thread pool."""

from __future__ import annotations

import logging
from typing import Optional, Set

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from contactsync.application.services.dispatch import (
    FailureCallback,
    FetchJob,
    SuccessCallback,
)

_logger = logging.getLogger(__name__)


class PageFetchSignals(QObject):
    succeeded = Signal(object)
    failed = Signal(object)


class PageFetchWorker(QRunnable):
    """Run one fetch job and report through :class:`PageFetchSignals`.

    The signals object is created on the GUI thread, so emissions from the
    pool thread are queued back onto the GUI event loop.
    """

    def __init__(self, job: FetchJob) -> None:
        super().__init__()
        self._job = job
        self.signals = PageFetchSignals()

    def run(self) -> None:
        try:
            page = self._job()
        except Exception as exc:
            _logger.debug("Page fetch worker failed: %s", exc)
            self.signals.failed.emit(exc)
            return
        self.signals.succeeded.emit(page)


class QtFetchDispatcher:
    """``FetchDispatcher`` that runs jobs on a ``QThreadPool``."""

    def __init__(self, pool: Optional[QThreadPool] = None) -> None:
        self._pool = pool or QThreadPool.globalInstance()
        # Keep signal objects alive until their result has been delivered.
        self._active: Set[PageFetchSignals] = set()

    @property
    def active_count(self) -> int:
        return len(self._active)

    def dispatch(
        self,
        job: FetchJob,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        worker = PageFetchWorker(job)
        signals = worker.signals
        self._active.add(signals)

        def _succeeded(page) -> None:
            self._active.discard(signals)
            on_success(page)

        def _failed(error) -> None:
            self._active.discard(signals)
            on_failure(error)

        signals.succeeded.connect(_succeeded)
        signals.failed.connect(_failed)
        self._pool.start(worker)

    def wait_for_done(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)
