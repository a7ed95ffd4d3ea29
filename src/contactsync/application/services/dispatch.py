"""Fetch dispatch strategies for :class:`RecordAccumulator`.

A dispatcher runs a fetch job and reports its result through exactly one of
the two callbacks.  The Qt dispatcher lives in
``contactsync.gui.ui.tasks.page_fetch_worker``.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from contactsync.domain.repositories import Page

_logger = logging.getLogger(__name__)

FetchJob = Callable[[], Page]
SuccessCallback = Callable[[Page], None]
FailureCallback = Callable[[Exception], None]


class FetchDispatcher(Protocol):
    def dispatch(
        self,
        job: FetchJob,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None: ...


class ImmediateDispatcher:
    """Run the fetch inline and deliver the result before returning."""

    def dispatch(
        self,
        job: FetchJob,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        try:
            page = job()
        except Exception as exc:
            _logger.debug("Inline fetch raised %s", exc)
            on_failure(exc)
            return
        on_success(page)
