import os
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Allow running the suite from a checkout without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from contactsync.domain.models.core import Record  # noqa: E402
from contactsync.domain.repositories import Page  # noqa: E402


class DeferredDispatcher:
    """Dispatcher that parks every job until the test decides its fate.

    Jobs can be completed, failed or delivered out of order, which is how
    stale results are produced deterministically.
    """

    def __init__(self) -> None:
        self.pending: List["PendingFetch"] = []

    def dispatch(self, job, on_success, on_failure) -> None:
        self.pending.append(PendingFetch(job, on_success, on_failure))

    def __len__(self) -> int:
        return len(self.pending)

    def __bool__(self) -> bool:
        # An empty queue is still a dispatcher; without this, ``__len__`` makes
        # it falsy and ``dispatcher or Default()`` silently swaps it out.
        return True

    def take(self, index: int = 0) -> "PendingFetch":
        return self.pending.pop(index)

    def complete(self, index: int = 0) -> None:
        self.take(index).complete()

    def fail(self, error: Exception, index: int = 0) -> None:
        self.take(index).fail(error)

    def drain(self) -> None:
        while self.pending:
            self.complete()


class PendingFetch:
    def __init__(self, job, on_success, on_failure) -> None:
        self.job = job
        self.on_success = on_success
        self.on_failure = on_failure

    def complete(self) -> None:
        try:
            page = self.job()
        except Exception as exc:
            self.on_failure(exc)
            return
        self.on_success(page)

    def deliver(self, page: Page) -> None:
        self.on_success(page)

    def fail(self, error: Exception) -> None:
        self.on_failure(error)


class ScriptedFetcher:
    """Fetcher that replays a fixed list of pages and records every call."""

    def __init__(self, pages: Optional[List[Any]] = None) -> None:
        self.pages = list(pages or [])
        self.calls: List[tuple] = []

    def fetch(self, signature, cursor, page_size):
        self.calls.append((signature, cursor, page_size))
        if not self.pages:
            return Page(records=(), next_cursor=None)
        item = self.pages.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def make_page(*ids: Any, next_cursor: Any = None) -> Page:
    return Page(records=tuple(Record(id=str(i), fields={"name": f"Contact {i}"}) for i in ids), next_cursor=next_cursor)


def ids_of(records) -> List[str]:
    return [record.id for record in records]


@pytest.fixture
def deferred() -> DeferredDispatcher:
    return DeferredDispatcher()


@pytest.fixture
def contact_factory() -> Callable[..., dict]:
    counter = {"n": 0}

    def _make(name: Optional[str] = None, **fields: Any) -> dict:
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "id": fields.pop("id", f"c{n:03d}"),
            "name": name or f"Contact {n:03d}",
            "phone_number": fields.pop("phone_number", f"+1555{n:07d}"),
            "created_at": fields.pop("created_at", f"2024-01-{(n % 28) + 1:02d}T10:00:00"),
            "is_auto_created": fields.pop("is_auto_created", False),
        }
        payload.update(fields)
        return payload

    return _make


@pytest.fixture(scope="session")
def qapp():
    pytest.importorskip("PySide6.QtWidgets", reason="Qt widgets not available", exc_type=ImportError)
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
