"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides a manually driven scheduler for the sync controller.
"""

import sys
from pathlib import Path

import pytest

_root_dir = Path(__file__).parent.parent
for _p in (_root_dir, _root_dir / "src"):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))


EXAMPLE_SQL = (
    "CREATE TABLE User (id INT PRIMARY KEY, email VARCHAR(255));\n\n"
    "CREATE TABLE Post (id INT PRIMARY KEY, author_id INT, "
    "FOREIGN KEY (author_id) REFERENCES User(id));"
)


class _Handle:
    def __init__(self, when: float, seq: int, callback):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when the test says so."""

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = 0
        self._queue: list[_Handle] = []

    def call_soon(self, callback):
        return self.call_later(0, callback)

    def call_later(self, delay, callback):
        self._seq += 1
        handle = _Handle(self.now + delay, self._seq, callback)
        self._queue.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._queue if not h.cancelled)

    def run_ready(self) -> None:
        while True:
            due = [h for h in self._queue if not h.cancelled and h.when <= self.now]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self._queue.remove(handle)
            handle.callback()
        self._queue = [h for h in self._queue if not h.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        self.run_ready()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def example_sql() -> str:
    return EXAMPLE_SQL
