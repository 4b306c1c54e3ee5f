import pathlib
import sys

import pytest

# Ensure project root is in sys.path
repo_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

try:
    from PySide6.QtWidgets import QApplication
except ImportError:
    QApplication = None


@pytest.fixture(scope="session")
def qapp():
    """
    Ensure QApplication is instantiated only once.
    """
    if QApplication is None:
        yield None
        return

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class ManualTimerHandle:
    """Cancelable handle returned by ManualScheduler."""

    def __init__(self):
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic Scheduler: callbacks only run when the test advances time.
    """

    def __init__(self):
        self.now = 0
        self._seq = 0
        self._pending = []

    def call_later(self, delay_ms, callback):
        handle = ManualTimerHandle()
        self._seq += 1
        self._pending.append((self.now + delay_ms, self._seq, callback, handle))
        return handle

    @property
    def pending_count(self):
        return sum(
            1 for _, _, _, h in self._pending if not h.cancelled and not h.fired
        )

    def advance(self, ms):
        """Moves the clock forward, running due callbacks in order."""
        target = self.now + ms
        while True:
            due = [
                entry
                for entry in self._pending
                if entry[0] <= target and not entry[3].cancelled and not entry[3].fired
            ]
            if not due:
                break
            entry = min(due, key=lambda e: (e[0], e[1]))
            self.now = entry[0]
            entry[3].fired = True
            entry[2]()
        self.now = target
        self._pending = [
            e for e in self._pending if not e[3].cancelled and not e[3].fired
        ]


@pytest.fixture
def scheduler():
    """A manual clock for debounce and deferred-focus timers."""
    return ManualScheduler()


class MockQSettings:
    """
    In-memory mock for QSettings to prevent tests from overwriting real config.
    """

    _storage = {}

    def __init__(self, *args, **kwargs):
        self.organization = args[0] if len(args) > 0 else "MockOrg"
        self.application = args[1] if len(args) > 1 else "MockApp"

    def setValue(self, key, value):
        full_key = f"{self.organization}/{self.application}/{key}"
        self._storage[full_key] = value

    def value(self, key, default=None, type=None):
        full_key = f"{self.organization}/{self.application}/{key}"
        val = self._storage.get(full_key, default)
        if type is not None and val is not None:
            try:
                if type == bool and isinstance(val, str):
                    return val.lower() == "true"
                return type(val)
            except (ValueError, TypeError):
                return default
        return val

    def remove(self, key):
        full_key = f"{self.organization}/{self.application}/{key}"
        if full_key in self._storage:
            del self._storage[full_key]

    def contains(self, key):
        full_key = f"{self.organization}/{self.application}/{key}"
        return full_key in self._storage

    def sync(self):
        pass


@pytest.fixture(autouse=True)
def mock_qsettings_global():
    """
    Patches QSettings so tests never touch the user's real settings.
    Storage is cleared between tests.
    """
    from unittest.mock import patch

    if QApplication is None:
        yield None
        return

    MockQSettings._storage = {}
    with patch("PySide6.QtCore.QSettings", MockQSettings) as mock_class:
        yield mock_class
