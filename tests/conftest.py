"""Shared fixtures: headless Qt application, fake renderer, in-memory streak store."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest

from PySide6.QtCore import QEventLoop, QTimer
from PySide6.QtWidgets import QApplication


class FakeRenderer:
    """Records every call. With `fail=True` each call raises after being recorded."""

    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def create_plot(self, surface, style):
        self._record("create", surface, style)

    def replace_plot(self, surface, style):
        self._record("replace", surface, style)

    def purge(self):
        self._record("purge", None, None)

    def _record(self, kind, surface, style):
        self.calls.append((kind, surface, style))
        if self.fail:
            raise RuntimeError("backend unavailable")

    @property
    def kinds(self):
        return [kind for kind, _, _ in self.calls]


class MemoryStreakStore:
    def __init__(self, initial=0):
        self.value = initial
        self.saved = []

    def load(self):
        return self.value

    def save(self, streak):
        self.value = streak
        self.saved.append(streak)


def wait_ms(ms):
    """Spin the Qt event loop for `ms` milliseconds so pending timers can fire."""
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def failing_renderer():
    return FakeRenderer(fail=True)


@pytest.fixture
def streak_store():
    return MemoryStreakStore()


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def wait(qapp):
    return wait_ms
