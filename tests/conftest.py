# Shared fixtures. Qt runs on the offscreen platform; a fallback 'qtbot'
# fixture is provided when pytest-qt is not installed (its fixture wins if it is).

import contextlib
import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from composer.services.registry import Composer  # noqa: E402

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot():  # type: ignore
        from PyQt6.QtWidgets import QApplication

        app = QApplication.instance() or QApplication(sys.argv[:1])  # noqa: F841
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        yield Bot()
        for w in widgets:
            w.close()


@pytest.fixture
def composer():
    """Fresh registry per test (no shared definitions)."""
    return Composer()


class NotificationCounter:
    def __init__(self):
        self.count = 0

    def __call__(self, _notifier):
        self.count += 1


@pytest.fixture
def counter():
    return NotificationCounter()
