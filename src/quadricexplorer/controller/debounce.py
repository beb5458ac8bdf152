"""
Debouncing
Coalesces bursts of requests (e.g. dragging a slider) into one call.
"""
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class Debouncer(QObject):
    """
    Single-shot QTimer wrapper.

    Each `trigger()` restarts the delay, so only the last request in a burst
    runs the callback once the input has settled.
    """

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[[], None],
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(callback)

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def trigger(self) -> None:
        # start() on an active timer restarts it
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
