"""Single-slot cancelable timer

Scheduling while a fire is pending cancels it and re-arms the one timer,
so the callback runs once per quiet period and never overlaps itself.
"""

from typing import Callable, Optional

from loguru import logger
from PySide6.QtCore import QObject, Qt, QTimer


class DebounceTimer(QObject):
    """QTimer wrapper that collapses bursts of schedule() calls

    Usage:
        timer = DebounceTimer(500, reload_menu)
        timer.schedule()  # again within 500 ms -> still one reload_menu()
    """

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[[], None],
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._callback = callback
        self._fire_count = 0

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    @property
    def fire_count(self) -> int:
        return self._fire_count

    def schedule(self) -> None:
        """(Re)arm the timer, replacing any pending fire"""
        if self._timer.isActive():
            self._timer.stop()
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()

    def _on_timeout(self) -> None:
        self._fire_count += 1
        try:
            self._callback()
        except Exception:
            # Qt swallows slot exceptions; record them instead
            logger.exception("Debounced callback failed")
