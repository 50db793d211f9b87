"""Reusable trailing debounce timer."""

import logging
from typing import Any, Callable, Dict, Optional, Tuple
from PyQt6.QtCore import QTimer

logger = logging.getLogger(__name__)

# --- Module-level constants ---
DEFAULT_WAIT_MS = 149


class DebounceTimer:
    """
    Reusable trailing debounce timer.

    Restarts timer on each call. Handler fires only after delay_ms of inactivity,
    with the arguments of the most recent call.

    Usage:
        self._debounce = DebounceTimer(delay_ms=200, handler=self._do_update)

        def on_text_changed(self, text):
            self._debounce.trigger(text)  # Restarts timer

    Instances are callable, so a DebounceTimer can stand in for the method it wraps:
        self.search = DebounceTimer(delay_ms=149, handler=self.apply_search)
        self.search()
    """

    def __init__(self, delay_ms: int, handler: Callable[..., Any]):
        self._delay_ms = delay_ms
        self._handler = handler
        self._timer: Optional[QTimer] = None
        self._pending: Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]] = None

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def is_pending(self) -> bool:
        """True while a trigger is waiting for the quiet period to elapse."""
        return self._timer is not None and self._timer.isActive()

    def trigger(self, *args, **kwargs):
        """Trigger debounce: restarts timer with the latest arguments."""
        if self._timer is not None:
            self._timer.stop()
        else:
            self._timer = QTimer()
            self._timer.setSingleShot(True)
            self._timer.timeout.connect(self._fire)

        self._pending = (args, kwargs)
        self._timer.start(self._delay_ms)

    __call__ = trigger

    def cancel(self):
        """Cancel pending trigger."""
        if self._timer is not None:
            self._timer.stop()
        self._pending = None

    def force(self, *args, **kwargs):
        """Cancel timer and fire handler immediately.

        Explicit arguments win; otherwise the pending call's arguments are used.
        """
        pending = self._pending
        self.cancel()
        if args or kwargs or pending is None:
            return self._handler(*args, **kwargs)
        return self._handler(*pending[0], **pending[1])

    def _fire(self):
        if self._pending is None:
            return
        args, kwargs = self._pending
        self._pending = None
        logger.debug(f"Debounce fired after {self._delay_ms}ms: {getattr(self._handler, '__name__', self._handler)}")
        self._handler(*args, **kwargs)


def debounce(handler: Callable[..., Any], delay_ms: int = DEFAULT_WAIT_MS) -> DebounceTimer:
    """Wrap handler so bursts of calls collapse into one trailing call."""
    return DebounceTimer(delay_ms=delay_ms, handler=handler)
