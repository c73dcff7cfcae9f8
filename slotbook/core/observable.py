# File: slotbook/core/observable.py

import threading
from typing import Any, Callable, List

from slotbook.utils.logger import setup_logger

logger = setup_logger(__name__)

Listener = Callable[[Any], None]


class Observable:
    """Subscriber list that receives a fresh snapshot after every change."""

    def __init__(self):
        self._listeners: List[Listener] = []
        self._listeners_lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that unsubscribes the listener
        """
        with self._listeners_lock:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def snapshot(self) -> Any:
        raise NotImplementedError

    def _notify(self) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        if not listeners:
            return
        state = self.snapshot()
        for listener in listeners:
            try:
                listener(state)
            except Exception as e:
                # Logged, never raised back into the store
                logger.error(f"Listener {listener!r} failed: {e}", exc_info=True)
