"""Publish/subscribe primitives used between the tree and its collaborators.

An EventEmitter owns a listener list; its ``event`` attribute is the
subscription function handed out to consumers. Subscribing returns a
Disposable that removes the listener again.
"""

import logging
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
Listener = Callable[[Any], Any]


class Disposable:
    """Releases a resource exactly once."""

    def __init__(self, on_dispose: Optional[Callable[[], Any]] = None):
        self._on_dispose = on_dispose
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._on_dispose is not None:
            self._on_dispose()
            self._on_dispose = None

    @classmethod
    def from_disposables(cls, disposables: Iterable[Any]) -> "Disposable":
        """Combine several disposables into one."""
        items = list(disposables)

        def _dispose_all():
            for item in items:
                item.dispose()

        return cls(_dispose_all)


class EventEmitter(Generic[T]):
    """Synchronous event emitter with reentrancy protection.

    ``fire`` delivers the payload to every listener before returning.
    A fire issued from inside a listener of the same emitter is queued and
    delivered once the current delivery finishes. Within one dispatch cycle
    each payload is delivered at most once, so a listener that fires the
    same payload again cannot loop forever.
    """

    def __init__(self):
        self._listeners: List[Listener] = []
        self._dispatching = False
        self._queue: List[Any] = []
        self._delivered: List[Any] = []
        self._disposed = False

    def event(self, listener: Listener) -> Disposable:
        """Subscribe a listener.

        Args:
            listener: Callable receiving the fired payload

        Returns:
            Disposable removing the listener
        """
        if self._disposed:
            return Disposable()
        self._listeners.append(listener)

        def _remove():
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return Disposable(_remove)

    def fire(self, payload: Optional[T] = None) -> None:
        if self._disposed:
            return

        if self._dispatching:
            if self._seen(payload, self._delivered) or self._seen(payload, self._queue):
                logger.debug("Dropping reentrant fire for %r", payload)
                return
            self._queue.append(payload)
            return

        self._dispatching = True
        self._queue.append(payload)
        try:
            while self._queue:
                current = self._queue.pop(0)
                self._delivered.append(current)
                self._deliver(current)
        finally:
            self._dispatching = False
            self._queue.clear()
            self._delivered.clear()

    def _deliver(self, payload: Any) -> None:
        # Snapshot so listeners may unsubscribe during delivery
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception as exc:
                logger.error("Event listener %r failed: %s", listener, exc, exc_info=True)

    @staticmethod
    def _seen(payload: Any, payloads: List[Any]) -> bool:
        return any(item is payload for item in payloads)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def dispose(self) -> None:
        self._disposed = True
        self._listeners.clear()
        self._queue.clear()
