"""Observer list shared by the editor service and the learning sequencer."""

import logging
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Keeps a list of observers and calls a named callback on each of them.

    The list is copied under the lock and the lock is released before any
    callback runs, so an observer may register or unregister while being
    notified. A failing observer is logged and does not stop the others.

    Example:
        ```python
        self._observers = ObserverManager[EditObserver](observer_type_name="edit")
        self._observers.notify("on_edit_event", EditEvent.ENTITY_UPDATED, kind, entity_id)
        ```
    """

    def __init__(self, observer_type_name: str = "observer"):
        """
        Initialize the observer manager.

        Args:
            observer_type_name: Name used in log messages (e.g., "edit", "learning")
        """
        self._observers: list[T] = []
        self._lock = Lock()
        self._observer_type_name = observer_type_name

    def register(self, observer: T) -> None:
        """Register an observer; registering twice is a no-op."""
        with self._lock:
            if observer in self._observers:
                logger.debug(f"{self._observer_type_name} observer already registered: {observer}")
                return
            self._observers.append(observer)
        logger.debug(f"Registered {self._observer_type_name} observer: {observer}")

    def unregister(self, observer: T) -> None:
        """Unregister an observer, warning if it was never registered."""
        with self._lock:
            if observer not in self._observers:
                logger.warning(
                    f"Attempted to unregister unknown {self._observer_type_name} observer: {observer}"
                )
                return
            self._observers.remove(observer)

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Call ``callback_name`` on every registered observer.

        Args:
            callback_name: Observer method to call (e.g., 'on_edit_event')
            *args: Positional arguments for the callback
            **kwargs: Keyword arguments for the callback
        """
        with self._lock:
            observers = list(self._observers)

        for observer in observers:
            try:
                getattr(observer, callback_name)(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Error notifying {self._observer_type_name} observer {observer} "
                    f"via {callback_name}: {e}",
                    exc_info=True,
                )

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)

    def __contains__(self, observer: T) -> bool:
        with self._lock:
            return observer in self._observers
