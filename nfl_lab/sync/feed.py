from typing import Callable, Dict, Generic, Optional, TypeVar

from loguru import logger

T = TypeVar("T")


class SnapshotFeed(Generic[T]):
    """Push-based delivery of full-replacement snapshots.

    Subscribers registered after a first publish receive the latest
    snapshot immediately.
    """

    def __init__(self, name: str):
        self.name = name
        self.latest: Optional[T] = None
        self._subscribers: Dict[int, Callable[[T], None]] = {}
        self._next_token = 0

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Registers `callback` and returns a handle that unregisters it."""
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = callback

        if self.latest is not None:
            self._deliver(callback, self.latest)

        def unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return unsubscribe

    def publish(self, snapshot: T) -> None:
        self.latest = snapshot
        for callback in list(self._subscribers.values()):
            self._deliver(callback, snapshot)

    def _deliver(self, callback: Callable[[T], None], snapshot: T) -> None:
        try:
            callback(snapshot)
        except Exception:
            logger.exception(f"Subscriber of the {self.name} feed failed.")

    def __len__(self) -> int:
        return len(self._subscribers)
