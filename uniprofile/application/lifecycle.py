"""Owned long-lived subscriptions.

Process-wide listeners (identity provider, hardware back button) are held by
explicit handles that are acquired once and released once:

    async with session_store:
        ...  # subscribed
    # released, also when the block raised
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self


class ManagedSubscription(ABC):
    """Base for subscriptions with a strict start/stop pairing.

    ``start`` may be called once; ``stop`` releases exactly once and is a
    no-op afterwards or when never started.
    """

    def __init__(self) -> None:
        self._started = False
        self._stopped = False

    @property
    def active(self) -> bool:
        return self._started and not self._stopped

    def start(self) -> None:
        if self._started:
            raise RuntimeError(f"{type(self).__name__} already started")
        self._acquire()
        self._started = True

    def stop(self) -> None:
        if not self._started or self._stopped:
            return
        self._stopped = True
        self._release()

    @abstractmethod
    def _acquire(self) -> None:
        pass

    @abstractmethod
    def _release(self) -> None:
        pass

    async def __aenter__(self) -> Self:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
