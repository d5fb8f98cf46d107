"""Session store.

Tracks the signed-in identity reported by the identity provider and the
profile loaded for it, and publishes both as a single snapshot.
"""

import asyncio
from typing import Any, Callable, Coroutine

import logfire

from uniprofile.application.data_access import ProfileDataAccess
from uniprofile.application.lifecycle import ManagedSubscription
from uniprofile.application.retry import RetryExecutor
from uniprofile.domain.model import Identity, Profile
from uniprofile.domain.service import IdentityProvider, Unsubscribe
from uniprofile.domain.value import Result, RetryPolicy
from uniprofile.domain.value.common import ValueObject


class SessionSnapshot(ValueObject):
    """What the session knows at one point in time.

    Attributes:
        identity: Signed-in identity, None when signed out
        profile: Profile of the identity once loaded
        profile_loaded: Whether ``profile`` belongs to ``identity``
        load_failed: Profile could not be loaded after all retries; the
            session is being signed out
    """

    identity: Identity | None = None
    profile: Profile | None = None
    profile_loaded: bool = False
    load_failed: bool = False


SessionListener = Callable[[SessionSnapshot], None]


class SessionStore(ManagedSubscription):
    """Observes the identity provider for the lifetime of the app.

    Each identity change starts a new generation. Profile loads are tagged
    with the generation they were issued in and their results are dropped
    if a newer change happened meanwhile.
    """

    def __init__(
        self,
        identity_provider: IdentityProvider,
        data_access: ProfileDataAccess,
        retry_policy: RetryPolicy,
    ) -> None:
        """Initialize session store.

        Args:
            identity_provider: Identity provider to observe
            data_access: Data access facade for profile loads and sign-out
            retry_policy: Policy for profile loads after an identity change
        """
        super().__init__()
        self.identity_provider = identity_provider
        self.data_access = data_access
        self.executor = RetryExecutor(retry_policy)

        self._snapshot = SessionSnapshot()
        self._generation = 0
        self._listeners: list[SessionListener] = []
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe: Unsubscribe | None = None

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a snapshot listener.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def refresh_profile(self) -> Result[Profile]:
        """Re-fetch the profile of the current identity.

        The current profile stays visible while refreshing; a failed refresh
        leaves it unchanged.
        """
        identity = self._snapshot.identity
        if identity is None:
            # Reported by the fetch itself as a missing uid
            return await self.data_access.fetch_profile(None)

        generation = self._generation
        with logfire.span("session.refresh_profile", uid=identity.uid):
            result = await self.data_access.fetch_profile(identity.uid)
            if generation != self._generation:
                logfire.info("Discarding stale profile refresh", uid=identity.uid)
            elif result.ok:
                self._publish(
                    SessionSnapshot(
                        identity=identity, profile=result.value, profile_loaded=True
                    )
                )
            return result

    async def wait_until_idle(self) -> None:
        """Wait for pending profile loads, including ones they spawn."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _acquire(self) -> None:
        self._unsubscribe = self.identity_provider.on_state_change(
            self._on_state_change
        )
        logfire.info("Session store subscribed to identity provider")

    def _release(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        for task in list(self._tasks):
            task.cancel()
        logfire.info("Session store released", pending_loads=len(self._tasks))

    def _on_state_change(self, identity: Identity | None) -> None:
        self._generation += 1
        generation = self._generation

        if identity is None:
            logfire.info("Session cleared", generation=generation)
            self._publish(SessionSnapshot())
            return

        logfire.info("Session identity set", uid=identity.uid, generation=generation)
        self._publish(SessionSnapshot(identity=identity))
        self._spawn(self._load_profile(generation, identity))

    async def _load_profile(self, generation: int, identity: Identity) -> None:
        with logfire.span("session.load_profile", uid=identity.uid):
            result = await self.executor.run(
                lambda: self.data_access.fetch_profile(identity.uid),
                name="fetch_profile",
            )

            if generation != self._generation:
                logfire.info(
                    "Discarding stale profile load",
                    uid=identity.uid,
                    generation=generation,
                    current_generation=self._generation,
                )
                return

            if result.ok:
                self._publish(
                    SessionSnapshot(
                        identity=identity, profile=result.value, profile_loaded=True
                    )
                )
                return

            logfire.error(
                "Profile load failed, signing out", uid=identity.uid, error=result.message
            )
            self._publish(SessionSnapshot(identity=identity, load_failed=True))
            logout = await self.data_access.logout()
            if not logout.ok:
                logfire.error("Sign-out after failed profile load failed", error=logout.message)

    def _publish(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logfire.error(
                "Profile load task crashed",
                error=str(task.exception()),
                _exc_info=task.exception(),
            )
