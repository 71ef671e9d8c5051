"""
Hydration: reading the persisted session back at start-up.

Hydration completes when the storage read completes, never on a timer.
``has_hydrated`` flips only after the overlay decision is made, so a
consumer that sees ``has_hydrated`` also sees the restored session.
"""

import asyncio
from typing import Optional

from propdesk.logger import get_logger
from propdesk.session.models import PersistedSession
from propdesk.session.state import AuthSession
from propdesk.session.store import PersistedStore

logger = get_logger(__name__)


class HydrationCoordinator:
    """Runs the one-shot store read for a session."""

    def __init__(self, session: AuthSession, store: PersistedStore):
        self.session = session
        self.store = store
        self._done = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self.restored = False

    @property
    def done(self) -> bool:
        return self._done.is_set()

    async def _read(self) -> Optional[PersistedSession]:
        try:
            return await asyncio.to_thread(self.store.read)
        except Exception as e:
            logger.warning(f"Persisted session read failed, treating as absent: {e}")
            return None

    async def _run(self) -> bool:
        persisted = await self._read()

        if persisted is not None:
            self.restored = self.session.overlay(persisted)
            if self.restored:
                logger.debug(
                    f"Restored session (authenticated={self.session.is_authenticated})"
                )

        self.session.set_has_hydrated(True)
        self._done.set()
        return self.restored

    async def hydrate(self) -> bool:
        """
        Read the store and seed the session, at most once.

        Returns True if persisted values were applied to the session.
        Concurrent and repeated calls share the first run's result.
        """
        if self._task is None:
            self._task = asyncio.create_task(self._run())
        return await asyncio.shield(self._task)

    async def wait_hydrated(self) -> None:
        await self._done.wait()
